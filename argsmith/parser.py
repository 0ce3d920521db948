"""
Argsmith parser session: own the tokens, create definitions, run the final pass.

What this module provides
- Parser: one per process invocation. It owns
  • the token stream (raw tokens + consumed markers),
  • the uniqueness registry (flags/keys in use, seeded with the reserved "h"/"help"),
  • the documentation registry (one entry per parsed definition, in order),
  • the help-mode flag (set at construction when "--help" or "-h" is present).

Quick start
    from argsmith import Parser, Int32

    parser = Parser()                       # defaults to sys.argv
    verbose = parser.check().flag("v").key("verbose").description("Talk more").parse()
    depth = parser.value(Int32).flag("d").key("depth").default_value(4).parse()
    names = parser.list(str).key("names").required().parse()
    parser.finalize()                       # prints help and exits 0, or rejects leftovers

Runtime options
- shell: when True, faults are printed on stderr and errors exit with status 1;
  when False (default), errors are raised and warnings go through warnings.warn.
- fancy: render faults inside a panel.
- colorful: style help and faults (palette overridable through __main__.__styles__).

Lifecycle
- finalize() must run exactly once, after every definition was parsed. Defining
  or finalizing again afterwards raises FinalizedParserError.
"""
import os.path
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .arguments import Definition, Kind
from .faults import *
from .lookup import Lookup
from .registries import Manual, Uniqueness
from .tokens import HELP_FLAG, HELP_KEY, TokenStream, flagstr, keystr
from .utils import *

console = Console()


class Parser:
    """
    Command-line argument parser session.

    Parameters
    - tokens (positional-only):
      • Unset: use sys.argv.
      • str: full command line split shell-style (program name first).
      • Iterable[str]: full argument vector (program name first).
    - shell, fancy, colorful (keyword-only): see module documentation.

    Raises
    - TypeError: when tokens is not Unset/str/Iterable[str].
    """

    def __init__(self, tokens=Unset, /, *, shell=False, fancy=False, colorful=True):
        if tokens is Unset:
            tokens = sys.argv
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif not isinstance(tokens, Iterable):
            raise TypeError("Parser() argument must be a string or an iterable of strings")

        self._stream = TokenStream(tokens)
        self._uniqueness = Uniqueness((HELP_FLAG,), (HELP_KEY,))
        self._manual = Manual()
        self._lookup = Lookup(self)
        self._help = self._stream.requested(keystr(HELP_KEY), flagstr(HELP_FLAG))
        self._finalized = False

        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

    @property
    def tokens(self):
        return self._stream.tokens

    @property
    def prog(self):
        """Program name for messages: basename of the first token, or "<argsmith>"."""
        return os.path.basename(self._stream.program or "") or "<argsmith>"

    @property
    def help(self):
        return self._help

    @property
    def finalized(self):
        return self._finalized

    @property
    def documentation(self):
        return self._manual.entries

    @property
    def flags(self):
        return self._uniqueness.flags

    @property
    def keys(self):
        return self._uniqueness.keys

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options merged in.
        """
        trigger(fault, **options, parser=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def _ensure_open(self):
        if self._finalized:
            self.trigger(FinalizedParserError(
                "parser was already finalized",
                title="finalized parser",
                code=FaultCode.FINALIZED_PARSER,
                hint="define every argument before calling finalize(), and call it once",
                docs=getdoc(FaultCode.FINALIZED_PARSER)
            ))

    def define(self, kind, type=Unset, /):
        """
        Create a definition of the given kind ("check", "value", "list" or a Kind).

        The type (a codec, or str/int/float) is ignored by checks and defaults to str.
        """
        self._ensure_open()
        return Definition(self, kind, type)

    def check(self):
        return self.define(Kind.CHECK)

    def value(self, type=str, /):
        return self.define(Kind.VALUE, type)

    def list(self, type=str, /):
        return self.define(Kind.LIST, type)

    def finalize(self):
        """
        Run the final pass: render help or reject unconsumed tokens.

        behavior
        - help mode: print the help table to stdout and exit with status 0.
        - otherwise: the first unconsumed token after the program name triggers
          UnrecognizedTokenError naming it verbatim.

        returns
        - True when every token was consumed ("ready to run").
        """
        self._ensure_open()
        self._finalized = True

        if self._help:
            console.print(self._manual.render(
                colorful=self.colorful,
                styles=getattr(__import__("__main__"), "__styles__", {})
            ))
            sys.exit(0)

        for index, token in self._stream.pending():
            self.trigger(UnrecognizedTokenError(
                "unrecognized argument %r" % token,
                title="unrecognized argument",
                code=FaultCode.UNRECOGNIZED_TOKEN,
                hint="try '%s --help' to see the accepted arguments" % self.prog,
                token=token,
                index=index,
                docs=getdoc(FaultCode.UNRECOGNIZED_TOKEN)
            ))
        return True

    def __repr__(self):
        return f"parser(prog={self.prog!r}, help={self._help!r}, definitions={len(self._manual)})"


__all__ = (
    "Parser",
)

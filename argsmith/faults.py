"""
Argsmith faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings), grouped by domain (definitions, lookups, final pass).
- ParserException / ParserWarning: base types that carry message + options and
  know how to render themselves as a short, labeled, actionable diagnostic.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Label-first messages: every message names the argument it is about
  ("--dhoom (-d)") or the literal offending token.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parser calls Parser.trigger(fault, **context), which merges its runtime options.
- In non-shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, faults are rendered on stderr via rich and errors exit with status 1.
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - definitions (2110x)
      • DUPLICATE_DEFINITION, MALFORMED_DEFINITION, FINALIZED_PARSER
    - lookups and resolution (2111x)
      • MISSING_VALUE, MISSING_LIST_VALUES, INVALID_OPTION, MISSING_REQUIRED,
        CONVERSION_FAILURE
    - final pass (2112x)
      • UNRECOGNIZED_TOKEN
    - warnings (22xxx)
      • EXTRA_VALUES

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired (e.g., to shorter labels).
    """
    # --- definition errors (21xxx) ---
    DUPLICATE_DEFINITION        = 21101
    MALFORMED_DEFINITION        = 21102
    FINALIZED_PARSER            = 21103

    # --- lookup/resolution errors (21xxx) ---
    MISSING_VALUE               = 21111
    MISSING_LIST_VALUES         = 21112
    INVALID_OPTION              = 21113
    MISSING_REQUIRED            = 21114
    CONVERSION_FAILURE          = 21115

    # --- final pass errors (21xxx) ---
    UNRECOGNIZED_TOKEN          = 21121

    # --- warnings (22xxx) ---
    EXTRA_VALUES                = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, kind, palette):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ <prog> — <code> | <Title> ]"
    - body: the message, then " → hint" and an optional docs line.
    - fancy: the body is wrapped in a Panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if options.get("colorful") else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not options.get("colorful"):
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    parser = options.get("parser")
    prog = text(getattr(main, "__prog__", getattr(parser, "prog", "<argsmith>")), styler("prog-name"))

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
        " | ",
        text(str(options.get("title", kind)).title(), styler(kind + "-title")),
        " ]"
    )
    renders = [text(fault.message, styler(kind + "-message"))]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
    if docs := options.get("docs"):
        renders.append(text(docs, styler("docs")))

    if options.get("fancy"):
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class ParserException(Exception):
    """
    base class of every argsmith error.

    attributes
    - message: the one-sentence description shown to the user.
    - options: read-only mapping of rendering flags and context
      (parser, shell, fancy, colorful, title, code, hint, docs, label, token, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, "error", {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "underline #00E5FF dim",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateDefinitionError(ParserException): ...
class MalformedDefinitionError(ParserException): ...
class FinalizedParserError(ParserException): ...
class MissingValueError(ParserException): ...
class MissingListValuesError(ParserException): ...
class InvalidOptionError(ParserException): ...
class MissingRequiredError(ParserException): ...
class ConversionFailureError(ParserException): ...
class UnrecognizedTokenError(ParserException): ...


class ParserWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, "warning", {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs": "underline #FFB400 dim",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ExtraValuesWarning(ParserWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised and warnings are emitted through the warnings module.

    typical options
    - parser, shell, fancy, colorful, title, code, hint, docs, and any other
      context the reporter may want to show (e.g., label/token).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParserException",
    "DuplicateDefinitionError",
    "MalformedDefinitionError",
    "FinalizedParserError",
    "MissingValueError",
    "MissingListValuesError",
    "InvalidOptionError",
    "MissingRequiredError",
    "ConversionFailureError",
    "UnrecognizedTokenError",
    "ParserWarning",
    "ExtraValuesWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)

"""
Argsmith lookup engine: resolve one definition against the token stream.

Shared algorithm (all kinds)
1. Claim the flag, then the key, in the uniqueness registry. A duplicate is a
   DuplicateDefinitionError raised immediately, independent of token matching.
2. In help mode, stop here: nothing is found and nothing is consumed.
3. Scan unconsumed tokens from index 1; a token matches when it equals "-<flag>"
   or "--<key>". Only the first match counts (no multi-occurrence semantics).

Kind-specific consumption
- indicator: consume the matched token.
- value: consume the matched token and the single value token after it; a
  further run of value tokens is consumed and discarded with an ExtraValuesWarning.
- list: consume the matched token and the whole run of value tokens after it.

Results are Match(found, raw) tuples where raw is None, a token, or a tuple of tokens.
"""
from collections import namedtuple

from .faults import *
from .tokens import flagstr, keystr, label

Match = namedtuple("Match", ("found", "raw"))


class Lookup:
    """
    Lookup engine bound to one parser.

    The parser owns the token stream and the uniqueness registry; faults are
    surfaced through parser.trigger so shell/fancy/colorful options apply.
    """

    def __init__(self, parser, /):
        self._parser = parser

    def _claim(self, flag, key):
        uniqueness = self._parser._uniqueness  # NOQA: owned by the parser
        if flag is not None and not uniqueness.claim_flag(flag):
            self._parser.trigger(DuplicateDefinitionError(
                "flag %r is already in use" % flagstr(flag),
                title="duplicate definition",
                code=FaultCode.DUPLICATE_DEFINITION,
                hint="pick another flag for %r; 'h' is reserved for help" % label(flag, key),
                label=label(flag, key),
                flag=flag,
                docs=getdoc(FaultCode.DUPLICATE_DEFINITION)
            ))
        if key is not None and not uniqueness.claim_key(key):
            self._parser.trigger(DuplicateDefinitionError(
                "key %r is already in use" % keystr(key),
                title="duplicate definition",
                code=FaultCode.DUPLICATE_DEFINITION,
                hint="pick another key for %r; 'help' is reserved" % label(flag, key),
                label=label(flag, key),
                key=key,
                docs=getdoc(FaultCode.DUPLICATE_DEFINITION)
            ))

    def _find(self, flag, key):
        """
        claim the names, then return the index of the first matching token (or None).
        """
        self._claim(flag, key)

        if self._parser.help:
            return None

        candidates = set()
        if flag is not None:
            candidates.add(flagstr(flag))
        if key is not None:
            candidates.add(keystr(key))

        for index, token in self._parser._stream.pending():  # NOQA: owned by the parser
            if token in candidates:
                self._parser._stream.consume(index)  # NOQA: owned by the parser
                return index
        return None

    def indicator(self, flag, key, /):
        return Match(self._find(flag, key) is not None, None)

    def value(self, flag, key, /):
        stream = self._parser._stream  # NOQA: owned by the parser
        if (index := self._find(flag, key)) is None:
            return Match(False, None)

        if not (run := stream.run(index + 1)):
            self._parser.trigger(MissingValueError(
                "missing value for %r" % label(flag, key),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                hint="pass a value right after it (for example: %s <value>)" % stream[index],
                label=label(flag, key),
                token=stream[index],
                docs=getdoc(FaultCode.MISSING_VALUE)
            ))

        value, *extras = run
        for position in run:
            stream.consume(position)

        if extras:
            self._parser.trigger(ExtraValuesWarning(
                "found multiple values for %r when only one is expected, ignoring %s" % (
                    label(flag, key),
                    ", ".join(repr(stream[position]) for position in extras)
                ),
                title="extra values",
                code=FaultCode.EXTRA_VALUES,
                hint="pass a single value (for example: %s %s)" % (stream[index], stream[value]),
                label=label(flag, key),
                tokens=tuple(stream[position] for position in extras),
                docs=getdoc(FaultCode.EXTRA_VALUES)
            ))

        return Match(True, stream[value])

    def list(self, flag, key, /):
        stream = self._parser._stream  # NOQA: owned by the parser
        if (index := self._find(flag, key)) is None:
            return Match(False, None)

        if not (run := stream.run(index + 1)):
            self._parser.trigger(MissingListValuesError(
                "missing value(s) for %r" % label(flag, key),
                title="missing values",
                code=FaultCode.MISSING_LIST_VALUES,
                hint="pass one or more values right after it (for example: %s <value> <value>)" % stream[index],
                label=label(flag, key),
                token=stream[index],
                docs=getdoc(FaultCode.MISSING_LIST_VALUES)
            ))

        for position in run:
            stream.consume(position)
        return Match(True, tuple(stream[position] for position in run))


__all__ = (
    "Match",
    "Lookup",
)

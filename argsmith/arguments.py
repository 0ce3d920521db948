r"""
Argsmith argument definitions and parsed arguments.

Overview
- Parsed arguments (closed set of variants, selected by Kind)
  • Check: presence-only argument, e.g. -t/--test.
  • Value[_T]: single typed value, optionally defaulted and/or restricted to options.
  • List[_T]: ordered sequence of typed values, optionally defaulted.
  Every variant carries its label ("--key (-f)") and a presence boolean; bool(x) is the presence.

- Definition (builder)
  • Created by the parser (parser.check(), parser.value(T), parser.list(T) or parser.define(kind, T)).
  • Chainable configurators, each callable once per definition:
      flag(char), key(word), description(text), required(),
      default_value(value) [Value], default_list(values) [List], options(values) [Value].
  • parse() registers documentation, looks the names up in the token stream, applies the
    default/options/required rules and returns the parsed argument.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the fields
    declared in __introspectable__ as read-only properties (see utils.mirror).

Resolution rules (parse)
1. A flag or a key must be configured.
2. A documentation entry is registered, whether or not help was requested.
3. The lookup engine claims the names and consumes matching tokens (nothing in help mode).
4. Check: presence = found.
   Value: found → decoded token; otherwise the default (present iff a default exists);
          with options, the resolved value must be one of them (not checked in help mode).
   List: found → every consumed token decoded in order; otherwise the default list
         (present iff a default list exists).
5. required() arguments that are not present fail (not checked in help mode).

Quick example:
    >>> parser = Parser(["prog", "-d", "7"])
    >>> dhoom = parser.value(Int32).flag("d").key("dhoom").default_value(4).parse()
    >>> dhoom.value
    7
"""
import functools
import operator
import re
from collections.abc import Iterable, Set
from enum import Enum

from .conversions import resolve
from .faults import *
from .registries import Entry
from .tokens import label
from .utils import *


class Kind(Enum):
    CHECK = "check"
    VALUE = "value"
    LIST = "list"


class ArgumentType(type):
    """
    Metaclass that turns argument classes into introspectable, read-only records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printers.
    - Seal classes built with sealed=True, keeping the set of variants closed.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages and representations.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - value(label='--dhoom (-d)', present=True, value=7)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                """
                Disallow subclassing of sealed argument classes.
                """
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self

    def __init__(cls, name, bases, namespace, **options):
        super().__init__(name, bases, namespace)


class Check(metaclass=ArgumentType, sealed=True):
    """
    Presence-only argument. Its absence is meaningful, never an error.
    """
    __introspectable__ = ("label", "present")
    __slots__ = ("_label", "_present")

    kind = Kind.CHECK

    def __init__(self, label, present):
        self._label = label
        self._present = bool(present)

    def __bool__(self):
        return self._present


class Value(metaclass=ArgumentType, sealed=True):
    """
    Single typed value.

    - present: a token matched, or a default was configured.
    - value: the decoded token, the default, or None when not present.
    """
    __introspectable__ = ("label", "present", "value")
    __slots__ = ("_label", "_present", "_value")

    kind = Kind.VALUE

    def __init__(self, label, value, present):
        self._label = label
        self._value = value if present else None
        self._present = bool(present)

    def __bool__(self):
        return self._present


class List(metaclass=ArgumentType, sealed=True):
    """
    Ordered sequence of typed values (possibly empty).

    - present: a token matched, or a default list was configured.
    - values: tuple of decoded tokens or the default list.
    """
    __introspectable__ = ("label", "present", "values")
    __slots__ = ("_label", "_present", "_values")

    kind = Kind.LIST

    def __init__(self, label, values, present):
        self._label = label
        self._values = tuple(values)
        self._present = bool(present)

    def __bool__(self):
        return self._present

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __getitem__(self, index):
        return self._values[index]


def _collect(definition, name, values, /):
    """
    Internal: validate and normalize an iterable of typed values (default list, options).

    - values must be an iterable (but not a plain string).
    - every item must be accepted by the definition's codec.
    - options reject duplicates unless given as a Set; a Set is ordered when its
      items are comparable so help output is deterministic.

    Returns
    - tuple of values, in display order.
    """
    if not isinstance(values, Iterable) or isinstance(values, str):
        definition._fail("%s() argument must be an iterable of %s values" % (name, definition.codec.name))

    items = list(values)
    for item in items:
        if not definition.codec.accepts(item):
            definition._fail("%s() value %r is not a valid %s" % (name, item, definition.codec.name))

    if isinstance(values, Set):
        try:
            items = sorted(items)
        except TypeError:
            pass
    elif name == "options" and len(set(items)) != len(items):
        definition._fail("options() cannot contain duplicates")

    return tuple(items)


class Definition(metaclass=ArgumentType):
    """
    Per-argument builder bound to one parser.

    Lifecycle
    - Created through the parser; configured by chaining; parse() once.
    - A configurator invoked twice, invoked on the wrong kind of definition, or
      given a malformed name/value raises MalformedDefinitionError immediately.
    - After parse() the definition is spent; a second parse() is an error.
    """
    __introspectable__ = ("kind", "codec", "configuration")

    def __init__(self, parser, kind, codec=Unset, /):
        self._parser = parser
        self._kind = Kind(kind)
        self._codec = None if self._kind is Kind.CHECK else resolve(coalesce(codec, str))
        self._configuration = {}
        self._parsed = False

    def _fail(self, message, /, **options):
        self._parser.trigger(MalformedDefinitionError(
            message,
            title="malformed definition",
            code=FaultCode.MALFORMED_DEFINITION,
            hint=options.pop("hint", "fix the argument definition in the program source"),
            kind=self._kind.value,
            docs=getdoc(FaultCode.MALFORMED_DEFINITION),
            **options
        ))

    def _configure(self, name, value, /, *kinds):
        if kinds and self._kind not in kinds:
            self._fail("%s() is not supported by %s arguments" % (name, self._kind.value))
        if name in self._configuration:
            self._fail("%s() called twice for same argument" % name)
        if self._parsed:
            self._fail("%s() called after the argument was parsed" % name)
        self._configuration[name] = value
        return self

    def flag(self, flag, /):
        """Single-character short name, matched as "-<flag>"."""
        if not isinstance(flag, str) or len(flag) != 1:
            self._fail("flag() argument must be a single character, not %r" % (flag,))
        elif flag == "-":
            self._fail("dash character '-' is not a valid flag")
        elif flag.isspace():
            self._fail("whitespace is not a valid flag")
        return self._configure("flag", flag)

    def key(self, key, /):
        """Word-form long name, matched as "--<key>"."""
        if not isinstance(key, str) or not key:
            self._fail("key() argument must be a non-empty string, not %r" % (key,))
        elif key.startswith("-"):
            self._fail("key definition must not start with dashes '-'", hint="use key(%r)" % key.lstrip("-"))
        elif any(char.isspace() for char in key):
            self._fail("key definition must not contain whitespace")
        return self._configure("key", key)

    def description(self, description, /):
        if not isinstance(description, str):
            self._fail("description() argument must be a string")
        elif not (description := description.strip()):
            self._fail("description() argument cannot be empty")
        return self._configure("description", description)

    def required(self):
        """Fail when the argument resolves to nothing (not available for checks)."""
        return self._configure("required", True, Kind.VALUE, Kind.LIST)

    def default_value(self, value, /):
        if self._kind is Kind.VALUE and not self._codec.accepts(value):
            self._fail("default_value() value %r is not a valid %s" % (value, self._codec.name))
        return self._configure("default", value, Kind.VALUE)

    def default_list(self, values, /):
        if self._kind is Kind.LIST:
            values = _collect(self, "default_list", values)
        return self._configure("default", values, Kind.LIST)

    def options(self, values, /):
        if self._kind is Kind.VALUE:
            if not (values := _collect(self, "options", values)):
                self._fail("options() argument cannot be empty")
        return self._configure("options", values, Kind.VALUE)

    def _document(self):
        """render the documentation entry (text only, independent of help mode)."""
        configuration = self._configuration
        default = options = None

        if "default" in configuration:
            match self._kind:
                case Kind.VALUE:
                    default = self._codec.encode(configuration["default"])
                case Kind.LIST:
                    default = "[%s]" % ", ".join(map(self._codec.encode, configuration["default"]))
        if "options" in configuration:
            options = ", ".join(map(self._codec.encode, configuration["options"]))

        return Entry(
            configuration.get("flag"),
            configuration.get("key"),
            configuration.get("description"),
            default,
            options,
            configuration.get("required", False),
        )

    def _decode(self, token, name):
        try:
            return self._codec.decode(token)
        except ConversionFailureError as error:
            self._parser.trigger(ConversionFailureError(
                "cannot convert %r for %r to %s" % (token, name, self._codec.name),
                **{**error.options, "label": name}
            ))

    def parse(self):
        """
        Resolve the definition against the parser's tokens.

        Returns
        - Check | Value | List, depending on the kind.

        Raises (through the parser, see faults)
        - MalformedDefinitionError, FinalizedParserError, DuplicateDefinitionError,
          MissingValueError, MissingListValuesError, ConversionFailureError,
          InvalidOptionError, MissingRequiredError.
        """
        parser = self._parser
        configuration = self._configuration

        if self._parsed:
            self._fail("definition already parsed")
        parser._ensure_open()  # NOQA: parser-side guard

        flag = configuration.get("flag")
        key = configuration.get("key")
        if flag is None and key is None:
            self._fail("must specify either a key or flag, did you call flag() or key()?")

        self._parsed = True
        parser._manual.register(self._document())  # NOQA: owned by the parser
        name = label(flag, key)

        match self._kind:
            case Kind.CHECK:
                found, _ = parser._lookup.indicator(flag, key)  # NOQA: owned by the parser
                argument = Check(name, found)

            case Kind.VALUE:
                found, raw = parser._lookup.value(flag, key)  # NOQA: owned by the parser
                if found:
                    value = self._decode(raw, name)
                else:
                    value = configuration.get("default", Unset)

                present = found or value is not Unset
                if present and "options" in configuration and not parser.help:
                    if value not in configuration["options"]:
                        parser.trigger(InvalidOptionError(
                            "invalid option %r for %r" % (value, name),
                            title="invalid option",
                            code=FaultCode.INVALID_OPTION,
                            hint="choose one of: %s" % ", ".join(map(self._codec.encode, configuration["options"])),
                            label=name,
                            value=value,
                            options=configuration["options"],
                            docs=getdoc(FaultCode.INVALID_OPTION)
                        ))
                argument = Value(name, coalesce(value), present)

            case Kind.LIST:
                found, raw = parser._lookup.list(flag, key)  # NOQA: owned by the parser
                if found:
                    values = tuple(self._decode(token, name) for token in raw)
                else:
                    values = configuration.get("default", Unset)

                argument = List(name, coalesce(values, ()), found or values is not Unset)

            case _:
                raise RuntimeError("unreachable")

        if configuration.get("required", False) and not argument.present and not parser.help:
            parser.trigger(MissingRequiredError(
                "missing required argument %r" % name,
                title="missing required argument",
                code=FaultCode.MISSING_REQUIRED,
                hint="pass it (for example: %s <value>)" % name.split(" ")[0],
                label=name,
                docs=getdoc(FaultCode.MISSING_REQUIRED)
            ))

        return argument


__all__ = (
    "Kind",
    "Check",
    "Value",
    "List",
    "Definition",
)

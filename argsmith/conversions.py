"""
Argsmith value codecs: textual token ⇄ typed value.

Overview
- Codec: a named, stateless pair of pure functions
  • decode(text) -> value   (raises ConversionFailureError on malformed input)
  • encode(value) -> text   (total for accepted values; used to render help)
  • accepts(value) -> bool  (type/range check used to validate defaults and options)

- Built-in codecs
  • Text: any token, verbatim.
  • Char: exactly one character.
  • Int32 / UInt32 / Int64 / UInt64: decimal integers with an optional sign,
    range-checked against their width.
  • Float: Python float grammar; encoded with repr().

- resolve(type)
  • Accepts a Codec, or one of the builtins str/int/float (mapped to Text/Int64/Float).

Notes
- A token that begins with "-" never reaches a codec through the parser, since it
  is read as a flag or key; negative numbers can still be configured as defaults.
"""
import re

from .faults import ConversionFailureError, FaultCode, getdoc

_INTEGER = re.compile(r"[+-]?[0-9]+")


class Codec:
    """
    Stateless converter between a textual token and a typed value.

    Parameters
    - name: str, shown in messages and help ("int32", "text", ...).
    - decode: Callable[[str], T], raising ValueError on malformed text.
    - encode: Callable[[T], str].
    - accepts: Callable[[object], bool], membership test for the value domain.
    """
    __slots__ = ("_name", "_decode", "_encode", "_accepts")

    def __init__(self, name, decode, encode=str, accepts=lambda value: True):
        if not isinstance(name, str) or not name.strip():
            raise TypeError("Codec 'name' must be a non-empty string")
        if not callable(decode) or not callable(encode) or not callable(accepts):
            raise TypeError("Codec 'decode', 'encode' and 'accepts' must be callable")
        self._name = name.strip()
        self._decode = decode
        self._encode = encode
        self._accepts = accepts

    @property
    def name(self):
        return self._name

    def decode(self, text, /):
        """
        Convert a raw token into a typed value.

        Raises
        - ConversionFailureError: the token is not valid for this codec; the
          original ValueError is chained as the cause.
        """
        if not isinstance(text, str):
            raise TypeError(f"{self._name} decode() argument must be a string")
        try:
            return self._decode(text)
        except (ValueError, OverflowError) as error:
            raise ConversionFailureError(
                "cannot convert %r to %s" % (text, self._name),
                title="conversion failure",
                code=FaultCode.CONVERSION_FAILURE,
                hint="pass a value of type %s" % self._name,
                token=text,
                codec=self._name,
                docs=getdoc(FaultCode.CONVERSION_FAILURE),
            ) from error

    def encode(self, value, /):
        return self._encode(value)

    def accepts(self, value, /):
        return self._accepts(value)

    def __repr__(self):
        return f"codec({self._name!r})"


def _integer(name, low, high):
    def decode(text):
        if not _INTEGER.fullmatch(text):
            raise ValueError(f"invalid {name} literal: {text!r}")
        if not low <= (value := int(text)) <= high:
            raise ValueError(f"{name} out of range: {text!r}")
        return value

    def accepts(value):
        return isinstance(value, int) and not isinstance(value, bool) and low <= value <= high

    return Codec(name, decode, str, accepts)


def _char(text):
    if len(text) != 1:
        raise ValueError(f"expected exactly one character, got {len(text)}")
    return text


Text = Codec("text", str, str, lambda value: isinstance(value, str))
Char = Codec("char", _char, str, lambda value: isinstance(value, str) and len(value) == 1)
Int32 = _integer("int32", -2 ** 31, 2 ** 31 - 1)
UInt32 = _integer("uint32", 0, 2 ** 32 - 1)
Int64 = _integer("int64", -2 ** 63, 2 ** 63 - 1)
UInt64 = _integer("uint64", 0, 2 ** 64 - 1)
Float = Codec("float", float, repr, lambda value: isinstance(value, int | float) and not isinstance(value, bool))

_builtins = {
    str: Text,
    int: Int64,
    float: Float,
}


def resolve(type, /):
    """
    Return the codec for a codec instance or a supported builtin type.

    Raises
    - TypeError: the type has no registered codec.
    """
    if isinstance(type, Codec):
        return type
    try:
        return _builtins[type]
    except (KeyError, TypeError):
        raise TypeError(f"resolve() argument must be a codec or one of str, int, float, not {type!r}") from None


__all__ = (
    "Codec",
    "Text",
    "Char",
    "Int32",
    "UInt32",
    "Int64",
    "UInt64",
    "Float",
    "resolve",
)

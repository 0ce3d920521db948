"""
Argsmith token stream and token grammar.

Grammar (index 0 is the program name and never matched)
- flag token:  "-<char>"   e.g. "-t"
- key token:   "--<word>"  e.g. "--test"
- a token looks like a value iff it does not begin with "-"
- help is requested iff any token equals "--help" or "-h"

TokenStream
- Holds the raw tokens and a parallel "consumed" marker array.
- Consumption is monotonic: a consumed token is never un-consumed and never
  matched again, and it is excluded from the final unrecognized-token pass.
"""
HELP_FLAG = "h"
HELP_KEY = "help"


def isvalue(token, /):
    """Return True when the token reads as a value rather than a flag or key."""
    return not token.startswith("-")


def flagstr(flag, /):
    return "-" + flag


def keystr(key, /):
    return "--" + key


def label(flag=None, key=None, /):
    """
    Human-readable name of an argument, used in fault messages.

    - both:  "--key (-f)"
    - key:   "--key"
    - flag:  "-f"
    """
    if flag is not None and key is not None:
        return f"{keystr(key)} ({flagstr(flag)})"
    elif key is not None:
        return keystr(key)
    elif flag is not None:
        return flagstr(flag)
    raise ValueError("label() requires a flag or a key")


class TokenStream:
    __slots__ = ("_tokens", "_consumed")

    def __init__(self, tokens, /):
        self._tokens = tuple(tokens)
        if not all(isinstance(token, str) for token in self._tokens):
            raise TypeError("TokenStream() argument must be an iterable of strings")
        self._consumed = [False] * len(self._tokens)

    @property
    def tokens(self):
        return self._tokens

    @property
    def program(self):
        return self._tokens[0] if self._tokens else None

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, index):
        return self._tokens[index]

    def consumed(self, index, /):
        return self._consumed[index]

    def consume(self, index, /):
        if index < 1:
            raise IndexError("the program name cannot be consumed")
        self._consumed[index] = True

    def pending(self):
        """Yield (index, token) for every unconsumed token after the program name."""
        for index in range(1, len(self._tokens)):
            if not self._consumed[index]:
                yield index, self._tokens[index]

    def run(self, start, /):
        """
        Return the indices of the contiguous value tokens starting at start.

        The run stops at the first dash-prefixed token, an already consumed
        token, or the end of the stream.
        """
        indices = []
        for index in range(start, len(self._tokens)):
            if self._consumed[index] or not isvalue(self._tokens[index]):
                break
            indices.append(index)
        return indices

    def requested(self, *tokens):
        """Return True when any token after the program name equals one of tokens."""
        return any(token in tokens for token in self._tokens[1:])

    def __repr__(self):
        return f"token-stream({', '.join(repr(token) + ('*' if consumed else '') for token, consumed in zip(self._tokens, self._consumed))})"


__all__ = (
    "HELP_FLAG",
    "HELP_KEY",
    "isvalue",
    "flagstr",
    "keystr",
    "label",
    "TokenStream",
)

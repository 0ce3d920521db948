"""
Argsmith session registries.

Uniqueness
- Two monotonic sets (flags in use, keys in use). A claim either succeeds and
  records the name, or reports that an earlier definition already owns it.
- The parser seeds it with the reserved help flag/key ("h", "help").

Manual (documentation registry)
- Ordered list of Entry records, one per parsed definition, in definition order.
- Entries carry only what help needs: flag, key, description, the rendered
  default and options strings, and the required marker.
- render() builds the help table: the synthesized "--help or -h" row first, then
  one row per entry, labels aligned on the longest one, descriptions annotated with
  [REQUIRED], (Options: …) and (Default: …).
"""
from collections import defaultdict, namedtuple

from rich.console import Group
from rich.table import Table
from rich.text import Text

from .tokens import HELP_FLAG, HELP_KEY, flagstr, keystr
from .utils import mirror

Entry = namedtuple("Entry", ("flag", "key", "description", "default", "options", "required"))
Entry.__doc__ = """
Documentation of one argument definition.

- flag/key: raw names (None when not configured).
- description: str | None.
- default/options: pre-rendered strings (None when not configured).
- required: bool.
"""


class Uniqueness:
    __introspectable__ = ("flags", "keys")

    flags = mirror("flags")
    keys = mirror("keys")

    def __init__(self, flags=(), keys=()):
        self._flags = set(flags)
        self._keys = set(keys)

    def claim_flag(self, flag, /):
        """Record the flag; return False when it is already in use."""
        if flag in self._flags:
            return False
        self._flags.add(flag)
        return True

    def claim_key(self, key, /):
        """Record the key; return False when it is already in use."""
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def __repr__(self):
        return f"uniqueness(flags={sorted(self._flags)!r}, keys={sorted(self._keys)!r})"


def heading(flag, key, /):
    """Help-table label: "--key or -f", "--key" or "-f"."""
    if flag is not None and key is not None:
        return f"{keystr(key)} or {flagstr(flag)}"
    elif key is not None:
        return keystr(key)
    elif flag is not None:
        return flagstr(flag)
    raise ValueError("heading() requires a flag or a key")


def annotate(entry, /):
    """Description column text for an entry (description plus inline annotations)."""
    parts = []
    if entry.description:
        parts.append(entry.description)
    if entry.required:
        parts.append("[REQUIRED]")
    if entry.options is not None:
        parts.append(f"(Options: {entry.options})")
    if entry.default is not None:
        parts.append(f"(Default: {entry.default})")
    return " ".join(parts)


class Manual:
    __introspectable__ = ("entries",)

    entries = mirror("entries")

    def __init__(self):
        self._entries = []

    def register(self, entry, /):
        if not isinstance(entry, Entry):
            raise TypeError("register() argument must be an entry")
        if entry.flag is None and entry.key is None:
            raise ValueError("register() entry requires a flag or a key")
        self._entries.append(entry)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))

    def rows(self):
        """Yield (label, description) pairs in display order, help row first."""
        yield heading(HELP_FLAG, HELP_KEY), "Display this message"
        for entry in self._entries:
            yield heading(entry.flag, entry.key), annotate(entry)

    def render(self, *, colorful=True, styles=None):
        """
        Build the help renderable.

        Palette keys
        - help-title, label, description, required, annotation
        Overrides come from the styles mapping (the parser passes __main__.__styles__).
        """
        palette = defaultdict(str, {
            "help-title": "bold #FFFFFF",
            "label": "bold #22C55E",  # GREEN labels
            "description": "#D1D5DB",
            "required": "bold #EF4444",  # RED required marker
            "annotation": "#9CA3AF",  # Muted gray defaults/options
        } | (styles or {}))

        def styler(style):
            return palette[style] if colorful else ""

        table = Table(box=None, show_header=False, show_edge=False, pad_edge=False, padding=(0, 1, 0, 0))
        table.add_column("label", no_wrap=True, style=styler("label"))
        table.add_column("description", style=styler("description"))

        for name, description in self.rows():
            table.add_row(name + ":", self._highlight(description, styler))

        return Group(Text.assemble("\n", ("   [Help]", styler("help-title")), "\n"), table, Text(""))

    @staticmethod
    def _highlight(description, styler):
        # annotations are styled on top of the base description style
        text = Text(description)
        text.highlight_words(["[REQUIRED]"], styler("required"))
        text.highlight_regex(r"\((Options|Default): [^)]*\)", styler("annotation"))
        return text

    def __repr__(self):
        return f"manual({len(self._entries)} entries)"


__all__ = (
    "Entry",
    "Uniqueness",
    "Manual",
    "heading",
    "annotate",
)

"""Arena-backed string interning for issue fields.

Reports often contain tens of thousands of issues that share a handful of
file names, package names and messages. A ``StringStore`` keeps one handle
per distinct text so every issue built from the same text points at the
same ``InternedString``.

Usage::

    store = StringStore()
    a = store.intern("src/main.c")
    b = store.intern("src/main.c")
    assert a is b
    assert str(a) == "src/main.c"
"""

from __future__ import annotations


class InternedString:
    """Handle for a text stored in a ``StringStore``.

    Equality and hashing follow the decoded text; identity tells whether two
    handles came from the same store slot.
    """

    __slots__ = ("_text", "_index")

    def __init__(self, text: str, index: int = -1):
        self._text = text
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"InternedString({self._text!r}, index={self._index})"

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, InternedString):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)


class StringStore:
    """Growable table of distinct texts; one store per field category."""

    def __init__(self) -> None:
        self._table: list[str] = []
        self._handles: dict[str, InternedString] = {}

    def intern(self, text: str) -> InternedString:
        handle = self._handles.get(text)
        if handle is None:
            handle = InternedString(text, len(self._table))
            self._table.append(text)
            self._handles[text] = handle
        return handle

    def text_at(self, index: int) -> str:
        return self._table[index]

    def clear(self) -> None:
        self._table = []
        self._handles = {}

    def __contains__(self, text: object) -> bool:
        return text in self._handles

    def __len__(self) -> int:
        return len(self._table)

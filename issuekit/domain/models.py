from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator
from uuid import UUID

from issuekit.builder import paths
from issuekit.domain.interning import InternedString

UNDEFINED = "-"
EMPTY = ""

logger = logging.getLogger(__name__)


def to_non_negative_int(value: int | str | None) -> int:
    """Coerce a tool-reported number; anything unusable becomes 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    try:
        if isinstance(value, float):
            return max(int(value), 0)
        return max(int(str(value).strip()), 0)
    except (ValueError, OverflowError):
        logger.debug("Ignoring non-numeric value %r", value)
        return 0


def normalize_range(start: int, end: int) -> tuple[int, int]:
    """Clamp a (start, end) pair so that 0 <= start <= end.

    A zero side paired with a positive side collapses onto the positive
    value: (0, 3) and (3, 0) both become (3, 3).
    """
    start = max(start, 0)
    end = max(end, 0)
    if start == 0:
        return end, end
    if end == 0:
        return start, start
    if end < start:
        return end, start
    return start, end


class Severity(Enum):
    ERROR = "ERROR"
    WARNING_HIGH = "HIGH"
    WARNING_NORMAL = "NORMAL"
    WARNING_LOW = "LOW"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def is_at_least(self, other: Severity) -> bool:
        return self.rank >= other.rank

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def guess_from_string(cls, text: str | None, default: Severity | None = None) -> Severity:
        """Map the severity vocabularies tools use (High, minor, CRITICAL, ...)."""
        fallback = default if default is not None else cls.WARNING_NORMAL
        if not text:
            return fallback
        key = str(text).strip().lower()
        if key.upper() in cls.__members__:
            return cls[key.upper()]
        return _SEVERITY_ALIASES.get(key, fallback)


_SEVERITY_RANK = {
    Severity.WARNING_LOW: 1,
    Severity.WARNING_NORMAL: 2,
    Severity.WARNING_HIGH: 3,
    Severity.ERROR: 4,
}

_SEVERITY_ALIASES = {
    "error": Severity.ERROR,
    "critical": Severity.ERROR,
    "fatal": Severity.ERROR,
    "blocker": Severity.ERROR,
    "high": Severity.WARNING_HIGH,
    "major": Severity.WARNING_HIGH,
    "medium": Severity.WARNING_NORMAL,
    "moderate": Severity.WARNING_NORMAL,
    "normal": Severity.WARNING_NORMAL,
    "warning": Severity.WARNING_NORMAL,
    "low": Severity.WARNING_LOW,
    "minor": Severity.WARNING_LOW,
    "info": Severity.WARNING_LOW,
    "note": Severity.WARNING_LOW,
    "negligible": Severity.WARNING_LOW,
}


@dataclass(frozen=True)
class LineRange:
    start: int
    end: int

    def __post_init__(self) -> None:
        start, end = normalize_range(to_non_negative_int(self.start), to_non_negative_int(self.end))
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end


def _as_range(value: LineRange | tuple[int, int]) -> LineRange | None:
    """Coerce a range or (start, end) pair; None when it names no line."""
    if not isinstance(value, LineRange):
        try:
            start, end = value
        except (TypeError, ValueError):
            logger.debug("Ignoring malformed line range %r", value)
            return None
        value = LineRange(start, end)
    if value.start == 0:
        return None
    return value


class LineRangeList:
    """Additional line ranges of an issue, kept in insertion order.

    Pairs that do not describe at least one line, such as (0, 0) or
    ("n/a", None), are skipped.
    """

    def __init__(self, ranges: Iterable[LineRange | tuple[int, int]] = ()):
        self._ranges: list[LineRange] = []
        self.add_all(ranges)

    def add(self, line_range: LineRange | tuple[int, int]) -> None:
        line_range = _as_range(line_range)
        if line_range is not None:
            self._ranges.append(line_range)

    def add_all(self, ranges: Iterable[LineRange | tuple[int, int]]) -> None:
        for r in ranges:
            self.add(r)

    def remove_first(self) -> LineRange:
        return self._ranges.pop(0)

    def contains(self, line: int) -> bool:
        return any(r.contains(line) for r in self._ranges)

    def copy(self) -> LineRangeList:
        return LineRangeList(self._ranges)

    def as_tuple(self) -> tuple[LineRange, ...]:
        return tuple(self._ranges)

    def __getitem__(self, index: int) -> LineRange:
        return self._ranges[index]

    def __iter__(self) -> Iterator[LineRange]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineRangeList):
            return NotImplemented
        return self._ranges == other._ranges

    def __repr__(self) -> str:
        return f"LineRangeList({self._ranges!r})"


@dataclass(frozen=True)
class Issue:
    """One normalized finding. Create instances with ``IssueBuilder``.

    ``file_name_ref``, ``package_name_ref`` and ``message_ref`` hold the
    interned handles; the ``file_name``, ``package_name`` and ``message``
    properties return their text.
    """

    id: UUID = field(compare=False)
    path_name: str
    file_name_ref: InternedString
    line_start: int
    line_end: int
    column_start: int
    column_end: int
    line_ranges: tuple[LineRange, ...]
    category: str
    type: str
    package_name_ref: InternedString
    module_name: str
    severity: Severity
    message_ref: InternedString
    description: str
    origin: str
    origin_name: str
    reference: str
    fingerprint: str
    additional_properties: Any

    def __hash__(self) -> int:
        return hash((self.file_name_ref, self.line_start, self.line_end, self.category, self.type, self.message_ref))

    @property
    def file_name(self) -> str:
        return str(self.file_name_ref)

    @property
    def package_name(self) -> str:
        return str(self.package_name_ref)

    @property
    def message(self) -> str:
        return str(self.message_ref)

    @property
    def base_name(self) -> str:
        return paths.base_name(self.file_name)

    @property
    def folder(self) -> str:
        return paths.folder(self.file_name)

    def has_file_name(self) -> bool:
        return self.file_name != UNDEFINED

    def has_package_name(self) -> bool:
        return self.package_name != UNDEFINED

    def has_module_name(self) -> bool:
        return self.module_name != UNDEFINED

    def affects_line(self, line: int) -> bool:
        if self.line_start <= line <= self.line_end:
            return True
        return any(r.contains(line) for r in self.line_ranges)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "path_name": self.path_name,
            "file_name": self.file_name,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "column_start": self.column_start,
            "column_end": self.column_end,
            "line_ranges": [[r.start, r.end] for r in self.line_ranges],
            "category": self.category,
            "type": self.type,
            "package_name": self.package_name,
            "module_name": self.module_name,
            "severity": self.severity.name,
            "message": self.message,
            "description": self.description,
            "origin": self.origin,
            "origin_name": self.origin_name,
            "reference": self.reference,
            "fingerprint": self.fingerprint,
            "additional_properties": self.additional_properties,
        }

"""Mutable builder that normalizes raw parser input into immutable issues.

Parsers feed whatever the tool printed: paths with either separator,
numbers as text, missing fields. Setters coerce immediately, ``build()``
reconciles ranges and paths, and no step ever raises for bad input.

Usage::

    with IssueBuilder() as builder:
        builder.set_origin("grype").set_origin_name("Grype")
        for item in items:
            builder.set_file_name(item["path"]).set_line_start(item.get("line"))
            report.add(builder.build_and_clean())
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from typing import Any, Iterable
from uuid import UUID

from issuekit.builder.paths import resolve_file_name
from issuekit.domain.interning import StringStore
from issuekit.domain.models import (
    EMPTY,
    UNDEFINED,
    Issue,
    LineRange,
    LineRangeList,
    Severity,
    normalize_range,
    to_non_negative_int,
)

logger = logging.getLogger(__name__)


def _defined(value: str | None) -> str:
    if value is None or not str(value).strip():
        return UNDEFINED
    return sys.intern(str(value))


def _stripped(value: str | None) -> str:
    if value is None:
        return EMPTY
    return sys.intern(str(value).strip())


class IssueBuilder:
    """Creates ``Issue`` instances; reusable for many builds in one parsing session.

    Not thread safe: each parsing task owns its own builder and interning
    stores.
    """

    def __init__(self) -> None:
        self._file_names = StringStore()
        self._package_names = StringStore()
        self._messages = StringStore()
        self._origin = UNDEFINED
        self._origin_name = UNDEFINED
        self._reset()

    def _reset(self) -> None:
        self._id: UUID | None = None
        self._directory: str | None = None
        self._path_name = UNDEFINED
        self._file_name: str | None = None
        self._line_start = 0
        self._line_end = 0
        self._column_start = 0
        self._column_end = 0
        self._line_ranges = LineRangeList()
        self._category = UNDEFINED
        self._type = UNDEFINED
        self._package_name = UNDEFINED
        self._module_name = UNDEFINED
        self._severity = Severity.WARNING_NORMAL
        self._message = EMPTY
        self._description = EMPTY
        self._reference = EMPTY
        self._fingerprint = UNDEFINED
        self._additional_properties: Any = None

    # --- scoped lifetime ----------------------------------------------------

    def __enter__(self) -> IssueBuilder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Reset every field, origin included, and release the interning stores."""
        logger.debug(
            "Closing issue builder (%d file names, %d messages interned)",
            len(self._file_names),
            len(self._messages),
        )
        self._reset()
        self._origin = UNDEFINED
        self._origin_name = UNDEFINED
        self._file_names.clear()
        self._package_names.clear()
        self._messages.clear()

    # --- setters ------------------------------------------------------------

    def set_id(self, issue_id: UUID | None) -> IssueBuilder:
        """Use ``issue_id`` for the next build only."""
        self._id = issue_id
        return self

    def set_directory(self, directory: str | os.PathLike | None) -> IssueBuilder:
        self._directory = None if directory is None else str(directory)
        return self

    def set_path_name(self, path_name: str | None) -> IssueBuilder:
        self._path_name = _defined(path_name)
        return self

    def set_file_name(self, file_name: str | None) -> IssueBuilder:
        self._file_name = None if file_name is None else str(file_name)
        return self

    def set_line_start(self, line_start: int | str | None) -> IssueBuilder:
        self._line_start = to_non_negative_int(line_start)
        return self

    def set_line_end(self, line_end: int | str | None) -> IssueBuilder:
        self._line_end = to_non_negative_int(line_end)
        return self

    def set_column_start(self, column_start: int | str | None) -> IssueBuilder:
        self._column_start = to_non_negative_int(column_start)
        return self

    def set_column_end(self, column_end: int | str | None) -> IssueBuilder:
        self._column_end = to_non_negative_int(column_end)
        return self

    def set_line_ranges(self, line_ranges: Iterable[LineRange | tuple[int, int]] | None) -> IssueBuilder:
        self._line_ranges = LineRangeList(line_ranges or ())
        return self

    def add_line_range(self, line_range: LineRange | tuple[int, int]) -> IssueBuilder:
        self._line_ranges.add(line_range)
        return self

    def set_category(self, category: str | None) -> IssueBuilder:
        self._category = _defined(category)
        return self

    def set_type(self, issue_type: str | None) -> IssueBuilder:
        self._type = _defined(issue_type)
        return self

    def set_package_name(self, package_name: str | None) -> IssueBuilder:
        self._package_name = _defined(package_name)
        return self

    def set_module_name(self, module_name: str | None) -> IssueBuilder:
        self._module_name = _defined(module_name)
        return self

    def set_severity(self, severity: Severity | str | None) -> IssueBuilder:
        if isinstance(severity, Severity):
            self._severity = severity
        else:
            self._severity = Severity.guess_from_string(severity)
        return self

    def guess_severity(self, text: str | None) -> IssueBuilder:
        """Map free-form tool severities such as ``High`` or ``minor``."""
        self._severity = Severity.guess_from_string(text)
        return self

    def set_message(self, message: str | None) -> IssueBuilder:
        self._message = _stripped(message)
        return self

    def set_description(self, description: str | None) -> IssueBuilder:
        self._description = _stripped(description)
        return self

    def set_origin(self, origin: str | None) -> IssueBuilder:
        self._origin = _defined(origin)
        return self

    def set_origin_name(self, origin_name: str | None) -> IssueBuilder:
        self._origin_name = _defined(origin_name)
        return self

    def set_reference(self, reference: str | None) -> IssueBuilder:
        self._reference = EMPTY if reference is None else sys.intern(str(reference))
        return self

    def set_fingerprint(self, fingerprint: str | None) -> IssueBuilder:
        self._fingerprint = _defined(fingerprint)
        return self

    def set_additional_properties(self, additional_properties: Any) -> IssueBuilder:
        self._additional_properties = additional_properties
        return self

    def copy(self, issue: Issue) -> IssueBuilder:
        """Seed every field from ``issue`` so a modified copy can be built."""
        self._id = issue.id
        self._directory = None
        self._path_name = issue.path_name
        self._file_name = issue.file_name
        self._line_start = issue.line_start
        self._line_end = issue.line_end
        self._column_start = issue.column_start
        self._column_end = issue.column_end
        self._line_ranges = LineRangeList(issue.line_ranges)
        self._category = issue.category
        self._type = issue.type
        self._package_name = issue.package_name
        self._module_name = issue.module_name
        self._severity = issue.severity
        self._message = issue.message
        self._description = issue.description
        self._origin = issue.origin
        self._origin_name = issue.origin_name
        self._reference = issue.reference
        self._fingerprint = issue.fingerprint
        self._additional_properties = issue.additional_properties
        return self

    # --- build --------------------------------------------------------------

    def build(self) -> Issue:
        """Create a new issue from the current state; the builder stays reusable."""
        line_start, line_end = normalize_range(self._line_start, self._line_end)
        line_ranges = self._line_ranges.copy()
        if len(line_ranges) > 0:
            first = line_ranges[0]
            if self._line_start == 0:
                line_start, line_end = first.start, first.end
                line_ranges.remove_first()
            elif first.start == line_start and first.end == line_end:
                line_ranges.remove_first()

        column_start, column_end = normalize_range(self._column_start, self._column_end)

        file_name = resolve_file_name(self._file_name, self._directory)

        issue_id = self._id if self._id is not None else uuid.uuid4()
        self._id = None

        return Issue(
            id=issue_id,
            path_name=self._path_name,
            file_name_ref=self._file_names.intern(file_name),
            line_start=line_start,
            line_end=line_end,
            column_start=column_start,
            column_end=column_end,
            line_ranges=line_ranges.as_tuple(),
            category=self._category,
            type=self._type,
            package_name_ref=self._package_names.intern(self._package_name),
            module_name=self._module_name,
            severity=self._severity,
            message_ref=self._messages.intern(self._message),
            description=self._description,
            origin=self._origin,
            origin_name=self._origin_name,
            reference=self._reference,
            fingerprint=self._fingerprint,
            additional_properties=self._additional_properties if self._additional_properties is not None else {},
        )

    def build_and_clean(self) -> Issue:
        """Build the issue, then reset the builder; origin and origin name are kept."""
        issue = self.build()
        self._reset()
        return issue

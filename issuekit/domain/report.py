from __future__ import annotations

import logging
from typing import Iterable, Iterator

from issuekit.core.config import settings
from issuekit.domain.models import UNDEFINED, Issue

logger = logging.getLogger(__name__)


class Report:
    """
    Ordered collection of issues produced by one parser run.

    Issues equal to one already present (ids are ignored) are not stored
    again; they only bump ``duplicates_size``. The report also keeps the
    info and error lines a parser logged while reading its input.
    """

    def __init__(self, report_id: str = UNDEFINED, origin_name: str = UNDEFINED):
        self.id = report_id
        self.origin_name = origin_name
        self._issues: list[Issue] = []
        self._seen: set[Issue] = set()
        self.duplicates_size = 0
        self.info_messages: list[str] = []
        self.error_messages: list[str] = []
        self._skipped_errors = 0

    # --- issues -------------------------------------------------------------

    def add(self, issue: Issue) -> Report:
        if issue in self._seen:
            self.duplicates_size += 1
        else:
            self._seen.add(issue)
            self._issues.append(issue)
        return self

    def add_all(self, issues: Iterable[Issue]) -> Report:
        for issue in issues:
            self.add(issue)
        return self

    def add_report(self, other: Report) -> Report:
        self.add_all(other)
        self.duplicates_size += other.duplicates_size
        self.info_messages.extend(other.info_messages)
        for message in other.error_messages:
            self._record_error(message)
        self._skipped_errors += other._skipped_errors
        return self

    def get(self, index: int) -> Issue:
        return self._issues[index]

    @property
    def size(self) -> int:
        return len(self._issues)

    def is_empty(self) -> bool:
        return not self._issues

    def has_duplicates(self) -> bool:
        return self.duplicates_size > 0

    def __getitem__(self, index: int) -> Issue:
        return self._issues[index]

    def __iter__(self) -> Iterator[Issue]:
        return iter(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def __repr__(self) -> str:
        return f"Report(id={self.id!r}, size={self.size}, duplicates={self.duplicates_size})"

    # --- log ----------------------------------------------------------------

    def log_info(self, fmt: str, *args) -> None:
        message = fmt % args if args else fmt
        self.info_messages.append(message)
        logger.info(message, extra={"report_id": self.id, "origin": self.origin_name})

    def log_error(self, fmt: str, *args) -> None:
        message = fmt % args if args else fmt
        logger.error(message, extra={"report_id": self.id, "origin": self.origin_name})
        self._record_error(message)

    def log_exception(self, exc: BaseException, fmt: str, *args) -> None:
        message = fmt % args if args else fmt
        logger.error(
            message,
            exc_info=(type(exc), exc, exc.__traceback__),
            extra={"report_id": self.id, "origin": self.origin_name},
        )
        self._record_error(f"{message}: {type(exc).__name__}: {exc}")

    def close_log(self) -> None:
        """Append a summary line for the errors that exceeded the cap."""
        if self._skipped_errors:
            self.error_messages.append(f"  ... skipped logging of {self._skipped_errors} additional errors ...")
            self._skipped_errors = 0

    def _record_error(self, message: str) -> None:
        if len(self.error_messages) < settings.REPORT_MAX_ERROR_LINES:
            self.error_messages.append(message)
        else:
            self._skipped_errors += 1

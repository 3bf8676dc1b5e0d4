"""Parser registry: mirrors the analyzer registry pattern.

Usage::

    registry = ParserRegistry()
    registry.register(GrypeParser())

    parser = registry.get("grype")          # None if missing
    parser = registry.pick("grype")         # raises if missing
    report = registry.parse("grype", text)  # never raises for bad content
"""

from __future__ import annotations

import logging
from typing import Iterable

from issuekit.core.config import settings
from issuekit.core.errors import ParsingError, UnknownParserError
from issuekit.domain.report import Report
from issuekit.parsers.base import IssueParser

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Registry of available issue parsers, keyed by parser id."""

    def __init__(self, parsers: Iterable[IssueParser] = ()) -> None:
        self._parsers: dict[str, IssueParser] = {}
        for p in parsers:
            self.register(p)

    def register(self, parser: IssueParser) -> None:
        self._parsers[parser.parser_id()] = parser

    def get(self, parser_id: str) -> IssueParser | None:
        return self._parsers.get(parser_id)

    def pick(self, parser_id: str) -> IssueParser:
        p = self.get(parser_id)
        if p is None:
            raise UnknownParserError(parser_id, self.list())
        return p

    def list(self) -> list[str]:
        """All registered parser ids."""
        return sorted(self._parsers.keys())

    def parse(self, parser_id: str, content: str) -> Report:
        """Run one parser; a ParsingError becomes an error line on an empty report."""
        parser = self.pick(parser_id)
        if not parser.accepts(content):
            report = Report(origin_name=parser.origin_name)
            report.log_info("Skipping content not accepted by parser '%s'", parser_id)
            return report

        try:
            report = parser.parse_report(content)
        except ParsingError as exc:
            if settings.PARSER_FAIL_FAST:
                raise
            report = Report(origin_name=parser.origin_name)
            report.log_exception(exc, "Parsing with '%s' failed", parser_id)
            return report

        report.close_log()
        logger.info(
            "Parsed %d issues (%d duplicates)",
            report.size,
            report.duplicates_size,
            extra={"origin": parser_id, "report_id": report.id},
        )
        return report

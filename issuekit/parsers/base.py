from __future__ import annotations

from abc import ABC, abstractmethod

from issuekit.builder.issue_builder import IssueBuilder
from issuekit.domain.report import Report


class IssueParser(ABC):
    """Reads the raw output of one tool and turns it into a report.

    Implementations drive the builder they are handed and add one issue per
    finding. Malformed entries should be skipped (or logged on the report);
    content that cannot be read at all raises ``ParsingError``.
    """

    origin_name: str = "-"

    @abstractmethod
    def parser_id(self) -> str: ...

    @abstractmethod
    def parse(self, content: str, builder: IssueBuilder) -> Report: ...

    def accepts(self, content: str) -> bool:
        return True

    def parse_report(self, content: str) -> Report:
        with IssueBuilder() as builder:
            builder.set_origin(self.parser_id()).set_origin_name(self.origin_name)
            report = self.parse(content, builder)
        report.origin_name = self.origin_name
        return report

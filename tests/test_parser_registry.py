"""Tests for the parser contract and registry."""

import json

import pytest

from issuekit.core.config import settings
from issuekit.core.errors import ParsingError, UnknownParserError
from issuekit.domain.models import Severity
from issuekit.domain.report import Report
from issuekit.parsers.base import IssueParser
from issuekit.parsers.registry import ParserRegistry


class FakeJsonParser(IssueParser):
    """Reads a list of {"path", "line", "severity", "message"} objects."""

    origin_name = "Fake JSON"

    def parser_id(self) -> str:
        return "fake-json"

    def accepts(self, content: str) -> bool:
        return content.lstrip().startswith("[")

    def parse(self, content, builder):
        try:
            items = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ParsingError(str(exc), self.parser_id()) from exc

        report = Report()
        for item in items:
            if not isinstance(item, dict):
                report.log_error("Skipping malformed entry %r", item)
                continue
            report.add(
                builder.set_file_name(item.get("path"))
                .set_line_start(item.get("line"))
                .guess_severity(item.get("severity"))
                .set_message(item.get("message"))
                .build_and_clean()
            )
        return report


CONTENT = json.dumps(
    [
        {"path": "lib\\a.jar", "line": "12", "severity": "High", "message": "CVE-1"},
        {"path": "lib\\a.jar", "line": "12", "severity": "High", "message": "CVE-1"},
        "garbage",
        {"path": "lib/b.jar", "line": "n/a", "severity": "Medium", "message": " CVE-2 "},
    ]
)


def test_register_and_list():
    reg = ParserRegistry([FakeJsonParser()])
    assert reg.list() == ["fake-json"]
    assert reg.get("fake-json") is not None
    assert reg.get("nonexistent") is None


def test_pick_missing_raises():
    reg = ParserRegistry()
    with pytest.raises(UnknownParserError, match="Unknown parser 'grype'"):
        reg.pick("grype")


def test_parse_builds_report():
    report = ParserRegistry([FakeJsonParser()]).parse("fake-json", CONTENT)

    assert report.size == 2
    assert report.duplicates_size == 1
    assert report.origin_name == "Fake JSON"
    assert report.error_messages == ["Skipping malformed entry 'garbage'"]

    first, second = report[0], report[1]
    assert first.file_name == "lib/a.jar"
    assert first.line_start == 12
    assert first.severity == Severity.WARNING_HIGH
    assert first.origin == "fake-json"
    assert first.origin_name == "Fake JSON"
    assert second.line_start == 0
    assert second.severity == Severity.WARNING_NORMAL
    assert second.message == "CVE-2"
    assert second.origin == "fake-json"


def test_parsing_error_becomes_logged_report():
    report = ParserRegistry([FakeJsonParser()]).parse("fake-json", "[not json")

    assert report.is_empty()
    assert len(report.error_messages) == 1
    assert report.error_messages[0].startswith("Parsing with 'fake-json' failed: ParsingError")


def test_parsing_error_raised_when_fail_fast(monkeypatch):
    monkeypatch.setattr(settings, "PARSER_FAIL_FAST", True)
    with pytest.raises(ParsingError):
        ParserRegistry([FakeJsonParser()]).parse("fake-json", "[not json")


def test_rejected_content_yields_empty_report():
    report = ParserRegistry([FakeJsonParser()]).parse("fake-json", "<xml/>")
    assert report.is_empty()
    assert report.info_messages == ["Skipping content not accepted by parser 'fake-json'"]

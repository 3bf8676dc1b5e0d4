import pytest

from issuekit.builder.issue_builder import IssueBuilder
from issuekit.core.config import settings


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    """Pin settings so tests never depend on the caller's environment."""
    monkeypatch.setattr(settings, "REPORT_MAX_ERROR_LINES", 20)
    monkeypatch.setattr(settings, "PARSER_FAIL_FAST", False)
    monkeypatch.setattr(settings, "LOG_LEVEL", "INFO")


@pytest.fixture
def builder():
    with IssueBuilder() as b:
        yield b

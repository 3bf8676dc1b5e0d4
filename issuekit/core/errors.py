from __future__ import annotations


class IssuekitError(Exception):
    """Base class for all errors raised by issuekit."""


class ParsingError(IssuekitError):
    """A parser could not read the report content it was given."""

    def __init__(self, message: str, parser_id: str | None = None):
        super().__init__(message)
        self.parser_id = parser_id


class UnknownParserError(IssuekitError, KeyError):
    def __init__(self, parser_id: str, available: list[str]):
        super().__init__(f"Unknown parser '{parser_id}'. Available: {', '.join(available) or '-'}")
        self.parser_id = parser_id

    def __str__(self) -> str:
        return self.args[0]

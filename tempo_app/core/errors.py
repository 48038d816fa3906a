"""Exception hierarchy surfaced to the command line."""

from __future__ import annotations

from .config import APP_NAME, DATE_FORMAT_HINT


class WorklogAppError(Exception):
    """Base class for failures that terminate a command with a message."""


class ExpressionParseError(WorklogAppError):
    def __init__(self, expression: str, example: str = "1h10m or 11-12:30"):
        self.expression = expression
        super().__init__(
            f'Error parsing "{expression}". Try something like {example}. '
            f"See {APP_NAME} log --help for more examples."
        )


class DateParseError(WorklogAppError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f'Cannot parse "{token}" to valid date. Try to use {DATE_FORMAT_HINT} format. '
            f"See {APP_NAME} --help for more examples."
        )


class StartTimeParseError(WorklogAppError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f"Cannot parse {text} to valid start time. Try to use HH:mm format. "
            f"See {APP_NAME} --help for more examples."
        )


class DomainValidationError(WorklogAppError):
    """Input parsed fine but is not acceptable (e.g. zero duration)."""


class EmptyResultError(WorklogAppError):
    """A report was requested over a range without any worklogs."""


class TokenNotSetError(WorklogAppError):
    def __init__(self):
        super().__init__(
            "Tempo token not set. Add tempo_token to the settings file or export TEMPO_API_TOKEN."
        )


class TempoAPIError(WorklogAppError):
    """Tempo request failed (transport error or non-2xx status)."""

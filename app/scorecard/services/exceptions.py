"""
Exceptions raised by the scorecard analysis pipeline.

Each exception carries the HTTP status it maps to and an optional
``details`` string with diagnostic text (raw model output, upstream error
body, or exception message).
"""


class ScorecardError(Exception):
    """Base class for all pipeline failures rendered as JSON errors."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, str]:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ScorecardError):
    """Raised when the caller's submission is incomplete."""

    status_code = 400


class ConfigurationError(ScorecardError):
    """Raised when the OpenAI credential is not configured."""


class UpstreamError(ScorecardError):
    """Raised when the OpenAI API fails or returns an error status."""


class ParseError(ScorecardError):
    """Raised when the model's output is not valid analysis JSON."""


class UnhandledError(ScorecardError):
    """Wraps any unexpected exception caught at the request boundary."""

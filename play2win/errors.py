from typing import Optional


class APIError(Exception):
    """Unified error class for all external API clients."""

    def __init__(self, source: str, code: str, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.code = code
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "code": self.code,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }


class Play2WinError(Exception):
    """Base class for failures raised by the match data pipeline."""


class SourceUnavailableError(Play2WinError):
    """The match data file could not be read."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        reason = f": {cause}" if cause else ""
        super().__init__(f"Match data unavailable at {path}{reason}")
        self.path = path
        self.cause = cause


class AggregationError(Play2WinError):
    """Aggregated output is missing required views.

    Raised only when the aggregation code itself produced an inconsistent
    result; malformed input rows never raise this.
    """

    def __init__(self, missing: list[str]):
        super().__init__("Comprehensive data missing required properties: " + ", ".join(missing))
        self.missing = list(missing)


class LLMError(Play2WinError):
    """Raised when no configured language model produced a response."""

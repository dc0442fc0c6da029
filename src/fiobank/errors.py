"""Exceptions raised by the Fio API client."""

from datetime import date
from enum import Enum


class FioError(Exception):
    """Base exception for everything raised by fiobank."""


class InvalidTokenLengthError(FioError):
    """API token does not have the required length."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"invalid token length: expected {expected} characters, got {actual}"
        )


class InvalidDateRangeError(FioError):
    """Start of a date range lies after its end."""

    def __init__(self, start: date, end: date) -> None:
        self.start = start
        self.end = end
        super().__init__(
            f"invalid date range: start {start.isoformat()} must be before "
            f"or equal to end {end.isoformat()}"
        )


class InvalidParameterError(FioError):
    """A request parameter failed local validation."""

    def __init__(self, message: str) -> None:
        super().__init__(f"invalid parameter: {message}")


class TransportError(FioError):
    """Network failure or timeout; the requests exception is the __cause__."""


class InvalidResponseError(FioError):
    """Response body could not be decoded into the expected shape."""

    def __init__(self, message: str = "invalid or unexpected response format") -> None:
        super().__init__(message)


class ApiErrorKind(Enum):
    """Semantic meaning the Fio API assigns to non-success status codes."""

    INVALID_REQUEST = "invalid request"
    TIME_LIMIT = "time limit exceeded"
    TOO_MANY_ITEMS = "too many items"
    AUTHORIZATION = "not authorized"
    INVALID_TOKEN = "invalid token"
    UNEXPECTED_STATUS = "unexpected status"


# Fio documents these codes with bank-specific meanings.
STATUS_KINDS: dict[int, ApiErrorKind] = {
    404: ApiErrorKind.INVALID_REQUEST,
    409: ApiErrorKind.TIME_LIMIT,
    413: ApiErrorKind.TOO_MANY_ITEMS,
    422: ApiErrorKind.AUTHORIZATION,
    500: ApiErrorKind.INVALID_TOKEN,
}


class ApiError(FioError):
    """The API rejected the request with a non-success status code."""

    def __init__(self, kind: ApiErrorKind, status_code: int) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(f"api rejected request: {kind.value} ({status_code})")

    @classmethod
    def from_status(cls, status_code: int) -> "ApiError":
        """Build the error matching a status code."""
        kind = STATUS_KINDS.get(status_code, ApiErrorKind.UNEXPECTED_STATUS)
        return cls(kind, status_code)


def raise_for_status(status_code: int) -> None:
    """Raise ApiError unless the status code is 2xx."""
    if 200 <= status_code < 300:
        return
    raise ApiError.from_status(status_code)

"""Structured exception classes for the Clado SDK.

Every failure the SDK surfaces for an API call is a :class:`CladoError`.
The concrete category lives in :attr:`CladoError.kind`, a closed set of
five values; the subclasses exist so callers can still ``except`` on a
specific category, but the SDK itself dispatches on ``kind``.
"""

import json
from enum import Enum
from typing import Any, Dict, Optional

DEFAULT_RETRY_AFTER = 60


class ErrorKind(str, Enum):
    """Categories of API errors.

    Each kind has a distinct recovery implication:

    - ``AUTH``: bad or expired API key, never retried
    - ``NOT_FOUND``: missing resource, never retried
    - ``VALIDATION``: malformed request parameters, never retried
    - ``RATE_LIMIT``: server-signaled throttling, carries ``retry_after``
    - ``GENERIC``: everything else, including network failures (status 0)
    """

    GENERIC = "generic"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"


class CladoError(Exception):
    """Base exception for all Clado API errors.

    :param status: HTTP status code, or 0 for transport failures
    :type status: int
    :param message: Detail from the API or a description of the failure
    :type message: str
    :param kind: Error category
    :type kind: ErrorKind
    :param details: Optional additional context
    :type details: Optional[Dict[str, Any]]
    """

    def __init__(
        self,
        status: int,
        message: str,
        kind: ErrorKind = ErrorKind.GENERIC,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the error with status, detail and kind."""
        self.status = status
        self.detail = message
        self.kind = kind
        self.details = details or {}
        self.message = f"API request failed with status {status}: {message}"
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing kind, status, message, and details
        """
        return {
            "error": self.kind.value,
            "status": self.status,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status={self.status}, kind={self.kind.value!r})"


class CladoAuthError(CladoError):
    """Raised when authentication fails (HTTP 401).

    Usually means the API key is invalid or expired.
    """

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            401, message or "Invalid or expired API key", kind=ErrorKind.AUTH
        )


class CladoNotFoundError(CladoError):
    """Raised when a requested resource does not exist (HTTP 404)."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(404, message or "Resource not found", kind=ErrorKind.NOT_FOUND)


class CladoValidationError(CladoError):
    """Raised when the API rejects request parameters (HTTP 422)."""

    def __init__(self, message: str):
        super().__init__(422, message, kind=ErrorKind.VALIDATION)


class CladoRateLimitError(CladoError):
    """Raised when the rate limit is exceeded (HTTP 429).

    :param retry_after: Seconds the server asked us to wait
    :type retry_after: int
    :param message: Optional detail from the server
    :type message: Optional[str]
    """

    def __init__(self, retry_after: int, message: Optional[str] = None):
        super().__init__(
            429,
            message or f"Rate limit exceeded, retry after {retry_after}s",
            kind=ErrorKind.RATE_LIMIT,
            details={"retry_after": retry_after},
        )
        self.retry_after = retry_after


class ConfigurationError(ValueError):
    """Raised for configuration problems detected at client construction.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.setting = setting


def classify_error(
    status: int, detail: str, retry_after: Optional[int] = None
) -> CladoError:
    """Build the typed error matching an HTTP status code.

    :param status: HTTP status code (0 for network failures)
    :type status: int
    :param detail: Detail message extracted from the response
    :type detail: str
    :param retry_after: Retry-After seconds, used for 429 only
    :type retry_after: Optional[int]
    :return: Exactly one typed error
    :rtype: CladoError
    """
    if status == 401:
        return CladoAuthError(detail)
    if status == 404:
        return CladoNotFoundError(detail)
    if status == 422:
        return CladoValidationError(detail)
    if status == 429:
        return CladoRateLimitError(
            retry_after if retry_after is not None else DEFAULT_RETRY_AFTER, detail
        )
    return CladoError(status, detail)

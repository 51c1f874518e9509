"""
Domain exceptions for the document chat service.

Every error carries a human-readable message and a details dict that the
API layer returns verbatim in the error body.

Dependencies: None (pure domain layer)
System role: Error taxonomy shared by all layers
"""

from http import HTTPStatus
from typing import Any

QUOTA_MESSAGE_MARKERS = ("quota", "resource has been exhausted", "resource_exhausted")


def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value})
    return merged


class DocChatException(Exception):
    """Root of the service's error hierarchy."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


class ValidationError(DocChatException):
    """Request input rejected before any remote call is made."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, _with_context(details, field=field))


class UpstreamError(DocChatException):
    """
    A remote AI service call failed.

    Args:
        message: What failed
        service: Remote service name, e.g. "gemini"
        details: Extra context for the error body
    """

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, _with_context(details, service=service))


class ExtractionError(UpstreamError):
    """Text extraction failed or produced nothing usable."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, service="gemini", details=_with_context(details, filename=filename))


class QuotaExceededError(UpstreamError):
    """A generative call was rejected for rate limiting or quota."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, service="gemini", details=details)


class StoreError(DocChatException):
    """
    A vector store call failed.

    Raised inside the adapter only; its public methods turn it into a
    failed result.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, _with_context(details, operation=operation))


def _status_code(exc: BaseException) -> int | None:
    for attr in ("code", "status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return int(value)
        if isinstance(value, str) and value.upper() == "RESOURCE_EXHAUSTED":
            return HTTPStatus.TOO_MANY_REQUESTS
    return None


def is_quota_error(exc: BaseException) -> bool:
    """
    Detect rate-limit or quota exhaustion reported by a Gemini client.

    Checks a numeric 429 status on the exception or anything in its
    cause/context chain, then falls back to matching the error message.

    Args:
        exc: Exception raised by a remote call

    Returns:
        bool: True when the failure is quota related
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, QuotaExceededError):
            return True
        if _status_code(current) == HTTPStatus.TOO_MANY_REQUESTS:
            return True
        message = str(current).lower()
        if any(marker in message for marker in QUOTA_MESSAGE_MARKERS):
            return True
        current = current.__cause__ or current.__context__
    return False

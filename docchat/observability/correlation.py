"""
Request correlation IDs.

The ID lives in a ContextVar so it follows a request through awaits and
into worker threads started with asyncio.to_thread.

Dependencies: contextvars
System role: Request tracing
"""

import uuid
from contextvars import ContextVar

_correlation_id: ContextVar[str] = ContextVar("docchat_correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind the given ID, or a fresh UUID4 when none was sent, and return it."""
    value = correlation_id or uuid.uuid4().hex
    _correlation_id.set(value)
    return value


def get_correlation_id() -> str:
    """ID bound to the current request, empty outside one."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("")

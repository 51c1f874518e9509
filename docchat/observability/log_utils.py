"""
Structured logging helpers.

Log records carry request context through ``extra``. Values placed there are
reduced to short strings first: uploaded bytes and document text must never
reach the log stream, and credentials are masked.

Dependencies: logging (stdlib), pydantic
System role: Safe context for log records
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import SecretStr

MAX_VALUE_LENGTH = 500
MASK = "**********"


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Reduce a value to a short, loggable string.

    Bytes and containers are summarised by size, secrets are masked and long
    strings are cut at max_length.

    Args:
        value: Anything headed for a log record
        max_length: Longest string kept verbatim

    Returns:
        str: Loggable representation
    """
    if isinstance(value, SecretStr):
        return MASK
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, Mapping):
        return f"<{len(value)} keys: {', '.join(sorted(map(str, value)))[:max_length]}>"
    if isinstance(value, (list, tuple, set)):
        return f"<{type(value).__name__} of {len(value)}>"

    text = value if isinstance(value, str) else repr(value)
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}[+{len(text) - max_length} chars]"


def context_extras(**context: Any) -> dict[str, str]:
    """Build a logging ``extra`` dict with every value made safe."""
    return {key: safe_log_value(value) for key, value in context.items()}


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    logger.log(level, message, extra=context_extras(**context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with its traceback and the surrounding context.

    Args:
        logger: Target logger
        message: Log message
        exc: Exception being reported
        **context: Request or document context
    """
    extras = context_extras(**context)
    extras["error_type"] = type(exc).__name__
    extras["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=(type(exc), exc, exc.__traceback__), extra=extras)

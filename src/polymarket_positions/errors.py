"""Error types and helpers for turning API error payloads into readable text.

CLOB and Data API errors come back in several shapes: a bare string, an
``{"error": "..."}`` object, a nested ``{"error": {"message": "..."}}``
object, or ``errorMsg`` / ``message`` fields.  The helpers here never raise,
so they are safe to call on whatever a failed request produced.
"""

from __future__ import annotations

import enum
import traceback
from collections.abc import Mapping
from typing import Any


class PolymarketError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(PolymarketError):
    pass


class NetworkError(PolymarketError):
    """An HTTP request failed (transport error, non-2xx status or bad body)."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class InsufficientFundsError(PolymarketError):
    """The CLOB rejected an order for lack of balance or allowance."""

    @classmethod
    def from_response(cls, response: Any) -> InsufficientFundsError | None:
        message = extract_error_message(response)
        if is_insufficient_balance_or_allowance_error(message):
            return cls(message)
        return None


class ErrorShape(enum.Enum):
    """Recognised layouts of an error payload, in resolution order."""

    PLAIN_STRING = "plain_string"
    DIRECT_ERROR = "direct_error"
    NESTED_ERROR = "nested_error"
    ERROR_MSG_FIELD = "error_msg_field"
    MESSAGE_FIELD = "message_field"
    UNKNOWN = "unknown"


def classify_error_response(response: Any) -> tuple[ErrorShape, str | None]:
    """Return the shape of *response* and the message it resolves to."""
    try:
        if not response:
            return ErrorShape.UNKNOWN, None
    except Exception:
        return ErrorShape.UNKNOWN, None

    if isinstance(response, str):
        return ErrorShape.PLAIN_STRING, response

    if not isinstance(response, Mapping):
        return ErrorShape.UNKNOWN, None

    direct = response.get("error")
    if isinstance(direct, str):
        return ErrorShape.DIRECT_ERROR, direct

    if isinstance(direct, Mapping):
        for key in ("error", "message"):
            nested = direct.get(key)
            if isinstance(nested, str):
                return ErrorShape.NESTED_ERROR, nested

    error_msg = response.get("errorMsg")
    if isinstance(error_msg, str):
        return ErrorShape.ERROR_MSG_FIELD, error_msg

    message = response.get("message")
    if isinstance(message, str):
        return ErrorShape.MESSAGE_FIELD, message

    return ErrorShape.UNKNOWN, None


def extract_error_message(response: Any) -> str | None:
    """Extract an error message from any of the known response formats.

    Returns None for falsy input or when no known field holds a string.
    """
    _, message = classify_error_response(response)
    return message


def is_insufficient_balance_or_allowance_error(message: str | None) -> bool:
    """Check if an error message is about balance or allowance."""
    if not message:
        return False
    lower = message.lower()
    return "not enough balance" in lower or "allowance" in lower


def format_error(error: Any) -> str:
    """Format an exception or arbitrary value for logging."""
    if isinstance(error, BaseException):
        try:
            return str(error)
        except Exception:
            return type(error).__name__
    if isinstance(error, str):
        return error
    try:
        return str(error)
    except Exception:
        try:
            return repr(error)
        except Exception:
            return f"<unprintable {type(error).__name__}>"


def get_error_stack(error: Any) -> str | None:
    """Return the formatted traceback of *error*, or None if it has none."""
    if isinstance(error, BaseException) and error.__traceback__ is not None:
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return stack or None
    return None

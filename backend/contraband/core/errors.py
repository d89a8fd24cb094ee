"""
Centralized error handling for market operations.
Domain exceptions plus one rule table mapping them to HTTP responses, so routes stay thin.
"""
from __future__ import annotations

from fastapi import HTTPException


class MarketError(Exception):
    """Base for every error a market operation reports to its caller."""


class Unauthorized(MarketError):
    """Bad admin credentials, or an API key that was never issued."""


class InvalidConfiguration(MarketError):
    """Malformed or empty drop table (or other rejected request payload)."""


class StorageFailure(MarketError):
    """A snapshot could not be read or written."""


class RelayFailure(MarketError):
    """The notification webhook was unreachable or rejected the message."""


# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_INTERNAL_ERROR = 500

# (exception type, status_code, fallback detail). First match wins; detail comes from
# the exception message when it has one.
MARKET_ERROR_RULES: list[tuple[type[MarketError], int, str]] = [
    (Unauthorized, STATUS_UNAUTHORIZED, "Missing or invalid API key"),
    (InvalidConfiguration, STATUS_BAD_REQUEST, "Invalid payload"),
    (StorageFailure, STATUS_INTERNAL_ERROR, "Storage error"),
]


def market_error_to_http(exc: Exception) -> HTTPException:
    """
    Map an exception raised by the market service into an HTTPException.
    Uses MARKET_ERROR_RULES for known error types; otherwise returns 500 with the exception message.
    """
    for exc_type, status_code, default_detail in MARKET_ERROR_RULES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=str(exc) or default_detail)
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc))

"""Error taxonomy for pokecache.

Only data-source failures are modelled as exceptions. "Not ready yet" and
"no match" are ordinary return values (``is_ready() is False`` / ``None``)
and never raise.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    FETCH_FAILED = "FETCH_FAILED"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    DUPLICATE_RECORD = "DUPLICATE_RECORD"
    REFRESH_TIMEOUT = "REFRESH_TIMEOUT"


class PokeCacheError(Exception):
    """Base error carrying a machine-readable code."""

    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool = True) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class FetchError(PokeCacheError):
    """The data source was unreachable or returned data we cannot use."""

"""Exception hierarchy for scoreboard fetching.

- ScoreboardError: base class, carries a context dict for logging
- FetchError: any failure of a single page fetch (recoverable)
- NetworkError: transport, timeout or non-2xx status
- ParseError: response body is not a valid array of score records
"""

from __future__ import annotations

from typing import Any


class ScoreboardError(Exception):
    """Base exception for all scoreboard errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class FetchError(ScoreboardError):
    """A page fetch failed. The feed stays unchanged and may retry."""


class NetworkError(FetchError):
    """Transport failure, timeout or unexpected HTTP status."""

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        message = f"Request to {url} failed: {reason}"
        context: dict[str, Any] = {"url": url, "reason": reason}
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(message, context=context)
        self.url = url
        self.status_code = status_code


class ParseError(FetchError):
    """Response body is malformed or not an array of records."""

    def __init__(self, reason: str, index: int | None = None) -> None:
        message = f"Invalid scores payload: {reason}"
        context: dict[str, Any] = {"reason": reason}
        if index is not None:
            context["index"] = index
            message = f"Invalid scores payload at item {index}: {reason}"
        super().__init__(message, context=context)

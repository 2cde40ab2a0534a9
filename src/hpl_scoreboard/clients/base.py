"""Abstract base class for Scores API clients.

This module defines the ScoresClient interface that every page source
must follow. It provides:
- Single page fetch: fetch_page()
- Health check: health_check()
- Cleanup: close(), or use the client as an async context manager

Implementations return a Page on success and raise NetworkError or
ParseError on failure. An empty page is a valid result.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hpl_scoreboard.types import Page

logger = logging.getLogger(__name__)


def page_offset(page_number: int, page_size: int) -> int:
    """Compute the limit/offset offset for a 1-based page number.

    Raises:
        ValueError: If page_number < 1 or page_size <= 0.
    """
    if page_number < 1:
        raise ValueError(f"page_number must be >= 1, got {page_number}")
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return (page_number - 1) * page_size


class ScoresClient(ABC):
    """Abstract base class for Scores API clients.

    Attributes:
        name: Client name for logging.
        timeout: Default timeout for requests (seconds).
    """

    def __init__(self, name: str = "base", timeout: float = 10.0) -> None:
        """Initialize client.

        Args:
            name: Client name for logging.
            timeout: Default timeout for requests (seconds).
        """
        self.name = name
        self.timeout = timeout
        logger.info(f"Initialized {self.name} client (timeout={timeout}s)")

    @abstractmethod
    async def fetch_page(self, page_number: int, page_size: int) -> Page:
        """Fetch one page of ranked records.

        Args:
            page_number: 1-based page number.
            page_size: Records per page (request limit).

        Returns:
            The page, possibly empty.

        Raises:
            ValueError: If page_number or page_size is out of range.
            NetworkError: On transport or timeout failure.
            ParseError: On a malformed or non-array response body.
        """

    async def health_check(self) -> bool:
        """Check if the Scores API is reachable.

        Note:
            Default implementation returns True. Override for real backends.
        """
        logger.info(f"{self.name} health check (default=True)")
        return True

    async def close(self) -> None:
        """Close client and cleanup resources."""
        logger.info(f"Closing {self.name} client")

    async def __aenter__(self) -> ScoresClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

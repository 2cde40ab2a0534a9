"""HTTP client for the Scores API.

Issues ``GET /api/v1/scores?limit=<n>&offset=<m>`` and parses the bare JSON
array of score records. Uses a single pooled httpx.AsyncClient per instance.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from hpl_scoreboard.clients.base import ScoresClient, page_offset
from hpl_scoreboard.config import SCORES_PATH
from hpl_scoreboard.errors import NetworkError, ParseError
from hpl_scoreboard.types import Page, ScoreRecord

logger = logging.getLogger(__name__)


class HTTPScoresClient(ScoresClient):
    """Client for the remote Scores API.

    Attributes:
        base_url: API root URL (e.g., http://localhost:8080).
        client: httpx async client instance.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            base_url: API root URL.
            timeout: Request timeout (seconds).
            transport: Optional httpx transport (tests pass a MockTransport).
        """
        super().__init__(name="http", timeout=timeout)
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

        logger.info(f"HTTP scores client initialized: base_url={self.base_url}")

    @property
    def scores_url(self) -> str:
        return f"{self.base_url}{SCORES_PATH}"

    async def fetch_page(self, page_number: int, page_size: int) -> Page:
        offset = page_offset(page_number, page_size)
        params = {"limit": page_size, "offset": offset}
        logger.debug(f"GET {self.scores_url} limit={page_size} offset={offset}")

        try:
            response = await self.client.get(SCORES_PATH, params=params)
        except httpx.TimeoutException as e:
            raise NetworkError(self.scores_url, f"timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise NetworkError(self.scores_url, str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise NetworkError(
                self.scores_url,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        records = parse_scores(response.content)
        logger.debug(f"Page {page_number}: {len(records)} record(s)")
        return Page(records=records, page_number=page_number, page_size=page_size)

    async def health_check(self) -> bool:
        """Probe the scores endpoint with a one-record request.

        Returns:
            True if the server answers without a 5xx error.
        """
        try:
            r = await self.client.get(SCORES_PATH, params={"limit": 1, "offset": 0})
        except httpx.HTTPError as e:
            logger.error(f"Health check failed: {e}")
            return False

        if r.status_code < 500:
            logger.info(f"Health check OK (HTTP {r.status_code})")
            return True
        logger.error(f"Health check failed: HTTP {r.status_code}")
        return False

    async def close(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()
        logger.info("HTTP scores client closed")


def parse_scores(body: bytes | str) -> tuple[ScoreRecord, ...]:
    """Parse a Scores API response body.

    Args:
        body: Raw response body.

    Returns:
        Records in response order.

    Raises:
        ParseError: If the body is not JSON, not an array, or holds an
            invalid record.
    """
    try:
        data: Any = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise ParseError(f"body is not valid JSON ({e})") from e
    except RecursionError as e:
        raise ParseError("body is nested too deeply") from e

    if not isinstance(data, list):
        raise ParseError(f"expected JSON array, got {type(data).__name__}")

    return tuple(ScoreRecord.from_dict(item, index=i) for i, item in enumerate(data))

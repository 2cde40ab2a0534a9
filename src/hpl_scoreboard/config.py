"""Scoreboard configuration.

Values come from defaults, then environment variables, then CLI options:

- HPL_SCOREBOARD_URL: Scores API root (default http://localhost:8080)
- HPL_SCOREBOARD_PAGE_SIZE: records per page (default 20)
- HPL_SCOREBOARD_TIMEOUT: request timeout in seconds (default 10)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_PAGE_SIZE = 20
DEFAULT_TIMEOUT_S = 10.0
DEFAULT_MAX_FAILURES = 3

SCORES_PATH = "/api/v1/scores"


@dataclass
class ScoreboardConfig:
    """Configuration for a scoreboard feed.

    Attributes:
        base_url: Scores API root URL.
        page_size: Fixed limit used for every page request.
        timeout: Transport timeout (seconds).
        max_failures: Consecutive failed fetches tolerated by the batch loader.
    """

    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: float = DEFAULT_TIMEOUT_S
    max_failures: int = DEFAULT_MAX_FAILURES

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_failures < 1:
            raise ValueError(f"max_failures must be >= 1, got {self.max_failures}")
        self.base_url = self.base_url.rstrip("/")

    @property
    def scores_url(self) -> str:
        return f"{self.base_url}{SCORES_PATH}"

    @classmethod
    def from_env(cls) -> ScoreboardConfig:
        """Build a config from HPL_SCOREBOARD_* environment variables."""
        base_url = os.getenv("HPL_SCOREBOARD_URL", DEFAULT_BASE_URL)
        page_size = int(os.getenv("HPL_SCOREBOARD_PAGE_SIZE", str(DEFAULT_PAGE_SIZE)))
        timeout = float(os.getenv("HPL_SCOREBOARD_TIMEOUT", str(DEFAULT_TIMEOUT_S)))
        config = cls(base_url=base_url, page_size=page_size, timeout=timeout)
        logger.debug(f"Loaded config from environment: {config}")
        return config

    def with_overrides(self, **overrides: object) -> ScoreboardConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

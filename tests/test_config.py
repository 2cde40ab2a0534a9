"""Tests for ScoreboardConfig."""

from __future__ import annotations

import pytest

from hpl_scoreboard.config import ScoreboardConfig


def test_defaults() -> None:
    config = ScoreboardConfig()
    assert config.base_url == "http://localhost:8080"
    assert config.page_size == 20
    assert config.scores_url == "http://localhost:8080/api/v1/scores"


def test_trailing_slash_is_stripped() -> None:
    assert ScoreboardConfig(base_url="http://hpl.example/").scores_url == (
        "http://hpl.example/api/v1/scores"
    )


@pytest.mark.parametrize(
    "kwargs",
    [{"page_size": 0}, {"page_size": -5}, {"timeout": 0}, {"max_failures": 0}],
)
def test_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        ScoreboardConfig(**kwargs)


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("HPL_SCOREBOARD_URL", "http://scores.internal:9000")
    monkeypatch.setenv("HPL_SCOREBOARD_PAGE_SIZE", "50")
    monkeypatch.setenv("HPL_SCOREBOARD_TIMEOUT", "2.5")

    config = ScoreboardConfig.from_env()
    assert config.base_url == "http://scores.internal:9000"
    assert config.page_size == 50
    assert config.timeout == 2.5


def test_from_env_defaults(monkeypatch) -> None:
    for name in ("HPL_SCOREBOARD_URL", "HPL_SCOREBOARD_PAGE_SIZE", "HPL_SCOREBOARD_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    assert ScoreboardConfig.from_env() == ScoreboardConfig()


def test_from_env_rejects_garbage(monkeypatch) -> None:
    monkeypatch.setenv("HPL_SCOREBOARD_PAGE_SIZE", "twenty")
    with pytest.raises(ValueError):
        ScoreboardConfig.from_env()


def test_with_overrides_skips_none() -> None:
    config = ScoreboardConfig(page_size=30).with_overrides(page_size=None, base_url="http://x/")
    assert config.page_size == 30
    assert config.base_url == "http://x"


def test_with_overrides_validates() -> None:
    with pytest.raises(ValueError):
        ScoreboardConfig().with_overrides(page_size=0)

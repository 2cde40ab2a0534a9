"""Tests for VisibilitySignal."""

from __future__ import annotations

import asyncio
import logging

import pytest

from hpl_scoreboard.feed import VisibilitySignal


@pytest.mark.asyncio
async def test_emit_calls_every_handler() -> None:
    signal = VisibilitySignal()
    calls: list[str] = []

    async def first() -> str:
        calls.append("first")
        return "a"

    async def second() -> str:
        calls.append("second")
        return "b"

    signal.connect(first)
    signal.connect(second)

    results = await asyncio.gather(*signal.emit())
    assert results == ["a", "b"]
    assert calls == ["first", "second"]


@pytest.mark.asyncio
async def test_disconnect() -> None:
    signal = VisibilitySignal()
    calls: list[int] = []

    async def handler() -> None:
        calls.append(1)

    disconnect = signal.connect(handler)
    disconnect()
    disconnect()

    assert signal.emit() == []
    assert calls == []
    assert signal.handler_count == 0


def test_emit_requires_running_loop() -> None:
    signal = VisibilitySignal()
    with pytest.raises(RuntimeError):
        signal.emit()


@pytest.mark.asyncio
async def test_handler_failure_is_logged(caplog) -> None:
    signal = VisibilitySignal()

    async def broken() -> None:
        raise ValueError("sentinel lost")

    signal.connect(broken)

    with caplog.at_level(logging.ERROR, logger="hpl_scoreboard.feed.signal"):
        tasks = signal.emit()
        await asyncio.wait(tasks)
        await asyncio.sleep(0)

    assert "Visibility handler failed: sentinel lost" in caplog.text
    assert isinstance(tasks[0].exception(), ValueError)

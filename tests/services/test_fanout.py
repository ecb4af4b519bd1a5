# tests/services/test_fanout.py
"""Tests for the best-effort side-effect queue."""

import asyncio
import logging
from contextlib import contextmanager

import pytest

from myriad_api.services.fanout import FanoutQueue


@contextmanager
def _fake_scope():
    yield "session"


@pytest.mark.asyncio
async def test_effects_run_with_session_from_factory():
    """Each effect receives the session its factory yields."""
    queue = FanoutQueue(session_factory=_fake_scope, concurrency=2)
    seen = []

    queue.submit("record", seen.append)
    await queue.drain()

    assert seen == ["session"]
    assert queue.pending == 0


@pytest.mark.asyncio
async def test_coroutine_effects_are_awaited():
    queue = FanoutQueue(session_factory=_fake_scope)
    seen = []

    async def effect(db):
        await asyncio.sleep(0)
        seen.append(db)

    queue.submit("async", effect)
    await queue.drain()

    assert seen == ["session"]


@pytest.mark.asyncio
async def test_failures_are_logged_and_swallowed(caplog):
    """A failing effect neither raises nor stops the others."""
    queue = FanoutQueue(session_factory=_fake_scope)
    seen = []

    def broken(db):
        raise RuntimeError("boom")

    with caplog.at_level(logging.WARNING, logger="myriad_api.services.fanout"):
        queue.submit("broken", broken)
        queue.submit("fine", seen.append)
        await queue.drain()

    assert seen == ["session"]
    assert queue.failures == 1
    assert "Side effect broken failed" in caplog.text


@pytest.mark.asyncio
async def test_concurrency_is_bounded():
    queue = FanoutQueue(session_factory=_fake_scope, concurrency=2)
    running = 0
    peak = 0

    async def effect(db):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1

    for index in range(6):
        queue.submit(f"effect-{index}", effect)
    await queue.drain()

    assert peak == 2


@pytest.mark.asyncio
async def test_drain_waits_for_effects_submitted_by_effects():
    queue = FanoutQueue(session_factory=_fake_scope)
    seen = []

    def parent(db):
        queue.submit("child", lambda db: seen.append("child"))

    queue.submit("parent", parent)
    await queue.drain()

    assert seen == ["child"]

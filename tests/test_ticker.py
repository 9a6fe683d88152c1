"""Tests for the repeating Ticker task."""

import asyncio

import pytest

from promo_bot.utils.ticker import Ticker


class Counter:
    def __init__(self):
        self.n = 0

    async def __call__(self):
        self.n += 1


class TestTicker:
    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            Ticker(Counter(), 0)

    @pytest.mark.asyncio
    async def test_ticks_until_stopped(self):
        counter = Counter()
        ticker = Ticker(counter, 0.01)
        ticker.start()
        await asyncio.sleep(0.1)
        await ticker.stop()

        assert counter.n >= 2
        assert not ticker.running

        stopped_at = counter.n
        await asyncio.sleep(0.05)
        assert counter.n == stopped_at

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_task(self):
        counter = Counter()
        ticker = Ticker(counter, 0.01)
        ticker.start()
        task = ticker._task
        ticker.start()
        assert ticker._task is task
        await ticker.stop()

    @pytest.mark.asyncio
    async def test_stop_when_never_started(self):
        ticker = Ticker(Counter(), 0.01)
        await ticker.stop()
        assert not ticker.running

    @pytest.mark.asyncio
    async def test_failing_callback_keeps_ticking(self):
        calls = []

        async def flaky():
            calls.append(1)
            raise RuntimeError("tick failed")

        ticker = Ticker(flaky, 0.01)
        ticker.start()
        await asyncio.sleep(0.08)
        await ticker.stop()
        assert len(calls) >= 2

    @pytest.mark.asyncio
    async def test_stop_from_inside_tick(self):
        counter = Counter()
        ticker = None

        async def once():
            await counter()
            await ticker.stop()

        ticker = Ticker(once, 0.01)
        ticker.start()
        await asyncio.sleep(0.08)
        assert counter.n == 1
        assert not ticker.running

    @pytest.mark.asyncio
    async def test_set_interval_restarts_running_ticker(self):
        counter = Counter()
        ticker = Ticker(counter, 60)
        ticker.start()
        await ticker.set_interval(0.01)
        assert ticker.running
        await asyncio.sleep(0.08)
        await ticker.stop()
        assert counter.n >= 2

    @pytest.mark.asyncio
    async def test_set_interval_on_idle_ticker_does_not_start_it(self):
        ticker = Ticker(Counter(), 60)
        await ticker.set_interval(1)
        assert ticker.interval_seconds == 1
        assert not ticker.running

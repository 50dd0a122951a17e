"""Tests for the API rate limiter."""

import asyncio
import logging
import time

import pytest

from commute_timing.adapters.api_rate_limiter import ApiRateLimiter


class TestApiRateLimiter:
    """Tests for ApiRateLimiter class."""

    @pytest.fixture(autouse=True)
    def reset_instances(self) -> None:
        """Reset the shared instances before each test."""
        ApiRateLimiter.reset()

    @pytest.mark.asyncio
    async def test_when_first_call_then_no_wait(self) -> None:
        """Given a fresh limiter, when acquiring, then it returns immediately."""
        limiter = ApiRateLimiter("seoul", min_interval_seconds=1.0)

        start = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - start < 0.05

    @pytest.mark.asyncio
    async def test_when_second_call_then_waits_for_interval(self) -> None:
        """Given a recent call, when acquiring again, then the interval is respected."""
        interval = 0.2
        limiter = ApiRateLimiter("seoul", min_interval_seconds=interval)
        await limiter.acquire()

        start = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - start >= interval * 0.9

    @pytest.mark.asyncio
    async def test_when_interval_already_passed_then_no_wait(self) -> None:
        """Given a call longer ago than the interval, when acquiring, then no wait."""
        interval = 0.1
        limiter = ApiRateLimiter("seoul", min_interval_seconds=interval)
        await limiter.acquire()
        await asyncio.sleep(interval * 1.5)

        start = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - start < 0.05

    @pytest.mark.asyncio
    async def test_when_concurrent_callers_then_released_one_interval_apart(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Given three concurrent callers, when acquiring, then the last two are delayed."""
        interval = 0.1
        limiter = ApiRateLimiter("seoul", min_interval_seconds=interval)

        start = time.monotonic()
        with caplog.at_level(logging.DEBUG, logger="commute_timing.adapters.api_rate_limiter"):
            await asyncio.gather(*(limiter.acquire() for _ in range(3)))

        assert time.monotonic() - start >= 2 * interval * 0.9
        assert caplog.text.count("seoul: delaying call by") == 2

    @pytest.mark.asyncio
    async def test_when_used_as_context_manager_then_acquires(self) -> None:
        """Given a limiter entered once, when acquiring right after, then the call waits."""
        interval = 0.2
        limiter = ApiRateLimiter("seoul", min_interval_seconds=interval)

        async with limiter as entered:
            assert entered is limiter

        start = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - start >= interval * 0.9

    @pytest.mark.asyncio
    async def test_when_same_api_then_instance_is_shared(self) -> None:
        """Given two lookups of one API, when getting instances, then the first interval wins."""
        first = await ApiRateLimiter.get_instance("seoul_subway_api", 0.5)
        second = await ApiRateLimiter.get_instance("seoul_subway_api", 2.0)

        assert first is second
        assert second.min_interval_seconds == 0.5

    @pytest.mark.asyncio
    async def test_when_different_apis_then_separate_limiters(self) -> None:
        """Given two API names, when getting instances, then they are independent."""
        subway = await ApiRateLimiter.get_instance("seoul_subway_api", 1.0)
        bus = await ApiRateLimiter.get_instance("seoul_bus_api", 1.0)

        assert subway is not bus

    @pytest.mark.asyncio
    async def test_when_reset_then_new_instance_created(self) -> None:
        """Given a shared limiter, when resetting, then the next lookup creates a new one."""
        before = await ApiRateLimiter.get_instance("seoul_subway_api", 1.0)

        ApiRateLimiter.reset()
        after = await ApiRateLimiter.get_instance("seoul_subway_api", 1.0)

        assert before is not after

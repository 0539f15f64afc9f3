"""Tests for throttling policies."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from biolookup.services.throttle import AsyncFixedDelayThrottle, FixedDelayThrottle


def test_fixed_delay_calls_sleep():
    sleep = MagicMock()
    throttle = FixedDelayThrottle(1.5, sleep=sleep)
    throttle.wait()
    throttle.wait()
    assert sleep.call_count == 2
    sleep.assert_called_with(1.5)


def test_zero_delay_still_waits():
    sleep = MagicMock()
    FixedDelayThrottle(0, sleep=sleep).wait()
    sleep.assert_called_once_with(0.0)


def test_default_sleep_is_time_sleep():
    with patch("biolookup.services.throttle.time.sleep") as mock_sleep:
        FixedDelayThrottle(1).wait()
    mock_sleep.assert_called_once_with(1.0)


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        FixedDelayThrottle(-0.1)
    with pytest.raises(ValueError):
        AsyncFixedDelayThrottle(-1)


@pytest.mark.asyncio
async def test_async_fixed_delay():
    sleep = AsyncMock()
    await AsyncFixedDelayThrottle(2, sleep=sleep).wait()
    sleep.assert_awaited_once_with(2.0)

"""Tests for RequestThrottle."""

import pytest

from flowgen.core.flows.throttle import DEFAULT_REQUEST_DELAY, RequestThrottle


class TestRequestThrottle:
    """Test throttle delay behavior."""

    def test_waits_configured_delay(self) -> None:
        sleeps: list[float] = []
        throttle = RequestThrottle(0.25, sleep=sleeps.append)

        throttle.wait()
        throttle.wait()

        assert sleeps == [0.25, 0.25]

    def test_zero_delay_does_not_sleep(self) -> None:
        sleeps: list[float] = []
        RequestThrottle(0, sleep=sleeps.append).wait()
        assert sleeps == []

    def test_default_delay(self) -> None:
        assert RequestThrottle().delay == DEFAULT_REQUEST_DELAY == 0.1

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            RequestThrottle(-1)

"""Tests for timestamp helpers."""

from datetime import UTC, timedelta

from ainotes.utils import now, now_after


class TestNow:
    def test_utc_with_millisecond_precision(self):
        current = now()
        assert current.tzinfo == UTC
        assert current.microsecond % 1000 == 0


class TestNowAfter:
    def test_clock_ahead_of_previous(self):
        previous = now() - timedelta(seconds=5)
        assert now_after(previous) > previous

    def test_same_tick_bumps_by_one_millisecond(self):
        previous = now() + timedelta(seconds=5)
        assert now_after(previous) == previous + timedelta(milliseconds=1)

    def test_repeated_mutations_stay_distinct_at_millisecond_precision(self):
        stamps = [now()]
        for _ in range(50):
            stamps.append(now_after(stamps[-1]))

        truncated = [s.replace(microsecond=s.microsecond // 1000 * 1000) for s in stamps]
        assert truncated == stamps
        assert all(a < b for a, b in zip(truncated, truncated[1:], strict=False))

"""Tests for wall-clock time helpers."""

from unittest.mock import patch

import pytest

from breaktimer_app.utils.time import (
    MS_PER_MINUTE, elapsed_ms, format_duration_ms, minutes_to_ms, now_ms
)


class TestNowMs:
    """Test now_ms function."""

    def test_uses_wall_clock(self):
        with patch('breaktimer_app.utils.time.time.time', return_value=1_700_000_000.5):
            assert now_ms() == 1_700_000_000_500

    def test_returns_int(self):
        assert isinstance(now_ms(), int)


class TestDurations:
    """Test duration arithmetic."""

    def test_minutes_to_ms(self):
        assert minutes_to_ms(25) == 25 * 60 * 1000
        assert MS_PER_MINUTE == 60_000

    def test_elapsed(self):
        assert elapsed_ms(1_000, 61_000) == 60_000

    def test_elapsed_negative_when_clock_moves_back(self):
        assert elapsed_ms(61_000, 1_000) == -60_000


class TestFormatDuration:
    """Test HH:MM:SS formatting."""

    @pytest.mark.parametrize("duration,expected", [
        (0, "00:00:00"),
        (999, "00:00:00"),
        (5 * MS_PER_MINUTE, "00:05:00"),
        (3_723_000, "01:02:03"),
        (100 * 3600 * 1000, "100:00:00"),
        (-5_000, "00:00:00"),
    ])
    def test_format(self, duration, expected):
        assert format_duration_ms(duration) == expected


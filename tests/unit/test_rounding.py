"""Tests for clock time rounding."""

from datetime import datetime

import pytest

from shiftpay.sdk.rounding import (
    apply_clock_in_rounding,
    apply_clock_out_rounding,
    round_interval,
    round_time,
    round_time_down,
    round_time_up,
)
from shiftpay.sdk.schemas import WorkInterval


SAMPLE_TIMES = [
    datetime(2024, 5, 6, 8, 0, 0),
    datetime(2024, 5, 6, 8, 7, 42, 123456),
    datetime(2024, 5, 6, 8, 5, 30),
    datetime(2024, 5, 6, 12, 59, 59, 999999),
    datetime(2024, 5, 6, 23, 58, 1),
    datetime(2024, 12, 31, 23, 44, 0),
]

# Intervals that divide an hour evenly
INTERVALS = [1, 5, 6, 10, 15, 30]


class TestRoundDown:

    def test_truncates_to_previous_interval(self):
        assert round_time_down(datetime(2024, 5, 6, 8, 7, 42, 123456), 5) == datetime(2024, 5, 6, 8, 5)

    def test_on_boundary_only_drops_seconds(self):
        assert round_time_down(datetime(2024, 5, 6, 8, 15, 59), 15) == datetime(2024, 5, 6, 8, 15)

    def test_returns_new_value(self):
        original = datetime(2024, 5, 6, 8, 7, 42)
        round_time_down(original, 5)
        assert original == datetime(2024, 5, 6, 8, 7, 42)


class TestRoundUp:

    def test_advances_to_next_interval(self):
        assert round_time_up(datetime(2024, 5, 6, 8, 7, 42), 5) == datetime(2024, 5, 6, 8, 10)

    def test_on_boundary_keeps_minutes(self):
        """08:05:30 stays 08:05, seconds dropped."""
        assert round_time_up(datetime(2024, 5, 6, 8, 5, 30), 5) == datetime(2024, 5, 6, 8, 5)

    def test_overflow_rolls_into_next_hour(self):
        assert round_time_up(datetime(2024, 5, 6, 8, 58), 5) == datetime(2024, 5, 6, 9, 0)

    def test_overflow_rolls_into_next_year(self):
        assert round_time_up(datetime(2024, 12, 31, 23, 58), 5) == datetime(2025, 1, 1, 0, 0)

    def test_round_time_rounds_up(self):
        assert round_time(datetime(2024, 5, 6, 8, 1)) == datetime(2024, 5, 6, 8, 5)


@pytest.mark.parametrize("interval", INTERVALS)
@pytest.mark.parametrize("instant", SAMPLE_TIMES)
def test_rounding_is_idempotent(instant, interval):
    down = round_time_down(instant, interval)
    up = round_time_up(instant, interval)

    assert round_time_down(down, interval) == down
    assert round_time_up(up, interval) == up


@pytest.mark.parametrize("interval", INTERVALS)
@pytest.mark.parametrize("instant", SAMPLE_TIMES)
def test_rounding_brackets_instant(instant, interval):
    down = round_time_down(instant, interval)
    up = round_time_up(instant, interval)

    assert down <= instant
    assert instant.replace(second=0, microsecond=0) <= up
    assert (instant - down).total_seconds() < interval * 60
    assert down.second == down.microsecond == up.second == up.microsecond == 0


class TestClockRounding:

    def test_clock_in_rounds_down(self):
        assert apply_clock_in_rounding(datetime(2024, 5, 6, 8, 4), 5) == datetime(2024, 5, 6, 8, 0)

    def test_clock_out_rounds_up(self):
        assert apply_clock_out_rounding(datetime(2024, 5, 6, 17, 1), 5) == datetime(2024, 5, 6, 17, 5)

    @pytest.mark.parametrize("interval", [0, -5])
    def test_non_positive_interval_passes_through(self, interval):
        instant = datetime(2024, 5, 6, 8, 7, 42, 500)
        assert apply_clock_in_rounding(instant, interval) == instant
        assert apply_clock_out_rounding(instant, interval) == instant


class TestRoundInterval:

    def test_rounds_both_ends_outward(self):
        entry = WorkInterval(
            start=datetime(2024, 5, 6, 8, 3, 10),
            end=datetime(2024, 5, 6, 16, 57, 50),
            break_minutes=30,
        )

        rounded = round_interval(entry, 5)

        assert rounded.start == datetime(2024, 5, 6, 8, 0)
        assert rounded.end == datetime(2024, 5, 6, 17, 0)
        assert rounded.break_minutes == 30
        assert entry.start == datetime(2024, 5, 6, 8, 3, 10)

    def test_open_interval_keeps_no_end(self):
        entry = WorkInterval(start=datetime(2024, 5, 6, 8, 3))
        assert round_interval(entry, 5).end is None

    def test_collapsed_shift_bills_one_interval(self):
        entry = WorkInterval(
            start=datetime(2024, 5, 6, 8, 5, 10),
            end=datetime(2024, 5, 6, 8, 5, 40),
        )

        rounded = round_interval(entry, 5)

        assert rounded.start == datetime(2024, 5, 6, 8, 5)
        assert rounded.end == datetime(2024, 5, 6, 8, 10)

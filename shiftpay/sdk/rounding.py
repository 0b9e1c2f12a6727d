"""Clock time rounding.

Clock-ins round DOWN to the previous interval and clock-outs round UP to
the next one, so rounding never shortens a shift. Seconds and
microseconds are always dropped.
"""

from datetime import datetime, timedelta

from .schemas import WorkInterval

DEFAULT_INTERVAL_MINUTES = 5


def _truncate_seconds(instant: datetime) -> datetime:
    return instant.replace(second=0, microsecond=0)


def round_time_down(instant: datetime, interval_minutes: int = DEFAULT_INTERVAL_MINUTES) -> datetime:
    """Round down to the previous interval boundary.

    Example: 08:07:42 with a 5 minute interval -> 08:05:00
    """
    remainder = instant.minute % interval_minutes
    return _truncate_seconds(instant) - timedelta(minutes=remainder)


def round_time_up(instant: datetime, interval_minutes: int = DEFAULT_INTERVAL_MINUTES) -> datetime:
    """Round up to the next interval boundary.

    A time already on a boundary keeps its minutes (08:05:30 -> 08:05:00).
    Overflow carries into the next hour or day (23:58 -> 00:00).
    """
    remainder = instant.minute % interval_minutes
    rounded = _truncate_seconds(instant)
    if remainder == 0:
        return rounded
    return rounded + timedelta(minutes=interval_minutes - remainder)


def round_time(instant: datetime, interval_minutes: int = DEFAULT_INTERVAL_MINUTES) -> datetime:
    """Round to an interval boundary (always up)."""
    return round_time_up(instant, interval_minutes)


def apply_clock_in_rounding(instant: datetime, interval: int = DEFAULT_INTERVAL_MINUTES) -> datetime:
    if interval <= 0:
        return instant
    return round_time_down(instant, interval)


def apply_clock_out_rounding(instant: datetime, interval: int = DEFAULT_INTERVAL_MINUTES) -> datetime:
    if interval <= 0:
        return instant
    return round_time_up(instant, interval)


def round_interval(interval: WorkInterval, rounding_interval: int = DEFAULT_INTERVAL_MINUTES) -> WorkInterval:
    """Apply ingestion rounding to both ends of a work interval.

    Returns a new interval; the input is left untouched. A sub-minute shift
    whose ends collapse onto the same boundary is billed one interval.
    """
    start = apply_clock_in_rounding(interval.start, rounding_interval)
    end = None
    if interval.end is not None:
        end = apply_clock_out_rounding(interval.end, rounding_interval)
        if end <= start:
            end = start + timedelta(minutes=rounding_interval)
    return WorkInterval(start=start, end=end, break_minutes=interval.break_minutes)

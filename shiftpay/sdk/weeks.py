"""Calendar-week arithmetic shared by every component.

A calendar week runs Sunday 00:00:00.000 through Saturday 23:59:59.999 in
local wall-clock time. All helpers return new datetimes.
"""

from datetime import date, datetime, time, timedelta
from typing import Tuple

# Period and week end bounds carry millisecond precision.
END_OF_DAY = time(23, 59, 59, 999000)
ONE_MILLISECOND = timedelta(milliseconds=1)


def start_of_day(instant: datetime) -> datetime:
    return datetime.combine(instant.date(), time.min)


def end_of_day(instant: datetime) -> datetime:
    return datetime.combine(instant.date(), END_OF_DAY)


def calendar_date(year: int, month: int, day: int) -> date:
    """Build a date, rolling month and day overflow forward.

    Months outside 1..12 carry into the neighbouring year and days past the
    end of the month carry into the next month, so (2024, 4, 31) is
    2024-05-01 and (2024, 0, 11) is 2023-12-11.
    """
    carry, month_index = divmod(month - 1, 12)
    first = date(year + carry, month_index + 1, 1)
    return first + timedelta(days=day - 1)


def week_start_sunday(instant: datetime) -> datetime:
    """Sunday 00:00 of the calendar week containing instant."""
    days_since_sunday = (instant.weekday() + 1) % 7
    return start_of_day(instant) - timedelta(days=days_since_sunday)


def week_end_saturday(sunday: datetime) -> datetime:
    """Saturday 23:59:59.999 of the week that starts on sunday."""
    return end_of_day(sunday + timedelta(days=6))


def week_bounds(instant: datetime) -> Tuple[datetime, datetime]:
    """True (unclipped) calendar week bounds for instant."""
    sunday = week_start_sunday(instant)
    return sunday, week_end_saturday(sunday)

"""Pay period resolution and week decomposition.

Two pay period policies:

- weekly: Sunday 00:00 through Saturday 23:59:59.999
- monthly: cutover day D (default 10); a period runs from D+1 of one month
  through D of the next, both inclusive

Cutover days past the end of a short month roll into the next month
(D=31 in April resolves to May 1).
"""

from datetime import datetime, timedelta
from typing import List, Optional, Union

from .schemas import PayPeriod, PayPeriodType, Week
from .weeks import (
    END_OF_DAY,
    ONE_MILLISECOND,
    calendar_date,
    week_bounds,
    week_end_saturday,
    week_start_sunday,
)

DEFAULT_PERIOD_TYPE = PayPeriodType.MONTHLY
DEFAULT_END_DAY = 10


def _monthly_period(instant: datetime, end_day: int) -> PayPeriod:
    year, month = instant.year, instant.month
    if instant.day >= end_day + 1:
        start = calendar_date(year, month, end_day + 1)
        end = calendar_date(year, month + 1, end_day)
    else:
        start = calendar_date(year, month - 1, end_day + 1)
        end = calendar_date(year, month, end_day)
    return PayPeriod(
        start=datetime.combine(start, datetime.min.time()),
        end=datetime.combine(end, END_OF_DAY),
    )


def get_current_pay_period(
    instant: Optional[datetime] = None,
    period_type: Union[PayPeriodType, str] = DEFAULT_PERIOD_TYPE,
    end_day: int = DEFAULT_END_DAY,
) -> PayPeriod:
    """Get the pay period containing instant (default: now).

    Args:
        instant: Local wall-clock time to resolve.
        period_type: "weekly" or "monthly". Anything other than weekly is
            treated as monthly.
        end_day: Monthly cutover day (ignored for weekly periods).

    Returns:
        PayPeriod with inclusive start and end-of-day end.
    """
    if instant is None:
        instant = datetime.now()

    if period_type == PayPeriodType.WEEKLY:
        start, end = week_bounds(instant)
        return PayPeriod(start=start, end=end)
    return _monthly_period(instant, end_day)


def get_pay_period_for_date(
    instant: datetime,
    period_type: Union[PayPeriodType, str] = DEFAULT_PERIOD_TYPE,
    end_day: int = DEFAULT_END_DAY,
) -> PayPeriod:
    """Get the pay period containing a specific date."""
    return get_current_pay_period(instant, period_type, end_day)


def is_date_in_pay_period(instant: datetime, period: PayPeriod) -> bool:
    return period.contains(instant)


def list_pay_periods(
    earliest: datetime,
    latest: Optional[datetime] = None,
    period_type: Union[PayPeriodType, str] = DEFAULT_PERIOD_TYPE,
    end_day: int = DEFAULT_END_DAY,
) -> List[PayPeriod]:
    """List every pay period between two instants, newest first.

    Starts from the period containing latest (default: now) and steps back
    one period at a time until the period containing earliest is included.
    """
    if latest is None:
        latest = datetime.now()

    periods: List[PayPeriod] = []
    period = get_pay_period_for_date(latest, period_type, end_day)
    while True:
        if period not in periods:
            periods.append(period)
        if period.start <= earliest:
            break
        previous = get_pay_period_for_date(period.start - ONE_MILLISECOND, period_type, end_day)
        if previous.start >= period.start:
            # Rollover produced a period that does not move backwards
            break
        period = previous

    return sorted(periods, key=lambda p: p.start, reverse=True)


def get_weeks_in_pay_period(period: PayPeriod) -> List[Week]:
    """Split a pay period into the Sunday-Saturday weeks that intersect it.

    The first and last weeks are clipped to the period; every week in
    between is a full calendar week. Weeks are contiguous: each week's end
    plus 1ms is the next week's start.
    """
    weeks: List[Week] = []
    sunday = week_start_sunday(period.start)
    week_number = 1

    while sunday <= period.end:
        saturday = week_end_saturday(sunday)
        weeks.append(Week(
            start=max(sunday, period.start),
            end=min(saturday, period.end),
            week_number=week_number,
        ))
        sunday = sunday + timedelta(days=7)
        week_number += 1

    return weeks

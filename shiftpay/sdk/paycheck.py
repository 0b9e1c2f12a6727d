"""Paycheck estimates for a pay period.

Two views of the same entries are computed side by side:

- threshold basis: every entry in each full calendar week, so the 40 hour
  threshold sees hours from an adjacent pay period
- display basis: only entries that start inside the pay period, with each
  entry's regular/overtime share taken from its full week

A boundary week worked 38h at the end of one period and 10h at the start
of the next reports 8 overtime hours in the later period and none in the
earlier one.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from .overtime import allocate_week, build_pay_calculation, calculate_pay, calculate_pay_for_profile
from .pay_period import get_current_pay_period, get_weeks_in_pay_period
from .schemas import (
    PayCalculation,
    PaycheckEstimate,
    PayPeriod,
    PayProfile,
    Week,
    WeeklyBreakdown,
    WorkInterval,
)
from .taxes.schemas import TaxRules
from .weeks import week_start_sunday

logger = logging.getLogger(__name__)

EntryFetcher = Callable[[datetime, datetime], Iterable[WorkInterval]]


def _week_key(entry: WorkInterval) -> datetime:
    return week_start_sunday(entry.start)


def fetch_week_entries(weeks: Iterable[Week], fetch: EntryFetcher) -> List[WorkInterval]:
    """Collect entries for the full calendar window of each week.

    fetch(start, end) is called once per week with the week's true
    Sunday-Saturday bounds. Only entries whose start falls in that week are
    kept from each call, so every record is collected exactly once even if
    fetch returns more than asked for. Separate records with identical
    times are all kept.
    """
    entries: List[WorkInterval] = []
    for week in weeks:
        entries.extend(
            entry for entry in fetch(week.calendar_start, week.calendar_end)
            if _week_key(entry) == week.calendar_start
        )
    return entries


def estimate_paycheck(
    profile: PayProfile,
    entries: Iterable[WorkInterval],
    period: Optional[PayPeriod] = None,
    now: Optional[datetime] = None,
    rules: Optional[TaxRules] = None,
) -> PaycheckEstimate:
    """Estimate the paycheck for a pay period.

    Args:
        profile: Pay configuration (rate, overtime, period policy, taxes)
        entries: Work intervals covering at least every full calendar week
            that intersects the period. Entries outside those weeks are
            ignored.
        period: Pay period to estimate. Defaults to the profile's period
            containing now.
        now: Reference time for the default period.
        rules: Tax rules (defaults to the newest packaged year)

    Returns:
        PaycheckEstimate. The paycheck adjustment is added once to the
        period totals and split evenly across the weekly breakdown.
    """
    if period is None:
        period = get_current_pay_period(now, profile.pay_period_type, profile.pay_period_end_day)

    completed = [e for e in entries if e.is_complete]
    weeks = get_weeks_in_pay_period(period)
    adjustment = profile.paycheck_adjustment
    weekly_adjustment = adjustment / len(weeks) if weeks else 0.0

    logger.info(f"paycheck for {period.start:%Y-%m-%d} to {period.end:%Y-%m-%d}: {len(completed)} completed entries")

    breakdown: List[WeeklyBreakdown] = []
    period_regular = 0.0
    period_overtime = 0.0

    for week in weeks:
        week_entries = [e for e in completed if _week_key(e) == week.calendar_start]
        week_calc = calculate_pay_for_profile(week_entries, profile, rules)

        in_period = [a for a in allocate_week(week_entries) if period.contains(a.interval.start)]
        regular = sum(a.regular_hours for a in in_period)
        overtime = sum(a.overtime_hours for a in in_period)
        period_regular += regular
        period_overtime += overtime

        logger.debug(
            f"week {week.week_number} ({week.calendar_start:%Y-%m-%d} to {week.calendar_end:%Y-%m-%d}): "
            f"{len(week_entries)} entries, {week_calc.total_hours:.2f}h full week, "
            f"{regular + overtime:.2f}h in period ({overtime:.2f} overtime)"
        )

        breakdown.append(WeeklyBreakdown(
            week=week,
            calculation=week_calc.with_adjustment(weekly_adjustment),
            period_regular_hours=regular,
            period_overtime_hours=overtime,
        ))

    calculation = build_pay_calculation(
        period_regular,
        period_overtime,
        profile.hourly_rate,
        profile.overtime_multiplier,
        profile.state,
        profile.custom_state_tax_rate,
        profile.filing_status,
        rules,
    )
    logger.debug(f"before adjustment: gross={calculation.gross_pay:.2f} net={calculation.net_pay:.2f}")
    calculation = calculation.with_adjustment(adjustment)
    logger.info(f"gross={calculation.gross_pay:.2f} net={calculation.net_pay:.2f} (adjustment {adjustment:+.2f})")

    return PaycheckEstimate(
        profile=profile,
        period=period,
        calculation=calculation,
        weekly_breakdown=breakdown,
        adjustment=adjustment,
    )


def estimate_hours(
    profile: PayProfile,
    hours: float,
    weekly_hours_already: float = 0.0,
    rules: Optional[TaxRules] = None,
) -> PayCalculation:
    """Ad-hoc estimate for a number of hours, adjustment included."""
    calculation = calculate_pay(
        hours,
        profile.hourly_rate,
        weekly_hours_already=weekly_hours_already,
        overtime_multiplier=profile.overtime_multiplier,
        state=profile.state,
        custom_state_tax_rate=profile.custom_state_tax_rate,
        filing_status=profile.filing_status,
        rules=rules,
    )
    return calculation.with_adjustment(profile.paycheck_adjustment)

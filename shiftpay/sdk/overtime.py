"""Weekly overtime allocation and pay calculation.

Overtime is earned past 40 worked hours in a calendar week (Sunday
through Saturday). Weeks are always the true calendar weeks containing
each entry's start, never weeks clipped to a pay period, so a week that
straddles two pay periods still reaches the threshold correctly as long
as the caller passes the full week of entries.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from .schemas import Break, EntryAllocation, PayCalculation, PayProfile, WorkInterval
from .taxes import calculate_net_pay
from .taxes.schemas import DEFAULT_FILING_STATUS, TaxRules
from .weeks import week_start_sunday

logger = logging.getLogger(__name__)

WEEKLY_OVERTIME_THRESHOLD = 40.0

# Tax estimates assume 24 pay periods a year whatever the actual period
# type. Known estimation gap for weekly payers; kept deliberately.
PAY_PERIODS_PER_YEAR = 24


def annualize(gross_pay: float) -> float:
    return gross_pay * PAY_PERIODS_PER_YEAR


def total_break_minutes(breaks: Iterable[Break]) -> int:
    """Total break minutes from a list of breaks.

    A recorded duration wins; otherwise the elapsed time is rounded to
    whole minutes. Breaks still in progress count as zero.
    """
    total = 0
    for brk in breaks:
        if brk.duration_minutes:
            total += brk.duration_minutes
        elif brk.end is not None:
            total += round((brk.end - brk.start).total_seconds() / 60)
    return total


def group_hours_by_week(entries: Iterable[WorkInterval]) -> Dict[datetime, float]:
    """Worked hours of completed entries keyed by the Sunday of their week."""
    weeks: Dict[datetime, float] = defaultdict(float)
    for entry in entries:
        if not entry.is_complete:
            continue
        weeks[week_start_sunday(entry.start)] += entry.worked_hours()
    return dict(weeks)


def split_week_hours(hours: float, already: float = 0.0) -> Tuple[float, float]:
    """Split hours into (regular, overtime) for a single week.

    Args:
        hours: Hours to classify
        already: Hours already worked earlier in the same week
    """
    room = max(WEEKLY_OVERTIME_THRESHOLD - already, 0.0)
    regular = min(hours, room)
    overtime = max(0.0, hours - regular)
    return regular, overtime


def allocate_week(entries: Iterable[WorkInterval]) -> List[EntryAllocation]:
    """Allocate one calendar week's threshold across its entries.

    Entries are taken in start order: the first 40 hours are regular and
    everything after is overtime. Open entries are skipped. Totals always
    equal split_week_hours() on the week's summed hours.
    """
    allocations: List[EntryAllocation] = []
    worked_so_far = 0.0
    for entry in sorted((e for e in entries if e.is_complete), key=lambda e: e.start):
        hours = entry.worked_hours()
        regular, overtime = split_week_hours(hours, worked_so_far)
        worked_so_far += hours
        allocations.append(EntryAllocation(
            interval=entry,
            regular_hours=regular,
            overtime_hours=overtime,
        ))
    return allocations


def allocate_entries(entries: Iterable[WorkInterval]) -> List[EntryAllocation]:
    """Run allocate_week() over every calendar week touched by entries."""
    by_week: Dict[datetime, List[WorkInterval]] = defaultdict(list)
    for entry in entries:
        by_week[week_start_sunday(entry.start)].append(entry)

    allocations: List[EntryAllocation] = []
    for sunday in sorted(by_week):
        allocations.extend(allocate_week(by_week[sunday]))
    return allocations


def build_pay_calculation(
    regular_hours: float,
    overtime_hours: float,
    hourly_rate: float,
    overtime_multiplier: float = 1.5,
    state: Optional[str] = None,
    custom_state_tax_rate: Optional[float] = None,
    filing_status=DEFAULT_FILING_STATUS,
    rules: Optional[TaxRules] = None,
) -> PayCalculation:
    """Price already-classified hours and attach the tax estimate."""
    regular_pay = regular_hours * hourly_rate
    overtime_pay = overtime_hours * hourly_rate * overtime_multiplier
    gross_pay = regular_pay + overtime_pay

    taxes = calculate_net_pay(
        gross_pay,
        annualize(gross_pay),
        state=state,
        custom_rate=custom_state_tax_rate,
        filing_status=filing_status,
        rules=rules,
    )

    return PayCalculation(
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        gross_pay=gross_pay,
        **taxes.model_dump(),
    )


def calculate_pay(
    hours: float,
    hourly_rate: float,
    weekly_hours_already: float = 0.0,
    overtime_multiplier: float = 1.5,
    state: Optional[str] = None,
    custom_state_tax_rate: Optional[float] = None,
    filing_status=DEFAULT_FILING_STATUS,
    rules: Optional[TaxRules] = None,
) -> PayCalculation:
    """Estimate pay for a raw number of hours within one week.

    Used for "what if I work N more hours" estimates: weekly_hours_already
    counts toward the 40 hour threshold but is not itself paid.
    """
    regular_hours, overtime_hours = split_week_hours(hours, weekly_hours_already)
    return build_pay_calculation(
        regular_hours,
        overtime_hours,
        hourly_rate,
        overtime_multiplier,
        state,
        custom_state_tax_rate,
        filing_status,
        rules,
    )


def calculate_pay_for_entries(
    entries: Iterable[WorkInterval],
    hourly_rate: float,
    overtime_multiplier: float = 1.5,
    state: Optional[str] = None,
    custom_state_tax_rate: Optional[float] = None,
    filing_status=DEFAULT_FILING_STATUS,
    rules: Optional[TaxRules] = None,
) -> PayCalculation:
    """Calculate pay for work intervals with weekly overtime.

    Hours are summed per calendar week; each week contributes
    min(H, 40) regular hours and max(0, H - 40) overtime hours. Open
    intervals are ignored and no entries gives an all-zero result.
    """
    regular_hours = 0.0
    overtime_hours = 0.0

    for sunday, week_hours in sorted(group_hours_by_week(entries).items()):
        regular, overtime = split_week_hours(week_hours)
        logger.debug(
            f"week of {sunday:%Y-%m-%d}: {week_hours:.2f}h "
            f"(regular {regular:.2f}, overtime {overtime:.2f})"
        )
        regular_hours += regular
        overtime_hours += overtime

    return build_pay_calculation(
        regular_hours,
        overtime_hours,
        hourly_rate,
        overtime_multiplier,
        state,
        custom_state_tax_rate,
        filing_status,
        rules,
    )


def calculate_pay_for_profile(
    entries: Iterable[WorkInterval],
    profile: PayProfile,
    rules: Optional[TaxRules] = None,
) -> PayCalculation:
    """calculate_pay_for_entries() with rates and tax settings from a profile."""
    return calculate_pay_for_entries(
        entries,
        profile.hourly_rate,
        overtime_multiplier=profile.overtime_multiplier,
        state=profile.state,
        custom_state_tax_rate=profile.custom_state_tax_rate,
        filing_status=profile.filing_status,
        rules=rules,
    )

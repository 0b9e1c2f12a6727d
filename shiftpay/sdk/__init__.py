"""shiftpay SDK - Pay period, overtime and tax estimation engine."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    set_profile_value,
    build_pay_profile,
    build_pay_policy,
    load_pay_profile,
    load_pay_policy,
    ProfileNotFoundError,
    ProfileValidationError,
)

from .schemas import (
    Break,
    EntryAllocation,
    FilingStatus,
    PayCalculation,
    PaycheckEstimate,
    PayPeriod,
    PayPolicy,
    PayPeriodType,
    PayProfile,
    TaxEstimate,
    Week,
    WeeklyBreakdown,
    WorkInterval,
)

from .rounding import (
    round_time_down,
    round_time_up,
    round_time,
    apply_clock_in_rounding,
    apply_clock_out_rounding,
    round_interval,
)

from .weeks import (
    week_start_sunday,
    week_end_saturday,
    week_bounds,
)

from .pay_period import (
    get_current_pay_period,
    get_pay_period_for_date,
    get_weeks_in_pay_period,
    is_date_in_pay_period,
    list_pay_periods,
)

from .overtime import (
    WEEKLY_OVERTIME_THRESHOLD,
    PAY_PERIODS_PER_YEAR,
    annualize,
    allocate_week,
    allocate_entries,
    calculate_pay,
    calculate_pay_for_entries,
    calculate_pay_for_profile,
    group_hours_by_week,
    split_week_hours,
    total_break_minutes,
)

from .paycheck import (
    estimate_paycheck,
    estimate_hours,
    fetch_week_entries,
)

from .taxes import (
    calculate_federal_tax,
    calculate_state_tax,
    calculate_fica,
    calculate_net_pay,
    load_tax_rules,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "get_profile_value",
    "set_profile_value",
    "build_pay_profile",
    "build_pay_policy",
    "load_pay_profile",
    "load_pay_policy",
    "ProfileNotFoundError",
    "ProfileValidationError",
    # Records and results
    "Break",
    "EntryAllocation",
    "FilingStatus",
    "PayCalculation",
    "PaycheckEstimate",
    "PayPeriod",
    "PayPolicy",
    "PayPeriodType",
    "PayProfile",
    "TaxEstimate",
    "Week",
    "WeeklyBreakdown",
    "WorkInterval",
    # Rounding
    "round_time_down",
    "round_time_up",
    "round_time",
    "apply_clock_in_rounding",
    "apply_clock_out_rounding",
    "round_interval",
    # Calendar weeks and pay periods
    "week_start_sunday",
    "week_end_saturday",
    "week_bounds",
    "get_current_pay_period",
    "get_pay_period_for_date",
    "get_weeks_in_pay_period",
    "is_date_in_pay_period",
    "list_pay_periods",
    # Overtime and pay
    "WEEKLY_OVERTIME_THRESHOLD",
    "PAY_PERIODS_PER_YEAR",
    "annualize",
    "allocate_week",
    "allocate_entries",
    "calculate_pay",
    "calculate_pay_for_entries",
    "calculate_pay_for_profile",
    "group_hours_by_week",
    "split_week_hours",
    "total_break_minutes",
    # Paycheck
    "estimate_paycheck",
    "estimate_hours",
    "fetch_week_entries",
    # Taxes
    "calculate_federal_tax",
    "calculate_state_tax",
    "calculate_fica",
    "calculate_net_pay",
    "load_tax_rules",
]

"""Pydantic schemas for shiftpay records and results.

All schemas are frozen and use extra='forbid': records are value objects
built fresh per calculation, and typos in profile files fail loudly instead
of being silently ignored.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .weeks import ONE_MILLISECOND, week_bounds


class PayPeriodType(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class FilingStatus(str, Enum):
    SINGLE = "single"
    MFJ = "mfj"
    HOH = "hoh"


# =============================================================================
# Time records
# =============================================================================


class Break(BaseModel):
    """A break taken during a work interval."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: datetime
    end: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)


class WorkInterval(BaseModel):
    """One clock-in/clock-out record.

    An interval with no end is still in progress and never contributes
    hours or pay.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: datetime
    end: Optional[datetime] = None
    break_minutes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _end_after_start(self) -> "WorkInterval":
        if self.end is not None and self.end <= self.start:
            raise ValueError(f"end ({self.end}) must be after start ({self.start})")
        return self

    @property
    def is_complete(self) -> bool:
        return self.end is not None

    def worked_hours(self) -> float:
        """Elapsed hours minus breaks; 0 for an open interval."""
        if self.end is None:
            return 0.0
        elapsed = (self.end - self.start).total_seconds() / 3600
        return elapsed - self.break_minutes / 60


class PayPeriod(BaseModel):
    """Billing window; end carries 23:59:59.999.

    Containment runs up to the next period's first millisecond, so an
    instant inside the final millisecond still belongs to this period.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _start_not_after_end(self) -> "PayPeriod":
        if self.start > self.end:
            raise ValueError(f"period start ({self.start}) is after end ({self.end})")
        return self

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end + ONE_MILLISECOND


class Week(BaseModel):
    """A calendar week as seen from inside a pay period.

    start/end are clipped to the enclosing period. The true Sunday-Saturday
    bounds are recomputed from start, never taken from the clipped values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: datetime
    end: datetime
    week_number: int = Field(..., ge=1)

    @property
    def calendar_start(self) -> datetime:
        return week_bounds(self.start)[0]

    @property
    def calendar_end(self) -> datetime:
        return week_bounds(self.start)[1]

    @property
    def is_clipped(self) -> bool:
        return self.start != self.calendar_start or self.end != self.calendar_end


# =============================================================================
# Pay configuration
# =============================================================================


class PayPolicy(BaseModel):
    """The rate-independent part of a pay profile.

    Pay period, tax and rounding settings. Commands that never price hours
    validate against this model so a profile without hourly_rate still
    resolves periods and taxes.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    overtime_multiplier: float = Field(default=1.5, ge=1, description="Overtime pay multiplier")
    pay_period_type: PayPeriodType = Field(default=PayPeriodType.MONTHLY)
    pay_period_end_day: int = Field(
        default=10, ge=1, le=31,
        description="Monthly cutover day; periods run from day+1 to day of next month",
    )
    state: Optional[str] = Field(default=None, description="Two-letter state code")
    custom_state_tax_rate: Optional[float] = Field(
        default=None, ge=0, le=1,
        description="Flat state rate overriding the state lookup",
    )
    paycheck_adjustment: float = Field(
        default=0.0,
        description="Flat amount added to (or subtracted from) gross and net",
    )
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)
    rounding_interval: int = Field(
        default=5, ge=0,
        description="Clock rounding interval in minutes; 0 disables rounding",
    )

    @field_validator("state")
    @classmethod
    def _normalize_state(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().upper()
        return value or None


class PayProfile(PayPolicy):
    """A user's pay configuration.

    Defaults documented here and on PayPolicy are the only place they are
    defined; the engine never re-derives them.
    """

    hourly_rate: float = Field(..., gt=0, description="Base hourly rate")


# =============================================================================
# Results
# =============================================================================


class TaxEstimate(BaseModel):
    """Taxes for one gross amount, prorated from annual estimates."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    federal_tax: float = 0.0
    state_tax: float = 0.0
    fica: float = 0.0
    net_pay: float = 0.0
    social_security: float = 0.0
    medicare: float = 0.0
    effective_state_tax_rate: float = 0.0


class PayCalculation(BaseModel):
    """Hours, pay and tax estimate for a set of work intervals.

    gross_pay == regular_pay + overtime_pay and
    net_pay == gross_pay - federal_tax - state_tax - fica, until a caller
    applies a paycheck adjustment with with_adjustment().
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    regular_pay: float = 0.0
    overtime_pay: float = 0.0
    gross_pay: float = 0.0
    federal_tax: float = 0.0
    state_tax: float = 0.0
    fica: float = 0.0
    net_pay: float = 0.0
    social_security: float = 0.0
    medicare: float = 0.0
    effective_state_tax_rate: float = 0.0

    @property
    def total_hours(self) -> float:
        return self.regular_hours + self.overtime_hours

    def with_adjustment(self, amount: float) -> "PayCalculation":
        """Copy with amount added to gross and net pay."""
        if not amount:
            return self
        return self.model_copy(update={
            "gross_pay": self.gross_pay + amount,
            "net_pay": self.net_pay + amount,
        })


class EntryAllocation(BaseModel):
    """One interval's share of its calendar week's regular/overtime split."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    interval: WorkInterval
    regular_hours: float = 0.0
    overtime_hours: float = 0.0


class WeeklyBreakdown(BaseModel):
    """Full-week calculation for one week of a pay period.

    calculation uses every entry of the calendar week (threshold basis);
    period_* hours only count entries that start inside the pay period.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    week: Week
    calculation: PayCalculation
    period_regular_hours: float = 0.0
    period_overtime_hours: float = 0.0


class PaycheckEstimate(BaseModel):
    """Paycheck for one pay period with its weekly breakdown."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    profile: PayProfile
    period: PayPeriod
    calculation: PayCalculation
    weekly_breakdown: List[WeeklyBreakdown] = Field(default_factory=list)
    adjustment: float = 0.0

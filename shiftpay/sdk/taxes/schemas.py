"""Pydantic schemas for tax rules validation.

These schemas validate the rules/*.yaml files and provide typed access
to tax parameters like the SS wage cap, Medicare thresholds and brackets.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_FILING_STATUS = "single"


def filing_status_key(filing_status) -> str:
    """Normalize a FilingStatus enum or string to a rules key."""
    value = getattr(filing_status, "value", filing_status) or DEFAULT_FILING_STATUS
    return str(value).strip().lower()


class TaxBracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to: Optional[float] = Field(default=None, description="Upper bound (None if 'over' bracket)")
    over: Optional[float] = Field(default=None, description="Lower bound for top bracket")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")

    @model_validator(mode="after")
    def _has_one_bound(self) -> "TaxBracket":
        if (self.up_to is None) == (self.over is None):
            raise ValueError("bracket needs exactly one of 'up_to' or 'over'")
        return self


class FilingStatusRules(BaseModel):
    """Standard deduction and brackets for one filing status."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard_deduction: float = Field(..., ge=0)
    tax_brackets: list[TaxBracket]


class SocialSecurityRules(BaseModel):
    """Social Security tax rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    wage_cap: float = Field(..., gt=0, description="SS wage base (max taxable)")
    tax_rate: float = Field(..., ge=0, le=1, description="SS tax rate (employee portion)")


class MedicareRules(BaseModel):
    """Medicare tax rules, including the high-income surtax."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_rate: float = Field(..., ge=0, le=1)
    additional_rate: float = Field(..., ge=0, le=1)
    additional_threshold: float = Field(..., ge=0)


class StateRules(BaseModel):
    """State income tax reference data.

    progressive: state code -> filing status -> brackets
    flat_rates: state code -> flat rate
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    default_rate: float = Field(..., ge=0, le=1)
    progressive: Dict[str, Dict[str, FilingStatusRules]] = Field(default_factory=dict)
    flat_rates: Dict[str, float] = Field(default_factory=dict)

    def progressive_for(self, state: Optional[str], filing_status=DEFAULT_FILING_STATUS) -> Optional[FilingStatusRules]:
        if not state:
            return None
        tables = self.progressive.get(state.upper())
        if not tables:
            return None
        return tables.get(filing_status_key(filing_status)) or tables.get(DEFAULT_FILING_STATUS)

    def flat_rate_for(self, state: Optional[str]) -> float:
        if not state:
            return self.default_rate
        return self.flat_rates.get(state.upper(), self.default_rate)


class TaxRules(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    year: int
    federal: Dict[str, FilingStatusRules]
    social_security: SocialSecurityRules
    medicare: MedicareRules
    state: StateRules

    @model_validator(mode="after")
    def _has_single(self) -> "TaxRules":
        if DEFAULT_FILING_STATUS not in self.federal:
            raise ValueError("federal rules must define the 'single' filing status")
        return self

    def federal_for(self, filing_status=DEFAULT_FILING_STATUS) -> FilingStatusRules:
        """Federal rules for a filing status, falling back to single."""
        return self.federal.get(filing_status_key(filing_status)) or self.federal[DEFAULT_FILING_STATUS]

"""taxes - Progressive tax estimation.

Scope:
- Federal income tax (standard deduction + brackets per filing status)
- State income tax (custom flat rate, progressive reference state, flat table)
- FICA (capped Social Security, Medicare with high-income surtax)
- Proration of annual estimates down to one paycheck

Constraints:
- Pure calculation, no profile or storage access
- Year-specific rules loaded from rules/{year}.yaml

Usage:
    from shiftpay.sdk.taxes import calculate_net_pay

    estimate = calculate_net_pay(gross_pay=2000, annual_gross_pay=48000, state="MT")
"""

from .rules import available_years, load_tax_rules
from .schemas import TaxRules
from .withholding import (
    apply_brackets,
    calculate_federal_tax,
    calculate_fica,
    calculate_medicare,
    calculate_net_pay,
    calculate_social_security,
    calculate_state_tax,
    resolve_state_tax,
)

__all__ = [
    # Rules
    "TaxRules",
    "available_years",
    "load_tax_rules",
    # Calculations
    "apply_brackets",
    "calculate_federal_tax",
    "calculate_state_tax",
    "resolve_state_tax",
    "calculate_social_security",
    "calculate_medicare",
    "calculate_fica",
    "calculate_net_pay",
]

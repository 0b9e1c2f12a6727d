"""Annual tax estimates prorated down to a paycheck.

Every tax is first computed on an annualized gross, then scaled to the
gross actually earned by the ratio gross / annual_gross. The results are
estimates built from published bracket tables, not payroll-exact figures.
"""

import logging
from typing import Optional, Tuple

from ..schemas import TaxEstimate
from .rules import load_tax_rules
from .schemas import DEFAULT_FILING_STATUS, TaxBracket, TaxRules

logger = logging.getLogger(__name__)


def apply_brackets(taxable_income: float, tax_brackets: list[TaxBracket]) -> float:
    """Progressive bracket math: each band taxes only the income inside it."""
    tax_owed = 0.0
    previous_bracket_max = 0.0

    sorted_brackets = sorted(
        tax_brackets,
        key=lambda b: b.up_to if b.up_to is not None else float("inf"),
    )

    for bracket in sorted_brackets:
        if bracket.up_to is not None:
            if taxable_income > previous_bracket_max:
                income_in_this_bracket = min(taxable_income, bracket.up_to) - previous_bracket_max
                tax_owed += income_in_this_bracket * bracket.rate
            previous_bracket_max = bracket.up_to
        elif taxable_income > bracket.over:
            tax_owed += (taxable_income - bracket.over) * bracket.rate

    return tax_owed


def calculate_federal_tax(
    annual_income: float,
    filing_status=DEFAULT_FILING_STATUS,
    rules: Optional[TaxRules] = None,
) -> float:
    """Annual federal income tax after the standard deduction."""
    rules = rules or load_tax_rules()
    status_rules = rules.federal_for(filing_status)
    taxable = max(0.0, annual_income - status_rules.standard_deduction)
    return apply_brackets(taxable, status_rules.tax_brackets)


def resolve_state_tax(
    annual_income: float,
    state: Optional[str] = None,
    custom_rate: Optional[float] = None,
    filing_status=DEFAULT_FILING_STATUS,
    rules: Optional[TaxRules] = None,
) -> Tuple[float, float]:
    """Annual state tax and the rate it represents.

    Resolution order:
    1. custom_rate, applied flat to the whole income
    2. a progressive jurisdiction (standard deduction + brackets)
    3. the flat per-state table, else the default rate

    Returns:
        Tuple of (annual_state_tax, rate). For a progressive state the rate
        is the effective rate, tax / income.
    """
    if custom_rate is not None:
        return annual_income * custom_rate, custom_rate

    rules = rules or load_tax_rules()
    progressive = rules.state.progressive_for(state, filing_status)
    if progressive is not None:
        taxable = max(0.0, annual_income - progressive.standard_deduction)
        tax = apply_brackets(taxable, progressive.tax_brackets)
        effective_rate = tax / annual_income if annual_income > 0 else 0.0
        return tax, effective_rate

    rate = rules.state.flat_rate_for(state)
    return annual_income * rate, rate


def calculate_state_tax(
    annual_income: float,
    state: Optional[str] = None,
    custom_rate: Optional[float] = None,
    filing_status=DEFAULT_FILING_STATUS,
    rules: Optional[TaxRules] = None,
) -> float:
    tax, _ = resolve_state_tax(annual_income, state, custom_rate, filing_status, rules)
    return tax


def calculate_social_security(annual_income: float, rules: Optional[TaxRules] = None) -> float:
    """Social Security tax on wages up to the wage cap."""
    rules = rules or load_tax_rules()
    ss = rules.social_security
    return min(max(annual_income, 0.0), ss.wage_cap) * ss.tax_rate


def calculate_medicare(annual_income: float, rules: Optional[TaxRules] = None) -> float:
    """Medicare tax, uncapped, plus the surtax above the threshold."""
    rules = rules or load_tax_rules()
    medicare = rules.medicare
    tax = max(annual_income, 0.0) * medicare.tax_rate
    if annual_income > medicare.additional_threshold:
        tax += (annual_income - medicare.additional_threshold) * medicare.additional_rate
    return tax


def calculate_fica(annual_income: float, rules: Optional[TaxRules] = None) -> float:
    return calculate_social_security(annual_income, rules) + calculate_medicare(annual_income, rules)


def calculate_net_pay(
    gross_pay: float,
    annual_gross_pay: float,
    state: Optional[str] = None,
    custom_rate: Optional[float] = None,
    filing_status=DEFAULT_FILING_STATUS,
    rules: Optional[TaxRules] = None,
) -> TaxEstimate:
    """Estimate taxes and net pay for one gross amount.

    Args:
        gross_pay: Gross actually earned (one paycheck or one week)
        annual_gross_pay: Annualized gross used for bracket selection
        state: Two-letter state code (case-insensitive)
        custom_rate: Flat state rate overriding the state lookup
        filing_status: 'single', 'mfj' or 'hoh'
        rules: Tax rules (defaults to the newest packaged year)

    Returns:
        TaxEstimate with prorated federal, state and FICA amounts. A zero
        annual gross yields an all-zero estimate with net_pay == gross_pay.
    """
    if annual_gross_pay <= 0:
        return TaxEstimate(net_pay=gross_pay)

    rules = rules or load_tax_rules()
    annual_federal = calculate_federal_tax(annual_gross_pay, filing_status, rules)
    annual_state, state_rate = resolve_state_tax(annual_gross_pay, state, custom_rate, filing_status, rules)
    annual_ss = calculate_social_security(annual_gross_pay, rules)
    annual_medicare = calculate_medicare(annual_gross_pay, rules)

    ratio = gross_pay / annual_gross_pay
    federal_tax = annual_federal * ratio
    state_tax = annual_state * ratio
    social_security = annual_ss * ratio
    medicare = annual_medicare * ratio
    fica = social_security + medicare

    logger.debug(
        f"taxes on {gross_pay:.2f} (annual {annual_gross_pay:.2f}): "
        f"federal={federal_tax:.2f} state={state_tax:.2f} fica={fica:.2f}"
    )

    return TaxEstimate(
        federal_tax=federal_tax,
        state_tax=state_tax,
        fica=fica,
        net_pay=gross_pay - federal_tax - state_tax - fica,
        social_security=social_security,
        medicare=medicare,
        effective_state_tax_rate=state_rate,
    )

"""
Input Presets

Starting values for a new calculation and the term/rate suggestions that
follow a change of borrower category or loan purpose.
"""

from dataclasses import replace
from typing import Dict, Tuple

from loan_appraisal.calculations.models import (
    Frequency,
    InvestmentInputs,
    LoanInputs,
    LoanPurpose,
    RepaymentMethod,
    UserType,
)

DEFAULT_LOAN_INPUTS = LoanInputs(
    amount=2_000_000_000,
    rate=8.5,
    term_months=240,
    inflation=4.0,
    user_type=UserType.PERSONAL,
    purpose=LoanPurpose.HOME_BUYING,
    repayment_method=RepaymentMethod.ANNUITY,
    frequency=Frequency.MONTHLY,
    tax_rate=20.0,
    monthly_income=60_000_000,
    grace_period_months=0,
    balloon_amount=0.0,
)

DEFAULT_INVESTMENT_INPUTS = InvestmentInputs(
    equity=1_000_000_000,
    projected_cashflow=600_000_000,
    wacc=12.0,
)

PURPOSES_BY_USER_TYPE: Dict[UserType, Tuple[LoanPurpose, ...]] = {
    UserType.PERSONAL: (
        LoanPurpose.HOME_BUYING,
        LoanPurpose.CAR_BUYING,
        LoanPurpose.CONSUMPTION,
    ),
    UserType.BUSINESS: (
        LoanPurpose.WORKING_CAPITAL,
        LoanPurpose.ASSET_PURCHASE,
        LoanPurpose.PROJECT_INVESTMENT,
    ),
}

# (term in months, annual rate %)
PURPOSE_DEFAULTS: Dict[LoanPurpose, Tuple[int, float]] = {
    LoanPurpose.HOME_BUYING: (240, 7.5),
    LoanPurpose.CAR_BUYING: (60, 9.5),
    LoanPurpose.CONSUMPTION: (36, 18.0),  # unsecured
    LoanPurpose.WORKING_CAPITAL: (6, 6.5),
    LoanPurpose.PROJECT_INVESTMENT: (60, 8.0),
    LoanPurpose.ASSET_PURCHASE: (48, 8.5),
}

USER_TYPE_DEFAULTS: Dict[UserType, Dict] = {
    UserType.PERSONAL: {
        "purpose": LoanPurpose.HOME_BUYING,
        "amount": 2_000_000_000,
        "rate": 8.5,
        "term_months": 240,
        "monthly_income": 60_000_000,
        "frequency": Frequency.MONTHLY,
        "grace_period_months": 0,
        "balloon_amount": 0.0,
    },
    UserType.BUSINESS: {
        "purpose": LoanPurpose.WORKING_CAPITAL,
        "amount": 5_000_000_000,
        "rate": 7.5,
        "term_months": 12,
        "frequency": Frequency.MONTHLY,
        "grace_period_months": 0,
        "balloon_amount": 0.0,
    },
}


def apply_user_type(inputs: LoanInputs, user_type: UserType) -> LoanInputs:
    """Switch borrower category, resetting the loan to that category's defaults."""
    return replace(inputs, user_type=user_type, **USER_TYPE_DEFAULTS[user_type])


def apply_purpose(inputs: LoanInputs, purpose: LoanPurpose) -> LoanInputs:
    """Switch loan purpose, suggesting its usual term and rate."""
    term_months, rate = PURPOSE_DEFAULTS[purpose]
    return replace(inputs, purpose=purpose, term_months=term_months, rate=rate)

"""
Calculation Data Models

Input and result records shared by the amortization and appraisal engines.
All records are frozen so a caller can memoize on them.
"""

import enum
from dataclasses import dataclass, field
from typing import Tuple


class UserType(str, enum.Enum):
    """Borrower category."""

    PERSONAL = "PERSONAL"
    BUSINESS = "BUSINESS"


class LoanPurpose(str, enum.Enum):
    """What the loan is for. Drives defaults and advice, never the math."""

    # Personal
    CONSUMPTION = "CONSUMPTION"
    HOME_BUYING = "HOME_BUYING"
    CAR_BUYING = "CAR_BUYING"
    # Business
    WORKING_CAPITAL = "WORKING_CAPITAL"
    ASSET_PURCHASE = "ASSET_PURCHASE"
    PROJECT_INVESTMENT = "PROJECT_INVESTMENT"


class RepaymentMethod(str, enum.Enum):
    """How principal and interest are spread over the amortization phase."""

    ANNUITY = "ANNUITY"  # constant payment
    REDUCING_BALANCE = "REDUCING_BALANCE"  # constant principal
    FLAT_RATE = "FLAT_RATE"  # interest on the original amount


class Frequency(int, enum.Enum):
    """Payments per year."""

    MONTHLY = 12
    QUARTERLY = 4
    SEMI_ANNUALLY = 2
    YEARLY = 1


class Recommendation(str, enum.Enum):
    """Appraisal verdicts. INVEST/REJECT/CAUTION for business, SAFE/CAUTION/RISKY for personal."""

    INVEST = "INVEST"
    REJECT = "REJECT"
    CAUTION = "CAUTION"
    SAFE = "SAFE"
    RISKY = "RISKY"


@dataclass(frozen=True)
class LoanInputs:
    """
    Loan parameters for one calculation.

    Rates are percentages (8.5 means 8.5% per year). ``tax_rate`` only
    matters for business borrowers and ``monthly_income`` only for personal
    ones.
    """

    amount: float
    rate: float  # % per year
    term_months: int
    inflation: float = 0.0  # % per year
    user_type: UserType = UserType.PERSONAL
    purpose: LoanPurpose = LoanPurpose.HOME_BUYING
    repayment_method: RepaymentMethod = RepaymentMethod.ANNUITY
    frequency: Frequency = Frequency.MONTHLY
    tax_rate: float = 0.0  # % (business only)
    monthly_income: float = 0.0  # personal only
    grace_period_months: int = 0  # interest-only phase
    balloon_amount: float = 0.0  # lump sum due with the final payment


@dataclass(frozen=True)
class InvestmentInputs:
    """Project inputs for the business appraisal."""

    equity: float
    projected_cashflow: float  # per year
    wacc: float  # % per year


@dataclass(frozen=True)
class ScheduleRow:
    """One payment period of the amortization schedule."""

    period: int
    payment: float
    principal: float
    interest: float
    balance: float
    tax_shield: float
    real_payment: float  # payment deflated by cumulative inflation


@dataclass(frozen=True)
class CalculationResult:
    """Schedule plus aggregate totals."""

    total_interest: float
    total_payment: float
    total_tax_shield: float
    real_pv: float
    schedule: Tuple[ScheduleRow, ...] = field(default_factory=tuple)
    monthly_payment_display: float = 0.0

    @classmethod
    def empty(cls) -> "CalculationResult":
        """Zero result returned for inputs that cannot be amortized."""
        return cls(
            total_interest=0.0,
            total_payment=0.0,
            total_tax_shield=0.0,
            real_pv=0.0,
            schedule=(),
            monthly_payment_display=0.0,
        )


@dataclass(frozen=True)
class InvestmentResult:
    """Appraisal verdict. ``irr`` and ``dti`` are percentages."""

    npv: float
    irr: float
    dscr: float
    dti: float
    recommendation: Recommendation
    advice: str

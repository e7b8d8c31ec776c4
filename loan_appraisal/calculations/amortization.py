"""
Loan Amortization Calculations

Builds period-by-period repayment schedules for annuity, reducing-balance
and flat-rate loans, with optional interest-only grace periods and a
balloon payment due with the final installment.
"""

import logging
import math
from typing import List, Sequence

import numpy as np

from loan_appraisal.calculations.models import (
    CalculationResult,
    LoanInputs,
    RepaymentMethod,
    ScheduleRow,
    UserType,
)

logger = logging.getLogger(__name__)

# Balances below one currency unit are treated as paid off
BALANCE_TOLERANCE = 1.0


def calculate_payment(principal: float, periodic_rate: float, periods: int) -> float:
    """
    Calculate the constant installment that amortizes a principal.

    Matches Excel's PMT() function with a zero future value.

    Args:
        principal: Amount to amortize
        periodic_rate: Interest rate per payment period as decimal
        periods: Number of payment periods

    Returns:
        Payment per period (positive number)
    """
    if principal <= 0:
        return 0.0
    if periods <= 0:
        return 0.0

    with np.errstate(over="ignore"):
        factor = float(np.power(1.0 + periodic_rate, periods))

    # A rate too small to register compounds like no rate at all
    if factor == 1:
        return principal / periods
    # Over a very long term the installment tends to the interest alone
    if math.isinf(factor):
        return principal * periodic_rate

    return principal * periodic_rate * factor / (factor - 1)


def count_periods(term_months: int, frequency: int) -> int:
    """Number of payment periods covering ``term_months``."""
    return math.ceil(term_months / 12 * frequency)


def count_grace_periods(grace_period_months: int, frequency: int) -> int:
    """Number of payment periods covering the interest-only phase."""
    months_per_period = 12 / frequency
    return math.ceil(grace_period_months / months_per_period)


def compute_schedule(inputs: LoanInputs) -> CalculationResult:
    """
    Generate the full amortization schedule for a loan.

    Inputs that cannot be amortized (non-positive amount or term, or a grace
    period longer than the loan) produce ``CalculationResult.empty()`` rather
    than an error so that callers always have something to render.

    The final period absorbs the balloon and any floating-point drift so the
    closing balance is exactly zero.

    Args:
        inputs: Loan parameters

    Returns:
        Schedule rows with aggregate totals
    """
    if inputs.amount <= 0 or inputs.term_months <= 0:
        logger.debug("Empty schedule: amount=%s term=%s", inputs.amount, inputs.term_months)
        return CalculationResult.empty()

    frequency = int(inputs.frequency)
    annual_rate = inputs.rate / 100
    periodic_rate = annual_rate / frequency
    years = inputs.term_months / 12
    total_periods = count_periods(inputs.term_months, frequency)
    grace_periods = count_grace_periods(inputs.grace_period_months, frequency)
    amortization_periods = total_periods - grace_periods

    if amortization_periods < 0:
        logger.debug(
            "Empty schedule: %d grace periods exceed %d total periods",
            grace_periods,
            total_periods,
        )
        return CalculationResult.empty()

    inflation_per_period = (1 + inputs.inflation / 100) ** (1 / frequency) - 1

    balloon = min(inputs.balloon_amount, inputs.amount)
    principal_to_amortize = inputs.amount - balloon

    annuity_payment = calculate_payment(
        principal_to_amortize, periodic_rate, amortization_periods
    )
    # Zero amortization periods means every period is interest only
    straight_principal = (
        principal_to_amortize / amortization_periods if amortization_periods else 0.0
    )
    flat_interest = inputs.amount * annual_rate * years / total_periods
    tax_rate = inputs.tax_rate / 100 if inputs.user_type == UserType.BUSINESS else 0.0

    schedule: List[ScheduleRow] = []
    balance = inputs.amount
    total_interest = 0.0
    total_payment = 0.0
    total_tax_shield = 0.0
    real_pv = 0.0

    for period in range(1, total_periods + 1):
        interest = balance * periodic_rate

        if period <= grace_periods:
            # Interest-only period
            principal_pmt = 0.0
            payment = interest
        elif inputs.repayment_method == RepaymentMethod.ANNUITY:
            if principal_to_amortize == 0:
                # Whole principal deferred to the balloon
                principal_pmt = 0.0
                payment = interest
            else:
                payment = annuity_payment
                principal_pmt = payment - interest
        elif inputs.repayment_method == RepaymentMethod.REDUCING_BALANCE:
            principal_pmt = straight_principal
            payment = principal_pmt + interest
        else:
            # Flat rate: interest stays on the original amount
            interest = flat_interest
            principal_pmt = straight_principal
            payment = principal_pmt + interest

        if period == total_periods:
            principal_pmt += balloon
            payment += balloon

            # Force the closing balance to exactly zero
            correction = balance - principal_pmt
            principal_pmt += correction
            payment += correction

        balance -= principal_pmt
        if balance < BALANCE_TOLERANCE:
            balance = 0.0

        tax_shield = interest * tax_rate
        with np.errstate(all="ignore"):
            deflator = np.power(1.0 + inflation_per_period, period)
            real_payment = float(np.float64(payment) / deflator)

        schedule.append(
            ScheduleRow(
                period=period,
                payment=payment,
                principal=principal_pmt,
                interest=interest,
                balance=balance,
                tax_shield=tax_shield,
                real_payment=real_payment,
            )
        )

        total_interest += interest
        total_payment += payment
        total_tax_shield += tax_shield
        real_pv += real_payment

    if grace_periods > 0 and len(schedule) > grace_periods:
        # First amortizing installment, not the interest-only one
        display_payment = schedule[grace_periods].payment
    else:
        display_payment = schedule[0].payment

    return CalculationResult(
        total_interest=total_interest,
        total_payment=total_payment,
        total_tax_shield=total_tax_shield,
        real_pv=real_pv,
        schedule=tuple(schedule),
        monthly_payment_display=display_payment,
    )


def calculate_debt_service(
    schedule: Sequence[ScheduleRow], start_period: int, end_period: int
) -> float:
    """Calculate total debt service (P+I) for a range of periods."""
    return sum(
        row.payment
        for row in schedule
        if start_period <= row.period <= end_period
    )


def annual_debt_service(
    schedule: Sequence[ScheduleRow], frequency: int, term_months: int
) -> List[float]:
    """
    Bucket schedule payments into loan years.

    Period ``p`` falls in zero-based year ``ceil(p / frequency) - 1``. The
    result has ``ceil(term_months / 12)`` entries; payments beyond the last
    year are ignored.

    Args:
        schedule: Amortization schedule
        frequency: Payments per year
        term_months: Loan term in months

    Returns:
        Debt service per year
    """
    years = math.ceil(term_months / 12)
    return [
        calculate_debt_service(schedule, year * frequency + 1, (year + 1) * frequency)
        for year in range(years)
    ]


def calculate_dscr(noi: float, debt_service: float) -> float:
    """
    Calculate Debt Service Coverage Ratio (DSCR).

    Args:
        noi: Operating cash flow for the period
        debt_service: Debt service for the period

    Returns:
        DSCR ratio, infinite when there is no debt service
    """
    if debt_service == 0:
        return float("inf")
    return noi / debt_service

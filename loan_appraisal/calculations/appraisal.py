"""
Investment Appraisal

Turns a computed loan schedule into a verdict: debt-to-income affordability
for personal borrowers, NPV/IRR/DSCR viability for business borrowers.
"""

import logging
import math

from loan_appraisal.calculations import advice
from loan_appraisal.calculations.amortization import annual_debt_service, calculate_dscr
from loan_appraisal.calculations.analysis import business_cash_flows
from loan_appraisal.calculations.irr import calculate_irr, calculate_npv
from loan_appraisal.calculations.models import (
    CalculationResult,
    InvestmentInputs,
    InvestmentResult,
    LoanInputs,
    Recommendation,
    UserType,
)

logger = logging.getLogger(__name__)


def calculate_dti(monthly_payment: float, monthly_income: float) -> float:
    """Debt-to-income ratio in percent; 0 when there is no income."""
    if monthly_income <= 0:
        return 0.0
    return monthly_payment / monthly_income * 100


def classify_dti(dti: float) -> Recommendation:
    if dti <= advice.DTI_SAFE_LIMIT:
        return Recommendation.SAFE
    if dti <= advice.DTI_CAUTION_LIMIT:
        return Recommendation.CAUTION
    return Recommendation.RISKY


def classify_project(npv: float, min_dscr: float) -> Recommendation:
    """
    Recommendation matrix for business projects.

    ==========  =========  ==============
    NPV > 0     DSCR safe  recommendation
    ==========  =========  ==============
    yes         yes        INVEST
    no          no         REJECT
    yes / no    no / yes   CAUTION
    ==========  =========  ==============
    """
    positive_npv = npv > 0
    dscr_safe = min_dscr >= advice.DSCR_SAFE

    if positive_npv and dscr_safe:
        return Recommendation.INVEST
    if not positive_npv and not dscr_safe:
        return Recommendation.REJECT
    return Recommendation.CAUTION


def appraise_personal(
    loan_result: CalculationResult, loan_inputs: LoanInputs
) -> InvestmentResult:
    """Affordability verdict from the steady-state installment."""
    dti = calculate_dti(loan_result.monthly_payment_display, loan_inputs.monthly_income)
    context = advice.AdviceContext(
        purpose=loan_inputs.purpose,
        grace_period_months=loan_inputs.grace_period_months,
        balloon_amount=loan_inputs.balloon_amount,
        dti=dti,
    )

    return InvestmentResult(
        npv=0.0,
        irr=0.0,
        dscr=0.0,
        dti=dti,
        recommendation=classify_dti(dti),
        advice=advice.compose(advice.PERSONAL_ADVICE, context),
    )


def appraise_business(
    investment: InvestmentInputs,
    loan_result: CalculationResult,
    loan_inputs: LoanInputs,
) -> InvestmentResult:
    """
    Project viability verdict.

    The equity contribution is the initial outflow, so a non-positive equity
    yields a zeroed CAUTION result asking for valid input.
    """
    if investment.equity <= 0:
        logger.debug("Business appraisal skipped: equity=%s", investment.equity)
        return InvestmentResult(
            npv=0.0,
            irr=0.0,
            dscr=0.0,
            dti=0.0,
            recommendation=Recommendation.CAUTION,
            advice=advice.MISSING_EQUITY_ADVICE,
        )

    debt_service = annual_debt_service(
        loan_result.schedule, int(loan_inputs.frequency), loan_inputs.term_months
    )
    # Debt-free years report inf and never bind the minimum
    min_dscr = min(
        (calculate_dscr(investment.projected_cashflow, ds) for ds in debt_service),
        default=math.inf,
    )

    flows = business_cash_flows(investment, loan_result, loan_inputs)
    npv = calculate_npv(flows, investment.wacc / 100)
    irr_percent = calculate_irr(flows) * 100

    context = advice.AdviceContext(
        purpose=loan_inputs.purpose,
        grace_period_months=loan_inputs.grace_period_months,
        balloon_amount=loan_inputs.balloon_amount,
        npv=npv,
        min_dscr=min_dscr,
        irr_percent=irr_percent,
        wacc=investment.wacc,
    )

    return InvestmentResult(
        npv=npv,
        irr=irr_percent,
        dscr=0.0 if math.isinf(min_dscr) else min_dscr,
        dti=0.0,
        recommendation=classify_project(npv, min_dscr),
        advice=advice.compose(advice.BUSINESS_ADVICE, context, separator=" "),
    )


def compute_appraisal(
    investment: InvestmentInputs,
    loan_result: CalculationResult,
    loan_inputs: LoanInputs,
) -> InvestmentResult:
    """
    Appraise a loan for its borrower category.

    Args:
        investment: Equity, projected yearly cash flow and WACC
        loan_result: Output of ``compute_schedule`` for ``loan_inputs``
        loan_inputs: The loan parameters the schedule was built from

    Returns:
        Verdict with metrics and advice text
    """
    if loan_inputs.user_type == UserType.PERSONAL:
        return appraise_personal(loan_result, loan_inputs)
    return appraise_business(investment, loan_result, loan_inputs)

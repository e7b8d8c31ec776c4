"""
Derived Series

Cash-flow vectors and chart series built from a computed schedule.
"""

import math
from typing import Dict, List

from loan_appraisal.calculations.amortization import annual_debt_service
from loan_appraisal.calculations.models import (
    CalculationResult,
    InvestmentInputs,
    LoanInputs,
)

# Target number of points when thinning a schedule for charts
SAMPLE_POINTS = 50


def business_cash_flows(
    investment: InvestmentInputs,
    loan_result: CalculationResult,
    loan_inputs: LoanInputs,
) -> List[float]:
    """
    Build the equity cash-flow vector for the business appraisal.

    Year 0 is the equity outflow; every following year is the projected
    operating cash flow (not escalated) less that year's debt service.
    """
    debt_service = annual_debt_service(
        loan_result.schedule, int(loan_inputs.frequency), loan_inputs.term_months
    )
    flows = [-investment.equity]
    flows.extend(investment.projected_cashflow - ds for ds in debt_service)
    return flows


def yearly_coverage(
    investment: InvestmentInputs,
    loan_result: CalculationResult,
    loan_inputs: LoanInputs,
) -> List[Dict]:
    """Operating cash flow against debt service for each loan year (1-based)."""
    debt_service = annual_debt_service(
        loan_result.schedule, int(loan_inputs.frequency), loan_inputs.term_months
    )
    return [
        {
            "year": year,
            "cashflow": investment.projected_cashflow,
            "debt_service": ds,
        }
        for year, ds in enumerate(debt_service, start=1)
    ]


def income_split(loan_result: CalculationResult, monthly_income: float) -> Dict[str, float]:
    """Split monthly income between the installment and everything else."""
    payment = loan_result.monthly_payment_display
    remaining = monthly_income - payment if monthly_income > payment else 0.0
    return {"debt_payment": payment, "remaining": remaining}


def sampled_schedule(loan_result: CalculationResult) -> List[Dict]:
    """Every n-th schedule row so long loans chart at roughly 50 points."""
    schedule = loan_result.schedule
    stride = max(1, math.floor(len(schedule) / SAMPLE_POINTS))
    return [
        {
            "period": row.period,
            "balance": row.balance,
            "interest": row.interest,
            "principal": row.principal,
        }
        for i, row in enumerate(schedule)
        if i % stride == 0
    ]

"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results.
Used by the front end for real-time updates as inputs change.
"""

import math
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from loan_appraisal.calculations import irr, presets
from loan_appraisal.calculations.models import (
    Frequency,
    InvestmentInputs,
    LoanInputs,
    LoanPurpose,
    Recommendation,
    RepaymentMethod,
    UserType,
)
from loan_appraisal.services import CalculatorService, get_calculator_service

router = APIRouter()


def _finite(value: float) -> Optional[float]:
    """JSON has no inf/nan; a diverging IRR is reported as null."""
    return value if math.isfinite(value) else None


class LoanInput(BaseModel):
    """Loan input schema."""

    amount: float = Field(..., gt=0)
    rate: float = Field(..., ge=0, le=100)
    term_months: int = Field(..., gt=0, le=600)
    inflation: float = Field(0.0, gt=-100)
    user_type: UserType = UserType.PERSONAL
    purpose: LoanPurpose = LoanPurpose.HOME_BUYING
    repayment_method: RepaymentMethod = RepaymentMethod.ANNUITY
    frequency: Frequency = Frequency.MONTHLY
    tax_rate: float = Field(0.0, ge=0, le=100)
    monthly_income: float = Field(0.0, ge=0)
    grace_period_months: int = Field(0, ge=0)
    balloon_amount: float = Field(0.0, ge=0)

    def to_inputs(self) -> LoanInputs:
        return LoanInputs(**self.model_dump())


class InvestmentInput(BaseModel):
    """Investment input schema (business borrowers)."""

    equity: float = 0.0
    projected_cashflow: float = 0.0
    wacc: float = Field(0.0, gt=-100)

    def to_inputs(self) -> InvestmentInputs:
        return InvestmentInputs(**self.model_dump())


class AppraisalRequest(BaseModel):
    """Loan plus investment inputs."""

    loan: LoanInput
    investment: InvestmentInput = InvestmentInput()


class ScheduleRowOut(BaseModel):
    period: int
    payment: float
    principal: float
    interest: float
    balance: float
    tax_shield: float
    real_payment: float


class ScheduleResponse(BaseModel):
    """Amortization schedule with totals."""

    total_interest: float
    total_payment: float
    total_tax_shield: float
    real_pv: float
    monthly_payment_display: float
    schedule: List[ScheduleRowOut]


class AppraisalResponse(BaseModel):
    """Appraisal verdict."""

    npv: float
    irr: Optional[float] = None
    dscr: float
    dti: float
    recommendation: Recommendation
    advice: str


class AnalysisResponse(BaseModel):
    """Schedule, verdict and chart series in one payload."""

    loan: ScheduleResponse
    appraisal: AppraisalResponse
    schedule_chart: List[dict]
    yearly_coverage: List[dict]
    npv_profile: List[dict]
    income_split: Optional[Dict[str, float]] = None


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    cash_flows: List[float]
    discount_rate: float = 0.10


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: Optional[float] = None
    npv: float
    profit: float


def _schedule_response(result) -> ScheduleResponse:
    payload = asdict(result)
    return ScheduleResponse(**payload)


def _appraisal_response(result) -> AppraisalResponse:
    payload = asdict(result)
    payload["irr"] = _finite(result.irr)
    return AppraisalResponse(**payload)


@router.post("/schedule", response_model=ScheduleResponse)
async def calculate_schedule(
    inputs: LoanInput,
    service: CalculatorService = Depends(get_calculator_service),
):
    """Generate loan amortization schedule."""
    return _schedule_response(service.schedule(inputs.to_inputs()))


@router.post("/appraisal", response_model=AppraisalResponse)
async def calculate_appraisal(
    inputs: AppraisalRequest,
    service: CalculatorService = Depends(get_calculator_service),
):
    """Appraise the loan for its borrower type."""
    result = service.appraise(inputs.investment.to_inputs(), inputs.loan.to_inputs())
    return _appraisal_response(result)


@router.post("/analysis", response_model=AnalysisResponse)
async def calculate_analysis(
    inputs: AppraisalRequest,
    service: CalculatorService = Depends(get_calculator_service),
):
    """Schedule, appraisal and chart series for the results screen."""
    result = service.analyze(inputs.investment.to_inputs(), inputs.loan.to_inputs())
    return AnalysisResponse(
        loan=_schedule_response(result.loan),
        appraisal=_appraisal_response(result.appraisal),
        schedule_chart=result.schedule_chart,
        yearly_coverage=result.yearly_coverage,
        npv_profile=[
            {"rate": point["rate"], "npv": _finite(point["npv"])}
            for point in result.npv_profile
        ],
        income_split=result.income_split,
    )


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR and NPV for given yearly cash flows."""
    if len(inputs.cash_flows) < 2:
        raise HTTPException(status_code=400, detail="At least 2 cash flows required")

    return IRRResponse(
        irr=_finite(irr.calculate_irr(inputs.cash_flows)),
        npv=irr.calculate_npv(inputs.cash_flows, inputs.discount_rate),
        profit=sum(inputs.cash_flows),
    )


@router.get("/presets")
async def get_presets():
    """Default inputs and the term/rate suggested for each purpose."""
    return {
        "loan": asdict(presets.DEFAULT_LOAN_INPUTS),
        "investment": asdict(presets.DEFAULT_INVESTMENT_INPUTS),
        "purposes": {
            user_type.value: [purpose.value for purpose in purposes]
            for user_type, purposes in presets.PURPOSES_BY_USER_TYPE.items()
        },
        "purpose_defaults": {
            purpose.value: {"term_months": term, "rate": rate}
            for purpose, (term, rate) in presets.PURPOSE_DEFAULTS.items()
        },
        "user_type_defaults": {
            user_type.value: defaults
            for user_type, defaults in presets.USER_TYPE_DEFAULTS.items()
        },
    }

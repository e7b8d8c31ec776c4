"""
Calculator service.

Runs the amortization and appraisal engines in sequence and memoizes both
on their frozen inputs, so repeated requests with an unchanged input set
skip recomputation.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional

from loan_appraisal.calculations import analysis
from loan_appraisal.calculations.amortization import compute_schedule
from loan_appraisal.calculations.appraisal import compute_appraisal
from loan_appraisal.calculations.irr import npv_profile, profile_max_rate
from loan_appraisal.calculations.models import (
    CalculationResult,
    InvestmentInputs,
    InvestmentResult,
    LoanInputs,
    UserType,
)
from loan_appraisal.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class Analysis:
    """Everything one results screen needs."""

    loan: CalculationResult
    appraisal: InvestmentResult
    schedule_chart: List[Dict] = field(default_factory=list)
    yearly_coverage: List[Dict] = field(default_factory=list)
    npv_profile: List[Dict] = field(default_factory=list)
    income_split: Optional[Dict[str, float]] = None


class CalculatorService:
    """Memoizing front end to the calculation engines."""

    def __init__(self, cache_size: int = 128):
        self.cache_size = cache_size
        self._schedule = lru_cache(maxsize=cache_size)(compute_schedule)
        self._appraisal = lru_cache(maxsize=cache_size)(compute_appraisal)

    def schedule(self, loan_inputs: LoanInputs) -> CalculationResult:
        return self._schedule(loan_inputs)

    def appraise(
        self, investment: InvestmentInputs, loan_inputs: LoanInputs
    ) -> InvestmentResult:
        loan_result = self.schedule(loan_inputs)
        return self._appraisal(investment, loan_result, loan_inputs)

    def analyze(
        self, investment: InvestmentInputs, loan_inputs: LoanInputs
    ) -> Analysis:
        """Run both engines and derive the chart series for the borrower type."""
        loan_result = self.schedule(loan_inputs)
        appraisal = self._appraisal(investment, loan_result, loan_inputs)

        result = Analysis(
            loan=loan_result,
            appraisal=appraisal,
            schedule_chart=analysis.sampled_schedule(loan_result),
        )

        if loan_inputs.user_type == UserType.BUSINESS:
            flows = analysis.business_cash_flows(investment, loan_result, loan_inputs)
            result.yearly_coverage = analysis.yearly_coverage(
                investment, loan_result, loan_inputs
            )
            result.npv_profile = npv_profile(
                flows, profile_max_rate(appraisal.irr, investment.wacc)
            )
        else:
            result.income_split = analysis.income_split(
                loan_result, loan_inputs.monthly_income
            )

        logger.info(
            "Analyzed %s loan: %d periods, recommendation %s",
            loan_inputs.user_type.value,
            len(loan_result.schedule),
            appraisal.recommendation.value,
        )
        return result

    def cache_clear(self) -> None:
        self._schedule.cache_clear()
        self._appraisal.cache_clear()


@lru_cache()
def get_calculator_service() -> CalculatorService:
    """Get the shared calculator service instance."""
    return CalculatorService(cache_size=get_settings().calculation_cache_size)

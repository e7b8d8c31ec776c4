"""
Tests for presets, derived series and the calculator service.
"""

from dataclasses import replace

import pytest

from loan_appraisal.calculations import analysis, presets
from loan_appraisal.calculations.amortization import compute_schedule
from loan_appraisal.calculations.models import (
    Frequency,
    LoanPurpose,
    Recommendation,
    UserType,
)
from loan_appraisal.services import CalculatorService


class TestPresets:
    """Default inputs and purpose suggestions."""

    def test_default_inputs(self):
        loan = presets.DEFAULT_LOAN_INPUTS
        assert loan.amount == 2_000_000_000
        assert loan.rate == 8.5
        assert loan.term_months == 240
        assert loan.frequency == Frequency.MONTHLY
        assert presets.DEFAULT_INVESTMENT_INPUTS.wacc == 12

    @pytest.mark.parametrize(
        "purpose,term,rate",
        [
            (LoanPurpose.HOME_BUYING, 240, 7.5),
            (LoanPurpose.CAR_BUYING, 60, 9.5),
            (LoanPurpose.CONSUMPTION, 36, 18.0),
            (LoanPurpose.WORKING_CAPITAL, 6, 6.5),
            (LoanPurpose.PROJECT_INVESTMENT, 60, 8.0),
            (LoanPurpose.ASSET_PURCHASE, 48, 8.5),
        ],
    )
    def test_apply_purpose(self, purpose, term, rate):
        loan = presets.apply_purpose(presets.DEFAULT_LOAN_INPUTS, purpose)
        assert loan.purpose == purpose
        assert loan.term_months == term
        assert loan.rate == rate
        assert loan.amount == presets.DEFAULT_LOAN_INPUTS.amount

    def test_apply_user_type_business(self):
        loan = replace(presets.DEFAULT_LOAN_INPUTS, grace_period_months=6, balloon_amount=10)
        business = presets.apply_user_type(loan, UserType.BUSINESS)

        assert business.user_type == UserType.BUSINESS
        assert business.purpose == LoanPurpose.WORKING_CAPITAL
        assert business.amount == 5_000_000_000
        assert business.rate == 7.5
        assert business.term_months == 12
        assert business.grace_period_months == 0
        assert business.balloon_amount == 0
        # Untouched fields carry over
        assert business.tax_rate == loan.tax_rate

    def test_apply_user_type_personal(self):
        business = presets.apply_user_type(presets.DEFAULT_LOAN_INPUTS, UserType.BUSINESS)
        personal = presets.apply_user_type(business, UserType.PERSONAL)
        assert personal.purpose == LoanPurpose.HOME_BUYING
        assert personal.monthly_income == 60_000_000

    def test_purposes_by_user_type(self):
        personal = presets.PURPOSES_BY_USER_TYPE[UserType.PERSONAL]
        business = presets.PURPOSES_BY_USER_TYPE[UserType.BUSINESS]
        assert set(personal) | set(business) == set(LoanPurpose)
        assert not set(personal) & set(business)


class TestAnalysis:
    """Chart series derived from a schedule."""

    def test_yearly_coverage(self, business_loan, project):
        loan_result = compute_schedule(business_loan)
        coverage = analysis.yearly_coverage(project, loan_result, business_loan)

        assert len(coverage) == 1
        assert coverage[0]["year"] == 1
        assert coverage[0]["cashflow"] == 600_000_000
        assert coverage[0]["debt_service"] == pytest.approx(loan_result.total_payment)

    def test_income_split(self, home_loan):
        loan_result = compute_schedule(home_loan)
        split = analysis.income_split(loan_result, 60_000_000)
        assert split["debt_payment"] == loan_result.monthly_payment_display
        assert split["remaining"] == pytest.approx(60_000_000 - loan_result.monthly_payment_display)

        underwater = analysis.income_split(loan_result, 1_000)
        assert underwater["remaining"] == 0

    def test_sampled_schedule(self, home_loan):
        loan_result = compute_schedule(home_loan)
        sample = analysis.sampled_schedule(loan_result)

        # 240 rows thinned with a stride of 4
        assert len(sample) == 60
        assert sample[0]["period"] == 1
        assert sample[1]["period"] == 5

    def test_sampled_schedule_short_loan(self, business_loan):
        sample = analysis.sampled_schedule(compute_schedule(business_loan))
        assert [point["period"] for point in sample] == list(range(1, 13))


class TestCalculatorService:
    """Memoized orchestration of both engines."""

    def test_schedule_memoized(self, home_loan):
        service = CalculatorService(cache_size=4)
        first = service.schedule(home_loan)
        assert service.schedule(replace(home_loan)) is first
        assert service.schedule(replace(home_loan, rate=9)) is not first

    def test_cache_clear(self, home_loan):
        service = CalculatorService()
        first = service.schedule(home_loan)
        service.cache_clear()
        second = service.schedule(home_loan)
        assert second is not first
        assert second == first

    def test_analyze_personal(self, home_loan, project):
        result = CalculatorService().analyze(project, home_loan)

        assert result.appraisal.recommendation == Recommendation.SAFE
        assert result.income_split is not None
        assert result.npv_profile == []
        assert result.yearly_coverage == []
        assert result.schedule_chart

    def test_analyze_business(self, business_loan, project):
        result = CalculatorService().analyze(project, business_loan)

        assert result.appraisal.recommendation == Recommendation.REJECT
        assert result.income_split is None
        assert len(result.yearly_coverage) == 1
        assert len(result.npv_profile) == 41
        assert result.npv_profile[0]["rate"] == 0

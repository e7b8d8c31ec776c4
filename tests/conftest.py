"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loan_appraisal.calculations.models import (
    Frequency,
    InvestmentInputs,
    LoanInputs,
    LoanPurpose,
    RepaymentMethod,
    UserType,
)
from loan_appraisal.services import get_calculator_service


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


@pytest.fixture(autouse=True)
def clear_calculation_cache():
    """Start every test with an empty calculation memo."""
    get_calculator_service().cache_clear()
    yield


@pytest.fixture
def home_loan():
    """Scenario A: 2bn home loan at 8.5% over 20 years."""
    return LoanInputs(
        amount=2_000_000_000,
        rate=8.5,
        term_months=240,
        inflation=4.0,
        user_type=UserType.PERSONAL,
        purpose=LoanPurpose.HOME_BUYING,
        repayment_method=RepaymentMethod.ANNUITY,
        frequency=Frequency.MONTHLY,
        monthly_income=60_000_000,
    )


@pytest.fixture
def business_loan():
    """Scenario D: 5bn working-capital loan at 7.5% over 12 months."""
    return LoanInputs(
        amount=5_000_000_000,
        rate=7.5,
        term_months=12,
        inflation=4.0,
        user_type=UserType.BUSINESS,
        purpose=LoanPurpose.WORKING_CAPITAL,
        repayment_method=RepaymentMethod.ANNUITY,
        frequency=Frequency.MONTHLY,
        tax_rate=20.0,
    )


@pytest.fixture
def project():
    """Default business investment inputs."""
    return InvestmentInputs(
        equity=1_000_000_000,
        projected_cashflow=600_000_000,
        wacc=12.0,
    )

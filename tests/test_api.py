"""
Tests for the calculation API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from loan_appraisal.main import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def personal_payload():
    return {
        "amount": 2_000_000_000,
        "rate": 8.5,
        "term_months": 240,
        "inflation": 4,
        "user_type": "PERSONAL",
        "purpose": "HOME_BUYING",
        "repayment_method": "ANNUITY",
        "frequency": 12,
        "monthly_income": 60_000_000,
    }


@pytest.fixture
def business_payload():
    return {
        "amount": 5_000_000_000,
        "rate": 7.5,
        "term_months": 12,
        "user_type": "BUSINESS",
        "purpose": "WORKING_CAPITAL",
        "tax_rate": 20,
    }


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestScheduleEndpoint:
    """Test /api/calculate/schedule."""

    def test_schedule(self, client, personal_payload):
        response = client.post("/api/calculate/schedule", json=personal_payload)
        assert response.status_code == 200

        data = response.json()
        assert len(data["schedule"]) == 240
        assert data["schedule"][0]["period"] == 1
        assert data["schedule"][-1]["balance"] == 0
        assert data["monthly_payment_display"] == data["schedule"][0]["payment"]
        assert data["total_tax_shield"] == 0

    def test_schedule_grace_exceeding_term(self, client, personal_payload):
        personal_payload.update(term_months=12, grace_period_months=24)
        response = client.post("/api/calculate/schedule", json=personal_payload)
        assert response.status_code == 200
        assert response.json()["schedule"] == []
        assert response.json()["total_payment"] == 0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("amount", 0),
            ("term_months", -1),
            ("frequency", 3),
            ("repayment_method", "BULLET"),
            ("balloon_amount", -10),
            ("term_months", 10**9),
            ("rate", 1000),
        ],
    )
    def test_schedule_rejects_invalid_input(self, client, personal_payload, field, value):
        personal_payload[field] = value
        response = client.post("/api/calculate/schedule", json=personal_payload)
        assert response.status_code == 422

    def test_schedule_negligible_rate(self, client, personal_payload):
        personal_payload.update(rate=1e-14, term_months=12)
        response = client.post("/api/calculate/schedule", json=personal_payload)
        assert response.status_code == 200
        assert response.json()["schedule"][-1]["balance"] == 0


class TestAppraisalEndpoint:
    """Test /api/calculate/appraisal and /api/calculate/analysis."""

    def test_personal_appraisal(self, client, personal_payload):
        response = client.post(
            "/api/calculate/appraisal", json={"loan": personal_payload}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["recommendation"] == "SAFE"
        assert 0 < data["dti"] <= 30
        assert data["advice"]

    def test_business_appraisal(self, client, business_payload):
        response = client.post(
            "/api/calculate/appraisal",
            json={
                "loan": business_payload,
                "investment": {
                    "equity": 1_000_000_000,
                    "projected_cashflow": 600_000_000,
                    "wacc": 12,
                },
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["recommendation"] == "REJECT"
        assert data["npv"] < 0
        assert 0 < data["dscr"] < 1.2

    def test_business_without_equity(self, client, business_payload):
        response = client.post(
            "/api/calculate/appraisal", json={"loan": business_payload}
        )
        assert response.status_code == 200
        assert response.json()["recommendation"] == "CAUTION"
        assert response.json()["npv"] == 0

    def test_analysis(self, client, business_payload):
        response = client.post(
            "/api/calculate/analysis",
            json={
                "loan": business_payload,
                "investment": {
                    "equity": 1_000_000_000,
                    "projected_cashflow": 600_000_000,
                    "wacc": 12,
                },
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert len(data["loan"]["schedule"]) == 12
        assert len(data["yearly_coverage"]) == 1
        assert len(data["npv_profile"]) == 41
        assert data["income_split"] is None


class TestIRREndpoint:
    """Test /api/calculate/irr."""

    def test_irr(self, client):
        response = client.post(
            "/api/calculate/irr", json={"cash_flows": [-100, 20, 20, 20, 20, 120]}
        )
        assert response.status_code == 200

        data = response.json()
        assert abs(data["irr"] - 0.20) < 0.01
        assert data["profit"] == 100

    def test_irr_requires_two_flows(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100]})
        assert response.status_code == 400


class TestPresetsEndpoint:
    def test_presets(self, client):
        response = client.get("/api/calculate/presets")
        assert response.status_code == 200

        data = response.json()
        assert data["loan"]["amount"] == 2_000_000_000
        assert data["loan"]["frequency"] == 12
        assert data["purpose_defaults"]["CAR_BUYING"] == {"term_months": 60, "rate": 9.5}
        assert "WORKING_CAPITAL" in data["purposes"]["BUSINESS"]
        assert data["user_type_defaults"]["BUSINESS"]["purpose"] == "WORKING_CAPITAL"

"""
Tests for calculation and report API endpoints.
"""

import pytest


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCalculationEndpoints:
    """Test per-block calculation endpoints."""

    def test_acquisition(self, client):
        response = client.post(
            "/api/calculate/acquisition",
            json={"purchase_price": 300000, "down_payment_percent": 20},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["down_payment_amount"] == pytest.approx(60000)
        assert data["closing_costs_amount"] == pytest.approx(15000)
        assert data["all_in_cost"] == pytest.approx(75000)
        assert data["monthly"] == pytest.approx(6250)

    def test_acquisition_amount_edit(self, client):
        response = client.post(
            "/api/calculate/acquisition",
            json={
                "purchase_price": 300000,
                "down_payment_amount": 90000,
                "down_payment_changed": "amount",
            },
        )
        assert response.status_code == 200
        assert response.json()["down_payment_percent"] == pytest.approx(30)

    def test_blank_fields_are_zero(self, client):
        response = client.post(
            "/api/calculate/acquisition",
            json={"purchase_price": "", "appraisal_fee": None, "inspection_fee": "250"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["purchase_price"] == 0
        assert data["appraisal_fee"] == 0
        assert data["all_in_cost"] == 250

    def test_unknown_discriminant_rejected(self, client):
        response = client.post(
            "/api/calculate/acquisition",
            json={"purchase_price": 1, "down_payment_changed": "sideways"},
        )
        assert response.status_code == 422

    def test_carrying(self, client):
        response = client.post(
            "/api/calculate/carrying",
            json={
                "loan_amount": 100000,
                "intro_apr": 12,
                "intro_period_months": 6,
                "post_intro_apr": 24.99,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["yearly_carrying_cost"] == pytest.approx(12000)
        assert data["advisory"] == "Refinance before 6 months to avoid 24.99% APR"

    def test_expenses_with_rent(self, client):
        response = client.post(
            "/api/calculate/expenses",
            json={"monthly_rent": 2000, "property_management": 50},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["property_management"] == pytest.approx(2400)
        assert data["property_management_derived"] is True
        assert data["yearly_total"] == pytest.approx(17500)

    def test_expenses_total_monthly_cost(self, client):
        response = client.post(
            "/api/calculate/expenses",
            json={
                "property_management": 3000,
                "yearly_carrying_cost": 1200,
                "monthly_mortgage_payment": 1000,
            },
        )
        data = response.json()
        assert data["monthly_raw_expenses"] == pytest.approx(18100 / 12)
        assert data["total_monthly_cost"] == pytest.approx(18100 / 12 + 100 + 1000)

    def test_mortgage(self, client):
        response = client.post(
            "/api/calculate/mortgage",
            json={
                "property_price": 300000,
                "down_payment": 60000,
                "annual_interest_rate_percent": 6,
                "loan_term_years": 30,
                "start_date": "2025-01-15",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["monthly_payment"] == pytest.approx(1438.92, abs=0.01)
        assert data["end_date"] == "2055-01-15"

    def test_mortgage_invalid_date(self, client):
        response = client.post(
            "/api/calculate/mortgage",
            json={"property_price": 100000, "start_date": "01/15/2025x"},
        )
        assert response.status_code == 200
        assert response.json()["end_date"] is None

    def test_income(self, client):
        response = client.post(
            "/api/calculate/income",
            json={"total_monthly_expenses": 2000, "all_in_cost": 75900},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["monthly_noi"] == 705
        assert data["roi"] == pytest.approx(11.146, abs=0.001)
        assert data["roi_label"] == "Good"


class TestScenarioEndpoint:
    """Test full scenario evaluation."""

    def test_seeded_downstream(self, client):
        response = client.post(
            "/api/calculate/scenario",
            json={"acquisition": {"purchase_price": 300000, "down_payment_percent": 20}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["carrying_inputs"]["loan_amount"] == pytest.approx(75000)
        assert data["mortgage_inputs"]["property_price"] == 300000
        assert data["mortgage"]["principal"] == pytest.approx(240000)
        assert data["income"]["total_monthly_expenses"] == pytest.approx(
            data["expenses"]["total_monthly_cost"]
        )

    def test_overrides(self, client):
        response = client.post(
            "/api/calculate/scenario",
            json={
                "acquisition": {"purchase_price": 300000, "down_payment_percent": 20},
                "carrying": {"loan_amount": 10000, "intro_apr": 12},
                "mortgage": {"down_payment": 100000},
            },
        )
        data = response.json()
        assert data["carrying_inputs"]["loan_amount"] == 10000
        assert data["carrying"]["yearly_carrying_cost"] == pytest.approx(1200)
        assert data["mortgage"]["principal"] == pytest.approx(200000)

    def test_management_flag(self, client):
        response = client.post(
            "/api/calculate/scenario",
            json={"expenses": {"monthly_rent": 1000}},
        )
        data = response.json()
        assert data["expenses"]["property_management_derived"] is True
        assert data["expense_inputs"]["property_management"] == pytest.approx(1200)


class TestReportEndpoints:
    """Test report download."""

    def test_scenario_report(self, client):
        response = client.post(
            "/api/reports/scenario",
            json={"acquisition": {"purchase_price": 300000, "down_payment_percent": 20}},
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith("attachment;")
        assert "real-estate-analysis-" in disposition
        assert "4. Mortgage Summary" in response.text
        assert "$300,000" in response.text

    def test_snapshot_report(self, client):
        response = client.post(
            "/api/reports",
            json={"all_in_cost": 100000, "yearly_noi": 16000, "roi": 16},
        )
        assert response.status_code == 200
        assert "16.00% (Excellent)" in response.text

    def test_snapshot_report_invalid_start_date(self, client):
        """An unparseable start date is printed, not rejected."""
        response = client.post(
            "/api/reports",
            json={"start_date": "2025-13-45", "loan_term_years": 30},
        )
        assert response.status_code == 200
        assert "Start Date:" in response.text
        assert response.text.count("Invalid Date") == 2

"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from investcalc.main import app
from investcalc.calculations.acquisition import AcquisitionInputs
from investcalc.calculations.amortization import MortgageInputs
from investcalc.calculations.carrying import CarryingInputs
from investcalc.calculations.expenses import ExpenseInputs
from investcalc.calculations.income import IncomeInputs


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sample_inputs():
    """A 300k purchase with 20% down and a 6% 30-year mortgage."""
    return {
        "acquisition_inputs": AcquisitionInputs(
            purchase_price=300000,
            down_payment_percent=20,
            appraisal_fee=500,
            inspection_fee=400,
        ),
        "carrying_inputs": CarryingInputs(
            loan_amount=75900,
            intro_apr=12,
            intro_period_months=6,
            post_intro_apr=24.99,
            min_payment_percent=2,
        ),
        "expense_inputs": ExpenseInputs(),
        "mortgage_inputs": MortgageInputs(
            property_price=300000,
            down_payment=60000,
            annual_interest_rate_percent=6,
            loan_term_years=30,
            start_date=date(2025, 1, 15),
        ),
        "income_inputs": IncomeInputs(),
    }

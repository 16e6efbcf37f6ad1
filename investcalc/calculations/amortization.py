"""
Mortgage Amortization Calculations

Fixed-rate loan payment and aggregate repayment figures, matching the
standard annuity (Excel PMT) formula.
"""

from typing import Optional, Union
from datetime import date, datetime
from dataclasses import dataclass, field
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta


@dataclass(frozen=True)
class MortgageInputs:
    """Mortgage terms. ``start_date`` is None when the entered date is invalid."""

    property_price: float = 0.0
    down_payment: float = 0.0
    annual_interest_rate_percent: float = 7.5
    loan_term_years: int = 30
    start_date: Optional[date] = field(default_factory=date.today)

    @property
    def principal(self) -> float:
        return self.property_price - self.down_payment


@dataclass(frozen=True)
class MortgageResult:
    principal: float
    monthly_rate: float
    term_months: int
    monthly_payment: float
    total_repayment: float
    total_interest: float
    end_date: Optional[date]


def calculate_payment(
    principal: float, annual_rate_percent: float, term_months: int
) -> float:
    """
    Calculate monthly loan payment.

    Matches Excel's PMT() function for positive rates.

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate as a percentage (e.g., 6 for 6%)
        term_months: Total number of monthly payments

    Returns:
        Monthly payment amount, 0 when principal or rate is not positive
    """
    monthly_rate = annual_rate_percent / 100 / 12

    # A zero rate is not treated as a straight-line payoff
    if not (principal > 0 and monthly_rate > 0):
        return 0.0
    if term_months <= 0:
        return 0.0

    growth = (1 + monthly_rate) ** term_months
    return principal * monthly_rate * growth / (growth - 1)


def parse_start_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Parse an ISO 8601 date (``YYYY-MM-DD``).

    Returns None for anything unparseable; downstream figures render it as
    an invalid date instead of failing.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        return None


def calculate_end_date(start_date: Optional[date], term_years: int) -> Optional[date]:
    """Payoff date: start date advanced by whole calendar years."""
    if start_date is None:
        return None
    try:
        return start_date + relativedelta(years=int(term_years))
    except (ValueError, OverflowError):
        return None


def calculate_mortgage(inputs: MortgageInputs) -> MortgageResult:
    """
    Calculate payment, total repayment, total interest and payoff date.

    Total interest is negative when the payment is forced to 0 on a
    positive principal; that output is left as is.
    """
    principal = inputs.principal
    term_months = int(inputs.loan_term_years * 12)
    monthly_payment = calculate_payment(
        principal, inputs.annual_interest_rate_percent, term_months
    )
    total_repayment = monthly_payment * term_months

    return MortgageResult(
        principal=principal,
        monthly_rate=inputs.annual_interest_rate_percent / 100 / 12,
        term_months=term_months,
        monthly_payment=monthly_payment,
        total_repayment=total_repayment,
        total_interest=total_repayment - principal,
        end_date=calculate_end_date(inputs.start_date, inputs.loan_term_years),
    )

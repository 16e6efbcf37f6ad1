"""
Operating Expense Calculations

Nine yearly line items aggregated to yearly/monthly/daily totals, then
combined with carrying cost and the mortgage payment into the total
monthly cost of holding the property.
"""

from typing import Dict
from dataclasses import dataclass, replace

# Property management fee as a share of gross yearly rent
DEFAULT_MANAGEMENT_FEE_RATE = 0.10

LINE_ITEMS = (
    "repairs",
    "utilities",
    "home_warranty",
    "trash_removal",
    "landscaping",
    "property_management",
    "property_taxes",
    "homeowners_insurance",
    "cap_ex",
)


@dataclass(frozen=True)
class ExpenseInputs:
    """Yearly line items plus the rent used to derive the management fee."""

    repairs: float = 3000.0
    utilities: float = 1200.0
    home_warranty: float = 600.0
    trash_removal: float = 300.0
    landscaping: float = 800.0
    property_management: float = 0.0
    property_taxes: float = 6000.0
    homeowners_insurance: float = 1200.0
    cap_ex: float = 2000.0
    monthly_rent: float = 0.0

    def line_items(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in LINE_ITEMS}


@dataclass(frozen=True)
class ExpenseResult:
    yearly_total: float
    monthly_raw_expenses: float
    daily_expenses: float
    carrying_cost_monthly: float
    monthly_mortgage_payment: float
    total_monthly_cost: float
    total_daily_cost: float


def management_is_derived(inputs: ExpenseInputs) -> bool:
    """True when property management is computed from rent (read-only)."""
    return inputs.monthly_rent > 0


def settle_property_management(
    inputs: ExpenseInputs, rate: float = DEFAULT_MANAGEMENT_FEE_RATE
) -> ExpenseInputs:
    """
    Overwrite property management from rent when rent is set.

    With no rent the field is left as it is; a previous manual value is
    not restored.
    """
    if not management_is_derived(inputs):
        return inputs
    return replace(inputs, property_management=inputs.monthly_rent * 12 * rate)


def calculate_yearly_total(inputs: ExpenseInputs) -> float:
    return sum(inputs.line_items().values())


def calculate_operating_expenses(
    inputs: ExpenseInputs,
    yearly_carrying_cost: float = 0.0,
    monthly_mortgage_payment: float = 0.0,
) -> ExpenseResult:
    """
    Aggregate expenses and combine them with financing costs.

    Args:
        inputs: Settled expense inputs (see ``settle_property_management``)
        yearly_carrying_cost: Yearly CRC from the carrying cost block
        monthly_mortgage_payment: Payment from the amortization block

    Returns:
        Expense totals including total monthly and daily cost
    """
    yearly_total = calculate_yearly_total(inputs)
    monthly_raw = yearly_total / 12
    carrying_monthly = yearly_carrying_cost / 12
    total_monthly = monthly_raw + carrying_monthly + monthly_mortgage_payment

    return ExpenseResult(
        yearly_total=yearly_total,
        monthly_raw_expenses=monthly_raw,
        daily_expenses=yearly_total / 365,
        carrying_cost_monthly=carrying_monthly,
        monthly_mortgage_payment=monthly_mortgage_payment,
        total_monthly_cost=total_monthly,
        total_daily_cost=total_monthly * 12 / 365,
    )

"""
Financial calculation API endpoints.

These endpoints accept form inputs and return calculated results, one
endpoint per calculation block plus a full-scenario endpoint.
"""

from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, ValidationInfo, field_validator

from investcalc.calculations.acquisition import (
    AcquisitionInputs,
    Changed,
    calculate_all_in_cost,
    settle_acquisition,
)
from investcalc.calculations.amortization import (
    MortgageInputs,
    calculate_mortgage,
    parse_start_date,
)
from investcalc.calculations.carrying import CarryingInputs, calculate_carrying_cost
from investcalc.calculations.expenses import (
    ExpenseInputs,
    calculate_operating_expenses,
    management_is_derived,
    settle_property_management,
)
from investcalc.calculations.income import IncomeInputs, calculate_income
from investcalc.calculations.scenario import Scenario, ScenarioCoordinator
from investcalc.config import get_settings

router = APIRouter()
settings = get_settings()


class FormInput(BaseModel):
    """Base for form payloads: blank or null numeric fields count as 0."""

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_zero(cls, value, info: ValidationInfo):
        annotation = cls.model_fields[info.field_name].annotation
        if annotation not in (float, int):
            return value
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value


class AcquisitionInput(FormInput):
    """Input for all-in cost calculation."""

    purchase_price: float = 0.0
    down_payment_percent: float = 0.0
    down_payment_amount: float = 0.0
    appraisal_fee: float = 0.0
    inspection_fee: float = 0.0
    closing_costs_percent: float = settings.default_closing_costs_percent
    closing_costs_amount: float = 0.0

    # Which side of each pair was last edited
    down_payment_changed: Changed = Changed.NONE
    closing_costs_changed: Changed = Changed.NONE

    def to_inputs(self) -> AcquisitionInputs:
        return AcquisitionInputs(
            **self.model_dump(exclude={"down_payment_changed", "closing_costs_changed"})
        )


class AcquisitionResponse(BaseModel):
    """Settled acquisition inputs with all-in cost projections."""

    purchase_price: float
    down_payment_percent: float
    down_payment_amount: float
    appraisal_fee: float
    inspection_fee: float
    closing_costs_percent: float
    closing_costs_amount: float
    all_in_cost: float
    monthly: float
    weekly: float
    daily: float


class CarryingInput(FormInput):
    """Input for carrying cost calculation."""

    loan_amount: float = 0.0
    intro_apr: float = 0.0
    intro_period_months: int = 0
    post_intro_apr: float = 0.0
    min_payment_percent: float = 0.0

    def to_inputs(self) -> CarryingInputs:
        data = self.model_dump()
        if data["loan_amount"] is None:
            data["loan_amount"] = 0.0
        return CarryingInputs(**data)


class ExpensesInput(FormInput):
    """Input for operating expense calculation (yearly line items)."""

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

    def to_inputs(self) -> ExpenseInputs:
        return ExpenseInputs(**self.model_dump(include=set(ExpensesInput.model_fields)))


class ExpensesCalculationInput(ExpensesInput):
    """Expense inputs plus the financing costs they are combined with."""

    yearly_carrying_cost: float = 0.0
    monthly_mortgage_payment: float = 0.0


class MortgageInput(FormInput):
    """Input for mortgage amortization. Omitted start date means today."""

    property_price: float = 0.0
    down_payment: float = 0.0
    annual_interest_rate_percent: float = 7.5
    loan_term_years: int = 30
    start_date: Optional[str] = None

    def parsed_start_date(self) -> Optional[date]:
        if self.start_date is None:
            return date.today()
        return parse_start_date(self.start_date)

    def to_inputs(self) -> MortgageInputs:
        return MortgageInputs(
            property_price=self.property_price or 0.0,
            down_payment=self.down_payment or 0.0,
            annual_interest_rate_percent=self.annual_interest_rate_percent,
            loan_term_years=self.loan_term_years,
            start_date=self.parsed_start_date(),
        )


class IncomeInput(FormInput):
    """Input for income and ROI calculation (monthly amounts)."""

    unit_count: int = 1
    rent_per_unit: float = 2500.0
    pets: float = 50.0
    parking: float = 100.0
    laundry: float = 30.0
    storage: float = 25.0

    def to_inputs(self) -> IncomeInputs:
        return IncomeInputs(**self.model_dump(include=set(IncomeInput.model_fields)))


class IncomeCalculationInput(IncomeInput):
    """Income inputs plus the cost figures NOI and ROI are measured against."""

    total_monthly_expenses: float = 0.0
    all_in_cost: float = 0.0


class ScenarioCarryingInput(CarryingInput):
    """Carrying inputs; loan amount is seeded from all-in cost when omitted."""

    loan_amount: Optional[float] = None


class ScenarioMortgageInput(MortgageInput):
    """Mortgage inputs; price and down payment are seeded when omitted."""

    property_price: Optional[float] = None
    down_payment: Optional[float] = None


class ScenarioInput(BaseModel):
    """Input for a full scenario evaluation."""

    acquisition: AcquisitionInput = AcquisitionInput()
    carrying: ScenarioCarryingInput = ScenarioCarryingInput()
    expenses: ExpensesInput = ExpensesInput()
    mortgage: ScenarioMortgageInput = ScenarioMortgageInput()
    income: IncomeInput = IncomeInput()


def build_coordinator(inputs: ScenarioInput) -> ScenarioCoordinator:
    """
    Build a coordinator from a request.

    Downstream fields the caller supplied are applied after seeding, the
    same way a manual edit follows the upstream defaults.
    """
    coordinator = ScenarioCoordinator(
        acquisition=inputs.acquisition.to_inputs(),
        carrying=inputs.carrying.to_inputs(),
        expenses=inputs.expenses.to_inputs(),
        mortgage=inputs.mortgage.to_inputs(),
        income=inputs.income.to_inputs(),
        down_payment_changed=inputs.acquisition.down_payment_changed,
        closing_costs_changed=inputs.acquisition.closing_costs_changed,
        management_fee_rate=settings.management_fee_rate,
    )

    if inputs.carrying.loan_amount is not None:
        coordinator.set_carrying(loan_amount=inputs.carrying.loan_amount)

    mortgage_overrides = {}
    if inputs.mortgage.property_price is not None:
        mortgage_overrides["property_price"] = inputs.mortgage.property_price
    if inputs.mortgage.down_payment is not None:
        mortgage_overrides["down_payment"] = inputs.mortgage.down_payment
    if mortgage_overrides:
        coordinator.set_mortgage(**mortgage_overrides)

    return coordinator


def scenario_to_dict(scenario: Scenario) -> dict:
    """Serialize a scenario for JSON responses."""
    data = asdict(scenario)
    data["expenses"]["property_management_derived"] = management_is_derived(
        scenario.expense_inputs
    )
    return data


@router.post("/acquisition", response_model=AcquisitionResponse)
async def calculate_acquisition(inputs: AcquisitionInput):
    """Settle the down payment and closing cost pairs and total the all-in cost."""
    settled = settle_acquisition(
        inputs.to_inputs(),
        inputs.down_payment_changed,
        inputs.closing_costs_changed,
    )
    result = calculate_all_in_cost(settled)
    return AcquisitionResponse(**asdict(settled), **asdict(result))


@router.post("/carrying")
async def calculate_carrying(inputs: CarryingInput):
    """Calculate carrying cost at the intro APR."""
    return asdict(calculate_carrying_cost(inputs.to_inputs()))


@router.post("/expenses")
async def calculate_expenses(inputs: ExpensesCalculationInput):
    """Aggregate operating expenses and total monthly cost."""
    expense_inputs = settle_property_management(
        inputs.to_inputs(), settings.management_fee_rate
    )
    result = calculate_operating_expenses(
        expense_inputs,
        yearly_carrying_cost=inputs.yearly_carrying_cost,
        monthly_mortgage_payment=inputs.monthly_mortgage_payment,
    )
    return {
        "property_management": expense_inputs.property_management,
        "property_management_derived": management_is_derived(expense_inputs),
        **asdict(result),
    }


@router.post("/mortgage")
async def calculate_mortgage_endpoint(inputs: MortgageInput):
    """Calculate mortgage payment and totals. Invalid start dates yield a null end date."""
    return asdict(calculate_mortgage(inputs.to_inputs()))


@router.post("/income")
async def calculate_income_endpoint(inputs: IncomeCalculationInput):
    """Calculate income, NOI and ROI."""
    result = calculate_income(
        inputs.to_inputs(),
        total_monthly_expenses=inputs.total_monthly_expenses,
        all_in_cost=inputs.all_in_cost,
    )
    return asdict(result)


@router.post("/scenario")
async def calculate_scenario(inputs: ScenarioInput):
    """Evaluate all five blocks in dependency order."""
    coordinator = build_coordinator(inputs)
    return scenario_to_dict(coordinator.scenario)

"""
Scenario Coordinator

Owns the full input/derived-value graph for one analysis and recomputes
it in dependency order:

    acquisition -> carrying, mortgage -> expenses -> income

Downstream defaults (carrying loan amount, mortgage price and down
payment) are seeded from the acquisition block and overwritten whenever
the upstream value changes, replacing any manual override.
"""

import logging
import math
from typing import Any, Dict, Optional
from dataclasses import dataclass, replace

from investcalc.calculations.acquisition import (
    AcquisitionInputs,
    AcquisitionResult,
    Changed,
    calculate_all_in_cost,
    settle_acquisition,
    settle_closing_costs,
    settle_down_payment,
)
from investcalc.calculations.amortization import (
    MortgageInputs,
    MortgageResult,
    calculate_mortgage,
    parse_start_date,
)
from investcalc.calculations.carrying import (
    CarryingInputs,
    CarryingResult,
    calculate_carrying_cost,
)
from investcalc.calculations.expenses import (
    DEFAULT_MANAGEMENT_FEE_RATE,
    ExpenseInputs,
    ExpenseResult,
    calculate_operating_expenses,
    settle_property_management,
)
from investcalc.calculations.income import (
    IncomeInputs,
    IncomeResult,
    calculate_income,
    total_monthly_expenses,
)

logger = logging.getLogger(__name__)


def _moved(old: float, new: float) -> bool:
    """True when an upstream value changed; NaN is treated as equal to NaN."""
    if math.isnan(old) and math.isnan(new):
        return False
    return old != new


@dataclass(frozen=True)
class Scenario:
    """Settled inputs and derived results of all five blocks."""

    acquisition_inputs: AcquisitionInputs
    carrying_inputs: CarryingInputs
    expense_inputs: ExpenseInputs
    mortgage_inputs: MortgageInputs
    income_inputs: IncomeInputs

    acquisition: AcquisitionResult
    carrying: CarryingResult
    expenses: ExpenseResult
    mortgage: MortgageResult
    income: IncomeResult


def evaluate_settled(
    acquisition_inputs: AcquisitionInputs,
    carrying_inputs: CarryingInputs,
    expense_inputs: ExpenseInputs,
    mortgage_inputs: MortgageInputs,
    income_inputs: IncomeInputs,
    management_fee_rate: float = DEFAULT_MANAGEMENT_FEE_RATE,
) -> Scenario:
    """Compute every derived block from already-settled acquisition inputs."""
    acquisition = calculate_all_in_cost(acquisition_inputs)
    carrying = calculate_carrying_cost(carrying_inputs)
    mortgage = calculate_mortgage(mortgage_inputs)

    expense_inputs = settle_property_management(expense_inputs, management_fee_rate)
    expenses = calculate_operating_expenses(
        expense_inputs,
        yearly_carrying_cost=carrying.yearly_carrying_cost,
        monthly_mortgage_payment=mortgage.monthly_payment,
    )

    income = calculate_income(
        income_inputs,
        total_monthly_expenses=total_monthly_expenses(
            expenses.monthly_raw_expenses,
            mortgage.monthly_payment,
            carrying.monthly_carrying_cost,
        ),
        all_in_cost=acquisition.all_in_cost,
    )

    return Scenario(
        acquisition_inputs=acquisition_inputs,
        carrying_inputs=carrying_inputs,
        expense_inputs=expense_inputs,
        mortgage_inputs=mortgage_inputs,
        income_inputs=income_inputs,
        acquisition=acquisition,
        carrying=carrying,
        expenses=expenses,
        mortgage=mortgage,
        income=income,
    )


def evaluate(
    acquisition_inputs: AcquisitionInputs,
    carrying_inputs: CarryingInputs,
    expense_inputs: ExpenseInputs,
    mortgage_inputs: MortgageInputs,
    income_inputs: IncomeInputs,
    down_payment_changed: Changed = Changed.NONE,
    closing_costs_changed: Changed = Changed.NONE,
    management_fee_rate: float = DEFAULT_MANAGEMENT_FEE_RATE,
) -> Scenario:
    """
    Evaluate a full input snapshot.

    Pure: the same snapshot always yields the same scenario. Downstream
    inputs are used as given; seeding from the acquisition block is the
    coordinator's job.
    """
    acquisition_inputs = settle_acquisition(
        acquisition_inputs, down_payment_changed, closing_costs_changed
    )
    return evaluate_settled(
        acquisition_inputs,
        carrying_inputs,
        expense_inputs,
        mortgage_inputs,
        income_inputs,
        management_fee_rate=management_fee_rate,
    )


def infer_changed(
    changes: Dict[str, Any], percent_field: str, amount_field: str
) -> Optional[Changed]:
    """
    Work out which side of a percent/dollar pair an update touched.

    Returns None when neither side nor the purchase price changed, in
    which case the pair is left as it is.
    """
    if (
        amount_field in changes
        and percent_field not in changes
        and "purchase_price" not in changes
    ):
        return Changed.AMOUNT
    if percent_field in changes or "purchase_price" in changes:
        return Changed.PERCENT
    return None


class ScenarioCoordinator:
    """
    Single owner of one scenario's inputs and results.

    Every setter replaces an input record and recomputes all downstream
    values before returning, so ``scenario`` is never stale.
    """

    def __init__(
        self,
        acquisition: Optional[AcquisitionInputs] = None,
        carrying: Optional[CarryingInputs] = None,
        expenses: Optional[ExpenseInputs] = None,
        mortgage: Optional[MortgageInputs] = None,
        income: Optional[IncomeInputs] = None,
        down_payment_changed: Changed = Changed.NONE,
        closing_costs_changed: Changed = Changed.NONE,
        management_fee_rate: float = DEFAULT_MANAGEMENT_FEE_RATE,
    ):
        self.management_fee_rate = management_fee_rate
        self._acquisition_inputs = settle_acquisition(
            acquisition or AcquisitionInputs(),
            down_payment_changed,
            closing_costs_changed,
        )
        self._carrying_inputs = carrying or CarryingInputs()
        self._expense_inputs = expenses or ExpenseInputs()
        self._mortgage_inputs = mortgage or MortgageInputs()
        self._income_inputs = income or IncomeInputs()
        self._scenario: Optional[Scenario] = None
        self.recompute()

    @property
    def scenario(self) -> Scenario:
        return self._scenario

    def set_acquisition(
        self,
        down_payment_changed: Optional[Changed] = None,
        closing_costs_changed: Optional[Changed] = None,
        **changes: Any,
    ) -> Scenario:
        """
        Update acquisition inputs.

        The direction of each percent/dollar pair is inferred from the
        fields passed unless given explicitly.
        """
        if down_payment_changed is None:
            down_payment_changed = infer_changed(
                changes, "down_payment_percent", "down_payment_amount"
            )
        if closing_costs_changed is None:
            closing_costs_changed = infer_changed(
                changes, "closing_costs_percent", "closing_costs_amount"
            )

        inputs = replace(self._acquisition_inputs, **changes)
        if down_payment_changed is not None:
            inputs = settle_down_payment(inputs, down_payment_changed)
        if closing_costs_changed is not None:
            inputs = settle_closing_costs(inputs, closing_costs_changed)

        self._acquisition_inputs = inputs
        return self.recompute()

    def set_carrying(self, **changes: Any) -> Scenario:
        self._carrying_inputs = replace(self._carrying_inputs, **changes)
        return self.recompute()

    def set_expenses(self, **changes: Any) -> Scenario:
        self._expense_inputs = replace(self._expense_inputs, **changes)
        return self.recompute()

    def set_mortgage(self, **changes: Any) -> Scenario:
        if "start_date" in changes:
            changes["start_date"] = parse_start_date(changes["start_date"])
        self._mortgage_inputs = replace(self._mortgage_inputs, **changes)
        return self.recompute()

    def set_income(self, **changes: Any) -> Scenario:
        self._income_inputs = replace(self._income_inputs, **changes)
        return self.recompute()

    def _seed_downstream(self) -> None:
        """Overwrite downstream defaults whose upstream value changed."""
        previous = self._scenario
        acquisition_inputs = self._acquisition_inputs
        all_in_cost = calculate_all_in_cost(acquisition_inputs).all_in_cost

        if previous is None or _moved(previous.acquisition.all_in_cost, all_in_cost):
            logger.debug(f"Seeding carrying loan amount from all-in cost {all_in_cost}")
            self._carrying_inputs = replace(
                self._carrying_inputs, loan_amount=all_in_cost
            )

        mortgage_changes = {}
        if (
            previous is None
            or _moved(
                previous.acquisition_inputs.purchase_price,
                acquisition_inputs.purchase_price,
            )
        ):
            mortgage_changes["property_price"] = acquisition_inputs.purchase_price
        if (
            previous is None
            or _moved(
                previous.acquisition_inputs.down_payment_amount,
                acquisition_inputs.down_payment_amount,
            )
        ):
            mortgage_changes["down_payment"] = acquisition_inputs.down_payment_amount
        if mortgage_changes:
            logger.debug(f"Seeding mortgage inputs: {mortgage_changes}")
            self._mortgage_inputs = replace(self._mortgage_inputs, **mortgage_changes)

    def recompute(self) -> Scenario:
        """Recompute every block in dependency order."""
        self._seed_downstream()
        self._scenario = evaluate_settled(
            self._acquisition_inputs,
            self._carrying_inputs,
            self._expense_inputs,
            self._mortgage_inputs,
            self._income_inputs,
            management_fee_rate=self.management_fee_rate,
        )
        self._expense_inputs = self._scenario.expense_inputs
        return self._scenario

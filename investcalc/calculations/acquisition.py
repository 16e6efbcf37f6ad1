"""
Acquisition (All-In) Cost Calculations

Purchase price, down payment, one-time fees and closing costs rolled up
into the total cash needed to acquire the property.

The down payment is kept in both percent and dollar form. Callers pass a
``Changed`` discriminant naming the field they edited so the pair is
reconciled in one direction per update.
"""

import enum
import math
from dataclasses import dataclass, replace


class Changed(str, enum.Enum):
    """Which side of a percent/dollar pair the caller last edited."""

    PERCENT = "percent"
    AMOUNT = "amount"
    NONE = "none"


@dataclass(frozen=True)
class AcquisitionInputs:
    """Purchase inputs. Percent fields are 0-100."""

    purchase_price: float = 0.0
    down_payment_percent: float = 0.0
    down_payment_amount: float = 0.0
    appraisal_fee: float = 0.0
    inspection_fee: float = 0.0
    closing_costs_percent: float = 5.0
    closing_costs_amount: float = 0.0


@dataclass(frozen=True)
class AcquisitionResult:
    """All-in cost and its per-period projections."""

    all_in_cost: float
    monthly: float
    weekly: float
    daily: float


def percent_of(amount: float, percent: float) -> float:
    """Dollar value of ``percent`` (0-100) of ``amount``."""
    return amount * percent / 100


def settle_down_payment(
    inputs: AcquisitionInputs, changed: Changed = Changed.NONE
) -> AcquisitionInputs:
    """
    Reconcile the down payment percent/dollar pair.

    A price or percent edit recomputes the dollar amount. A dollar edit
    back-computes the percent, but only when the result is finite; with a
    zero purchase price the percent keeps its prior value and the amount is
    re-derived from it.

    Args:
        inputs: Current acquisition inputs
        changed: Which down payment field the caller edited

    Returns:
        New inputs with the pair consistent
    """
    if changed == Changed.AMOUNT:
        try:
            percent = inputs.down_payment_amount / inputs.purchase_price * 100
        except ZeroDivisionError:
            percent = math.nan
        if math.isfinite(percent):
            return replace(inputs, down_payment_percent=percent)

    return replace(
        inputs,
        down_payment_amount=percent_of(
            inputs.purchase_price, inputs.down_payment_percent
        ),
    )


def settle_closing_costs(
    inputs: AcquisitionInputs, changed: Changed = Changed.NONE
) -> AcquisitionInputs:
    """
    Reconcile the closing costs pair.

    Percent to dollar only: a direct dollar edit is kept as entered and
    never back-computes a percent.
    """
    if changed == Changed.AMOUNT:
        return inputs
    return replace(
        inputs,
        closing_costs_amount=percent_of(
            inputs.purchase_price, inputs.closing_costs_percent
        ),
    )


def settle_acquisition(
    inputs: AcquisitionInputs,
    down_payment_changed: Changed = Changed.NONE,
    closing_costs_changed: Changed = Changed.NONE,
) -> AcquisitionInputs:
    """Settle both percent/dollar pairs."""
    inputs = settle_down_payment(inputs, down_payment_changed)
    return settle_closing_costs(inputs, closing_costs_changed)


def calculate_all_in_cost(inputs: AcquisitionInputs) -> AcquisitionResult:
    """
    Calculate total upfront cost.

    Expects settled inputs (see ``settle_acquisition``).
    """
    all_in_cost = (
        inputs.down_payment_amount
        + inputs.appraisal_fee
        + inputs.inspection_fee
        + inputs.closing_costs_amount
    )
    return AcquisitionResult(
        all_in_cost=all_in_cost,
        monthly=all_in_cost / 12,
        weekly=all_in_cost / 52,
        daily=all_in_cost / 365,
    )

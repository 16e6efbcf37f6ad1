"""
Carrying Cost (CRC) Calculations

Interim financing cost accrued on the acquisition cash (or an explicit
loan/advance amount) before permanent financing is in place.
"""

from typing import Optional
from dataclasses import dataclass

from investcalc.reports.formatting import format_rate


@dataclass(frozen=True)
class CarryingInputs:
    """Short-term financing terms. Rates are percentages (e.g. 19.99)."""

    loan_amount: float = 0.0
    intro_apr: float = 0.0
    intro_period_months: int = 0
    post_intro_apr: float = 0.0
    min_payment_percent: float = 0.0


@dataclass(frozen=True)
class CarryingResult:
    monthly_carrying_cost: float
    yearly_carrying_cost: float
    daily_carrying_cost: float
    minimum_monthly_payment: float
    advisory: Optional[str]


def refinance_advisory(
    intro_period_months: int, post_intro_apr: float
) -> Optional[str]:
    """Warning shown while an intro rate is in effect, else None."""
    if intro_period_months <= 0:
        return None
    return (
        f"Refinance before {intro_period_months} months "
        f"to avoid {format_rate(post_intro_apr)}% APR"
    )


def calculate_carrying_cost(inputs: CarryingInputs) -> CarryingResult:
    """
    Calculate carrying cost at the intro APR.

    The intro APR is applied to all twelve months regardless of the intro
    period; post-intro APR and intro period only drive the advisory.
    """
    monthly = inputs.loan_amount * inputs.intro_apr / 100 / 12
    yearly = monthly * 12

    return CarryingResult(
        monthly_carrying_cost=monthly,
        yearly_carrying_cost=yearly,
        daily_carrying_cost=yearly / 365,
        minimum_monthly_payment=inputs.loan_amount * inputs.min_payment_percent / 100,
        advisory=refinance_advisory(inputs.intro_period_months, inputs.post_intro_apr),
    )

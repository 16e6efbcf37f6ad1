"""
Income and Return on Investment

Rental plus ancillary income, net of total monthly cost, expressed as
NOI and as a yearly return on the all-in cost.
"""

from dataclasses import dataclass

# Lower bound (inclusive) of each ROI band, best first
ROI_BANDS = (
    (15.0, "Excellent"),
    (10.0, "Good"),
    (5.0, "Fair"),
)


@dataclass(frozen=True)
class IncomeInputs:
    """Monthly income inputs."""

    unit_count: int = 1
    rent_per_unit: float = 2500.0
    pets: float = 50.0
    parking: float = 100.0
    laundry: float = 30.0
    storage: float = 25.0

    @property
    def ancillary_income(self) -> float:
        return self.pets + self.parking + self.laundry + self.storage


@dataclass(frozen=True)
class IncomeResult:
    monthly_rent: float
    ancillary_income: float
    monthly_income: float
    yearly_income: float
    daily_income: float
    total_monthly_expenses: float
    monthly_noi: float
    yearly_noi: float
    roi: float
    roi_label: str


def total_monthly_expenses(
    monthly_raw_expenses: float,
    monthly_payment: float,
    monthly_carrying_cost: float,
) -> float:
    """Monthly cost side of NOI: raw expenses + mortgage + carrying cost."""
    return monthly_raw_expenses + monthly_payment + monthly_carrying_cost


def calculate_roi(yearly_noi: float, all_in_cost: float) -> float:
    """Yearly NOI as a percentage of all-in cost; 0 without any cost."""
    if all_in_cost > 0:
        return yearly_noi / all_in_cost * 100
    return 0.0


def classify_roi(roi: float) -> str:
    """Qualitative label for an ROI percentage."""
    for lower_bound, label in ROI_BANDS:
        if roi >= lower_bound:
            return label
    return "Poor"


def calculate_income(
    inputs: IncomeInputs,
    total_monthly_expenses: float,
    all_in_cost: float,
) -> IncomeResult:
    """
    Calculate income, NOI and ROI.

    Args:
        inputs: Unit count, rent and ancillary income
        total_monthly_expenses: Combined monthly cost supplied by the caller
        all_in_cost: Total upfront cost from the acquisition block

    Returns:
        Income figures with ROI and its band label
    """
    monthly_rent = inputs.unit_count * inputs.rent_per_unit
    ancillary = inputs.ancillary_income
    monthly_income = monthly_rent + ancillary
    yearly_income = monthly_income * 12

    monthly_noi = monthly_income - total_monthly_expenses
    yearly_noi = monthly_noi * 12
    roi = calculate_roi(yearly_noi, all_in_cost)

    return IncomeResult(
        monthly_rent=monthly_rent,
        ancillary_income=ancillary,
        monthly_income=monthly_income,
        yearly_income=yearly_income,
        daily_income=yearly_income / 365,
        total_monthly_expenses=total_monthly_expenses,
        monthly_noi=monthly_noi,
        yearly_noi=yearly_noi,
        roi=roi,
        roi_label=classify_roi(roi),
    )

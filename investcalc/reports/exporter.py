"""
Investment Report Export

Serializes a finished scenario snapshot into a paginated plain-text
report with five sections, one per calculation block.
"""

import logging
import os
from typing import List, Optional
from datetime import date
from dataclasses import dataclass, field

from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel, field_validator

from investcalc.calculations.amortization import calculate_end_date, parse_start_date
from investcalc.calculations.carrying import refinance_advisory
from investcalc.calculations.income import classify_roi
from investcalc.calculations.scenario import Scenario
from investcalc.config import get_settings
from investcalc.reports.formatting import (
    format_currency,
    format_date,
    format_percent,
    format_rate,
)

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
REPORT_WIDTH = 72
LABEL_WIDTH = 40
FOOTER = "This report was generated by Real Estate Investment Calculator"

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


class ReportData(BaseModel):
    """Flat snapshot of every input and derived figure in a scenario."""

    # Property & All-In Cost
    purchase_price: float = 0.0
    down_payment: float = 0.0
    down_payment_percent: float = 0.0
    appraisal_fee: float = 0.0
    inspection_fee: float = 0.0
    closing_costs: float = 0.0
    all_in_cost: float = 0.0

    # Carrying Cost
    loan_amount: float = 0.0
    intro_apr: float = 0.0
    intro_period: int = 0
    post_intro_apr: float = 0.0
    min_payment_percent: float = 0.0
    carrying_cost: float = 0.0

    # Operating Expenses
    repairs: float = 0.0
    utilities: float = 0.0
    home_warranty: float = 0.0
    trash_removal: float = 0.0
    landscaping: float = 0.0
    property_management: float = 0.0
    property_taxes: float = 0.0
    homeowners_insurance: float = 0.0
    cap_ex: float = 0.0
    total_yearly_expenses: float = 0.0
    monthly_raw_expenses: float = 0.0

    # Mortgage
    property_price: float = 0.0
    mortgage_down_payment: float = 0.0
    mortgage_loan_amount: float = 0.0
    interest_rate: float = 0.0
    loan_term_years: int = 0
    start_date: Optional[date] = None
    monthly_payment: float = 0.0
    total_interest: float = 0.0
    total_repayment: float = 0.0

    # Income & ROI
    number_of_units: int = 0
    rent_per_unit: float = 0.0
    pets: float = 0.0
    parking: float = 0.0
    laundry: float = 0.0
    storage: float = 0.0
    total_monthly_income: float = 0.0
    total_yearly_income: float = 0.0
    total_monthly_expenses: float = 0.0
    monthly_noi: float = 0.0
    yearly_noi: float = 0.0
    roi: float = 0.0

    @field_validator("start_date", mode="before")
    @classmethod
    def loose_start_date(cls, value):
        """Unparseable dates become None and print as "Invalid Date"."""
        if isinstance(value, str):
            return parse_start_date(value)
        return value


@dataclass
class ReportRow:
    label: str
    value: str = ""
    kind: str = "line"  # line, subtotal, note, blank


@dataclass
class ReportSection:
    title: str
    rows: List[ReportRow] = field(default_factory=list)

    def line(self, label: str, value: str) -> None:
        self.rows.append(ReportRow(label, value))

    def subtotal(self, label: str, value: str) -> None:
        self.rows.append(ReportRow(label, value, "subtotal"))

    def note(self, text: str) -> None:
        self.rows.append(ReportRow(text, kind="note"))

    def blank(self) -> None:
        self.rows.append(ReportRow("", kind="blank"))


def build_report_data(scenario: Scenario) -> ReportData:
    """Flatten a scenario into the exporter's snapshot."""
    acq_in = scenario.acquisition_inputs
    crc_in = scenario.carrying_inputs
    exp_in = scenario.expense_inputs
    mtg_in = scenario.mortgage_inputs
    inc_in = scenario.income_inputs

    return ReportData(
        purchase_price=acq_in.purchase_price,
        down_payment=acq_in.down_payment_amount,
        down_payment_percent=acq_in.down_payment_percent,
        appraisal_fee=acq_in.appraisal_fee,
        inspection_fee=acq_in.inspection_fee,
        closing_costs=acq_in.closing_costs_amount,
        all_in_cost=scenario.acquisition.all_in_cost,
        loan_amount=crc_in.loan_amount,
        intro_apr=crc_in.intro_apr,
        intro_period=crc_in.intro_period_months,
        post_intro_apr=crc_in.post_intro_apr,
        min_payment_percent=crc_in.min_payment_percent,
        carrying_cost=scenario.carrying.yearly_carrying_cost,
        **exp_in.line_items(),
        total_yearly_expenses=scenario.expenses.yearly_total,
        monthly_raw_expenses=scenario.expenses.monthly_raw_expenses,
        property_price=mtg_in.property_price,
        mortgage_down_payment=mtg_in.down_payment,
        mortgage_loan_amount=scenario.mortgage.principal,
        interest_rate=mtg_in.annual_interest_rate_percent,
        loan_term_years=mtg_in.loan_term_years,
        start_date=mtg_in.start_date,
        monthly_payment=scenario.mortgage.monthly_payment,
        total_interest=scenario.mortgage.total_interest,
        total_repayment=scenario.mortgage.total_repayment,
        number_of_units=inc_in.unit_count,
        rent_per_unit=inc_in.rent_per_unit,
        pets=inc_in.pets,
        parking=inc_in.parking,
        laundry=inc_in.laundry,
        storage=inc_in.storage,
        total_monthly_income=scenario.income.monthly_income,
        total_yearly_income=scenario.income.yearly_income,
        total_monthly_expenses=scenario.income.total_monthly_expenses,
        monthly_noi=scenario.income.monthly_noi,
        yearly_noi=scenario.income.yearly_noi,
        roi=scenario.income.roi,
    )


def build_sections(data: ReportData) -> List[ReportSection]:
    """Lay out the five report sections."""
    money = format_currency

    acquisition = ReportSection("1. Property & All-In Cost Overview")
    acquisition.line("Purchase Price:", money(data.purchase_price))
    acquisition.line(
        "Down Payment:",
        f"{money(data.down_payment)} ({format_percent(data.down_payment_percent, 1)})",
    )
    acquisition.line("Appraisal Fee:", money(data.appraisal_fee))
    acquisition.line("Inspection Fee:", money(data.inspection_fee))
    acquisition.line("Closing Costs:", money(data.closing_costs))
    acquisition.subtotal("Total All-In Cost:", money(data.all_in_cost))
    acquisition.line("Monthly Breakdown:", money(data.all_in_cost / 12))
    acquisition.line("Weekly Breakdown:", money(data.all_in_cost / 52))
    acquisition.line("Daily Breakdown:", money(data.all_in_cost / 365))

    carrying = ReportSection("2. Carrying Cost (CRC) Summary")
    carrying.line("Loan/Advance Amount:", money(data.loan_amount))
    carrying.line("Intro APR:", f"{format_rate(data.intro_apr)}%")
    carrying.line("Intro Period:", f"{data.intro_period} months")
    carrying.line("Post-Intro APR:", f"{format_rate(data.post_intro_apr)}%")
    carrying.line("Min Payment %:", f"{format_rate(data.min_payment_percent)}%")
    carrying.subtotal("Annual Carrying Cost:", money(data.carrying_cost))
    carrying.line("Monthly Carrying Cost:", money(data.carrying_cost / 12))
    carrying.line("Daily Carrying Cost:", money(data.carrying_cost / 365))
    advisory = refinance_advisory(data.intro_period, data.post_intro_apr)
    if advisory:
        carrying.blank()
        carrying.note(f"! {advisory}")

    expenses = ReportSection("3. Operating Expenses Summary")
    expenses.line("Repairs (Annual):", money(data.repairs))
    expenses.line("Utilities (Annual):", money(data.utilities))
    expenses.line("Home Warranty (Annual):", money(data.home_warranty))
    expenses.line("Trash Removal (Annual):", money(data.trash_removal))
    expenses.line("Landscaping (Annual):", money(data.landscaping))
    expenses.line("Property Management (Annual):", money(data.property_management))
    expenses.line("Property Taxes (Annual):", money(data.property_taxes))
    expenses.line("Homeowners Insurance (Annual):", money(data.homeowners_insurance))
    expenses.line("CapEx (Annual):", money(data.cap_ex))
    expenses.subtotal("Total Annual Expenses:", money(data.total_yearly_expenses))
    expenses.line("Monthly Expenses:", money(data.monthly_raw_expenses))
    expenses.line("Daily Expenses:", money(data.total_yearly_expenses / 365))

    mortgage = ReportSection("4. Mortgage Summary")
    mortgage.line("Property Price:", money(data.property_price))
    mortgage.line("Down Payment:", money(data.mortgage_down_payment))
    mortgage.line("Principal (Loan Amount):", money(data.mortgage_loan_amount))
    mortgage.line("Interest Rate:", f"{format_rate(data.interest_rate)}%")
    mortgage.line("Loan Term:", f"{data.loan_term_years} years")
    mortgage.line("Start Date:", format_date(data.start_date))
    mortgage.subtotal("Monthly Payment:", money(data.monthly_payment))
    mortgage.line("Total Interest:", money(data.total_interest))
    mortgage.line("Total Repayment:", money(data.total_repayment))
    mortgage.line(
        "Loan End Date:",
        format_date(calculate_end_date(data.start_date, data.loan_term_years)),
    )

    income = ReportSection("5. Income & ROI Summary")
    income.line("Number of Units:", str(data.number_of_units))
    income.line("Rent Per Unit:", money(data.rent_per_unit))
    income.line("Total Monthly Rent:", money(data.number_of_units * data.rent_per_unit))
    income.line("Additional Income (Pets):", money(data.pets))
    income.line("Additional Income (Parking):", money(data.parking))
    income.line("Additional Income (Laundry):", money(data.laundry))
    income.line("Additional Income (Storage):", money(data.storage))
    income.subtotal("Total Monthly Income:", money(data.total_monthly_income))
    income.line("Total Yearly Income:", money(data.total_yearly_income))
    income.line("Daily Income:", money(data.total_yearly_income / 365))
    income.blank()
    income.line("Total Monthly Expenses:", money(data.total_monthly_expenses))
    income.subtotal("Monthly Net Operating Income:", money(data.monthly_noi))
    income.line("Annual NOI:", money(data.yearly_noi))
    income.blank()
    income.subtotal(
        "Return on Investment (ROI):",
        f"{format_percent(data.roi)} ({classify_roi(data.roi)})",
    )
    income.line(
        "ROI Calculation:",
        f"({money(data.yearly_noi)} / {money(data.all_in_cost)}) x 100",
    )

    return [acquisition, carrying, expenses, mortgage, income]


def paginate(lines: List[str], lines_per_page: int) -> List[List[str]]:
    """Split report lines into pages, reserving two lines for the page number."""
    body = max(lines_per_page - 2, 1)
    pages = [lines[i : i + body] for i in range(0, len(lines), body)]
    return pages or [[]]


def render_report(
    data: ReportData,
    generated_on: Optional[date] = None,
    lines_per_page: Optional[int] = None,
) -> str:
    """
    Render the report as paginated text.

    Pages are separated by a form feed and each ends with a
    "Page i of n" line.

    Args:
        data: Snapshot to render
        generated_on: Date printed in the header (defaults to today)
        lines_per_page: Page height in lines (defaults to settings)

    Returns:
        The full report text
    """
    settings = get_settings()
    if generated_on is None:
        generated_on = date.today()
    if lines_per_page is None:
        lines_per_page = settings.report_lines_per_page

    template = _env.get_template("report.txt.j2")
    text = template.render(
        title=settings.report_title,
        generated_on=format_date(generated_on),
        sections=build_sections(data),
        footer=FOOTER,
        width=REPORT_WIDTH,
        label_width=LABEL_WIDTH,
    )

    pages = paginate(text.splitlines(), lines_per_page)
    total = len(pages)
    rendered = []
    for number, page in enumerate(pages, start=1):
        footer = f"Page {number} of {total}".center(REPORT_WIDTH).rstrip()
        rendered.append("\n".join(page + ["", footer]))

    logger.info(f"Rendered investment report: {total} page(s), ROI {data.roi:.2f}%")
    return "\n\f".join(rendered) + "\n"


def report_filename(generated_on: Optional[date] = None) -> str:
    """Download name for a report, e.g. real-estate-analysis-2026-10-19.txt."""
    if generated_on is None:
        generated_on = date.today()
    return f"real-estate-analysis-{generated_on.isoformat()}.txt"

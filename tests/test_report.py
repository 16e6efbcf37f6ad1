"""
Tests for report formatting and export.
"""

import pytest
from datetime import date

from investcalc.calculations.scenario import ScenarioCoordinator, evaluate
from investcalc.reports.exporter import (
    ReportData,
    build_report_data,
    paginate,
    render_report,
    report_filename,
)
from investcalc.reports.formatting import (
    format_currency,
    format_date,
    format_percent,
    format_rate,
)


@pytest.fixture
def report_data(sample_inputs):
    return build_report_data(evaluate(**sample_inputs))


class TestFormatting:
    """Test display helpers."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (1438.92, "$1,439"),
            (518012.26, "$518,012"),
            (0, "$0"),
            (0.5, "$1"),
            (2.5, "$3"),
            (-2000, "-$2,000"),
            (-0.4, "$0"),
            (float("nan"), "N/A"),
        ],
    )
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_format_percent(self):
        assert format_percent(11.14624) == "11.15%"
        assert format_percent(20, 1) == "20.0%"

    def test_format_rate(self):
        assert format_rate(6) == "6"
        assert format_rate(6.5) == "6.5"
        assert format_rate(0.0) == "0"
        assert format_rate(float("nan")) == "nan"

    def test_format_date(self):
        assert format_date(date(2055, 1, 5)) == "1/5/2055"
        assert format_date(None) == "Invalid Date"


class TestReportData:
    """Test snapshot flattening."""

    def test_fields_from_scenario(self, report_data):
        assert report_data.purchase_price == 300000
        assert report_data.down_payment == pytest.approx(60000)
        assert report_data.down_payment_percent == 20
        assert report_data.closing_costs == pytest.approx(15000)
        assert report_data.all_in_cost == pytest.approx(75900)
        assert report_data.carrying_cost == pytest.approx(9108)
        assert report_data.total_yearly_expenses == pytest.approx(15100)
        assert report_data.mortgage_loan_amount == 240000
        assert report_data.start_date == date(2025, 1, 15)
        assert report_data.number_of_units == 1
        assert report_data.total_monthly_income == 2705

    def test_seeded_scenario(self):
        coordinator = ScenarioCoordinator()
        coordinator.set_acquisition(purchase_price=200000, down_payment_percent=25)
        data = build_report_data(coordinator.scenario)
        assert data.loan_amount == data.all_in_cost
        assert data.property_price == 200000
        assert data.mortgage_down_payment == pytest.approx(50000)


class TestRenderReport:
    """Test the rendered text."""

    def test_sections_and_values(self, report_data):
        report = render_report(report_data, generated_on=date(2026, 10, 19))
        assert "Real Estate Investment Analysis Report" in report
        assert "Generated on 10/19/2026" in report
        for title in (
            "1. Property & All-In Cost Overview",
            "2. Carrying Cost (CRC) Summary",
            "3. Operating Expenses Summary",
            "4. Mortgage Summary",
            "5. Income & ROI Summary",
        ):
            assert title in report
        assert "$75,900" in report
        assert "$60,000 (20.0%)" in report
        assert "$1,439" in report
        assert "Loan End Date:" in report
        assert "1/15/2055" in report
        assert "This report was generated by Real Estate Investment Calculator" in report

    def test_advisory(self, report_data):
        report = render_report(report_data, generated_on=date(2026, 10, 19))
        assert "Refinance before 6 months to avoid 24.99% APR" in report

        quiet = render_report(
            report_data.model_copy(update={"intro_period": 0}),
            generated_on=date(2026, 10, 19),
        )
        assert "Refinance before" not in quiet

    def test_roi_line(self):
        data = ReportData(all_in_cost=75900, yearly_noi=8460, roi=8460 / 75900 * 100)
        report = render_report(data, generated_on=date(2026, 10, 19))
        assert "11.15% (Good)" in report
        assert "($8,460 / $75,900) x 100" in report

    def test_invalid_start_date(self, report_data):
        data = report_data.model_copy(update={"start_date": None})
        report = render_report(data, generated_on=date(2026, 10, 19))
        assert report.count("Invalid Date") == 2

    def test_unparseable_start_date_string(self):
        data = ReportData(start_date="2025-13-45", loan_term_years=30)
        assert data.start_date is None
        assert ReportData(start_date="2025-01-15").start_date == date(2025, 1, 15)

    def test_pagination(self, report_data):
        report = render_report(report_data, generated_on=date(2026, 10, 19), lines_per_page=20)
        pages = report.split("\f")
        assert len(pages) > 1
        assert report.count("\f") == len(pages) - 1
        for number, page in enumerate(pages, start=1):
            lines = page.strip("\n").split("\n")
            assert len(lines) <= 20
            assert f"Page {number} of {len(pages)}" in lines[-1]

    def test_single_page(self, report_data):
        report = render_report(report_data, generated_on=date(2026, 10, 19), lines_per_page=500)
        assert "\f" not in report
        assert "Page 1 of 1" in report

    def test_paginate_empty(self):
        assert paginate([], 10) == [[]]

    def test_report_filename(self):
        assert report_filename(date(2026, 10, 19)) == "real-estate-analysis-2026-10-19.txt"

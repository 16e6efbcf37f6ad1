"""
Report export API endpoints.

Produce a downloadable plain-text investment report.
"""

from datetime import date

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from investcalc.api.calculations import ScenarioInput, build_coordinator
from investcalc.reports.exporter import (
    ReportData,
    build_report_data,
    render_report,
    report_filename,
)

router = APIRouter()


def report_response(data: ReportData) -> PlainTextResponse:
    today = date.today()
    return PlainTextResponse(
        render_report(data, generated_on=today),
        headers={
            "Content-Disposition": f'attachment; filename="{report_filename(today)}"'
        },
    )


@router.post("", response_class=PlainTextResponse)
async def export_report(data: ReportData):
    """Render a report from a finished snapshot."""
    return report_response(data)


@router.post("/scenario", response_class=PlainTextResponse)
async def export_scenario_report(inputs: ScenarioInput):
    """Evaluate a scenario and render its report."""
    scenario = build_coordinator(inputs).scenario
    return report_response(build_report_data(scenario))

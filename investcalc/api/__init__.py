"""
API routes for the investment calculator.
"""

from fastapi import APIRouter

from investcalc.api import calculations, reports

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])

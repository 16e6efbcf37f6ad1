"""
Financial Calculation Engine

Derived-metrics computation for a single real estate investment:
acquisition cost, carrying cost, operating expenses, mortgage
amortization and income/ROI.
"""

from investcalc.calculations import (
    acquisition,
    carrying,
    expenses,
    amortization,
    income,
    scenario,
)

__all__ = ["acquisition", "carrying", "expenses", "amortization", "income", "scenario"]

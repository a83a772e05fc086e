"""
Reporting module for inventory dashboards and financial summaries.

Pure aggregations over an InventoryState snapshot:
- Dashboard totals, status breakdown and expiring warranties
- CapEx/OpEx spend against category budgets
- Spend by category, devices by location and device age buckets
"""

from .analytics import (
    capex_by_category,
    device_age_buckets,
    devices_by_location,
    opex_by_category,
)
from .dashboard import DashboardSummary, build_dashboard
from .financials import BudgetAllocation, FinancialSummary, MonthlySpend, build_financials

__all__ = [
    "capex_by_category",
    "opex_by_category",
    "devices_by_location",
    "device_age_buckets",
    "DashboardSummary",
    "build_dashboard",
    "BudgetAllocation",
    "FinancialSummary",
    "MonthlySpend",
    "build_financials",
]

"""
Financial summary: CapEx and OpEx spend against category budgets.

CapEx is the purchase cost of devices, bucketed by device category and by
purchase month. OpEx is the cost of repairs, bucketed by repair category and
by reported month.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import ReportingParams
from ..state.models import InventoryState
from ..utils.time import month_key, month_label
from .analytics import capex_by_category, opex_by_category

HEALTH_OK = "ok"
HEALTH_WARNING = "warning"
HEALTH_CRITICAL = "critical"


@dataclass(frozen=True)
class BudgetAllocation:
    """Budget versus spend for one category."""

    category: str
    allocated: float
    spent: float
    health: str = HEALTH_OK

    @property
    def remaining(self) -> float:
        return self.allocated - self.spent

    @property
    def percentage(self) -> float:
        if self.allocated <= 0:
            return 0.0
        return self.spent / self.allocated * 100

    @property
    def over_budget(self) -> bool:
        return self.spent > self.allocated


@dataclass(frozen=True)
class MonthlySpend:
    """CapEx and OpEx for one calendar month."""

    key: str
    label: str
    capex: float = 0.0
    opex: float = 0.0


@dataclass(frozen=True)
class FinancialSummary:
    """Totals, per-category allocations and the monthly series."""

    total_capex: float
    total_opex: float
    total_capex_budget: float
    total_opex_budget: float
    capex_allocations: tuple[BudgetAllocation, ...]
    opex_allocations: tuple[BudgetAllocation, ...]
    monthly: tuple[MonthlySpend, ...]


def classify_health(allocated: float, spent: float, params: ReportingParams) -> str:
    """Traffic-light status for a category's spend."""
    if spent > allocated:
        return HEALTH_CRITICAL
    percentage = spent / allocated * 100 if allocated > 0 else 0.0
    if percentage >= params.budget_critical_pct:
        return HEALTH_CRITICAL
    if percentage >= params.budget_warning_pct:
        return HEALTH_WARNING
    return HEALTH_OK


def build_allocations(
    budget: dict[str, float],
    spending: dict[str, float],
    params: Optional[ReportingParams] = None
) -> tuple[BudgetAllocation, ...]:
    """One row per budgeted category, in budget order."""
    params = params or ReportingParams()
    rows = []
    for category, allocated in budget.items():
        spent = spending.get(category, 0.0)
        rows.append(BudgetAllocation(
            category=category,
            allocated=allocated,
            spent=spent,
            health=classify_health(allocated, spent, params),
        ))
    return tuple(rows)


def monthly_spend(state: InventoryState) -> tuple[MonthlySpend, ...]:
    """CapEx by purchase month and OpEx by reported month, oldest first."""
    months: dict[str, dict] = {}

    def bucket(when) -> dict:
        key = month_key(when)
        if key not in months:
            months[key] = {"key": key, "label": month_label(when), "capex": 0.0, "opex": 0.0}
        return months[key]

    for device in state.devices:
        bucket(device.purchase_date)["capex"] += device.cost
    for repair in state.repairs:
        bucket(repair.reported_date)["opex"] += repair.cost

    return tuple(MonthlySpend(**months[key]) for key in sorted(months))


def build_financials(
    state: InventoryState,
    params: Optional[ReportingParams] = None
) -> FinancialSummary:
    """Summarize spend against the CapEx and OpEx budgets."""
    params = params or ReportingParams()
    capex_spend = capex_by_category(state.devices)
    opex_spend = opex_by_category(state.repairs)

    return FinancialSummary(
        total_capex=sum(d.cost for d in state.devices),
        total_opex=sum(r.cost for r in state.repairs),
        total_capex_budget=sum(state.capex_budget.values()),
        total_opex_budget=sum(state.opex_budget.values()),
        capex_allocations=build_allocations(state.capex_budget, capex_spend, params),
        opex_allocations=build_allocations(state.opex_budget, opex_spend, params),
        monthly=monthly_spend(state),
    )

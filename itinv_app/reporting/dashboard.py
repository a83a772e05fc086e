"""Dashboard summary: totals, status breakdown and expiring warranties."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..config.defaults import ReportingParams
from ..state.models import Device, DeviceStatus, InventoryState
from ..utils.time import add_months, resolve_as_of


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for the inventory dashboard."""

    total_devices: int
    in_repair: int
    total_capex: float
    total_opex: float
    status_counts: dict[str, int] = field(default_factory=dict)
    expiring_warranties: tuple[Device, ...] = ()


def expiring_warranties(
    devices,
    as_of: Optional[date] = None,
    window_months: int = 6
) -> list[Device]:
    """Devices whose warranty ends after ``as_of`` and before the window closes."""
    as_of = resolve_as_of(as_of)
    horizon = add_months(as_of, window_months)
    expiring = [d for d in devices if as_of < d.warranty_end_date < horizon]
    return sorted(expiring, key=lambda d: d.warranty_end_date)


def build_dashboard(
    state: InventoryState,
    as_of: Optional[date] = None,
    params: Optional[ReportingParams] = None
) -> DashboardSummary:
    """Summarize the inventory for the dashboard view."""
    params = params or ReportingParams()

    status_counts: dict[str, int] = {}
    for device in state.devices:
        status_counts[device.status.value] = status_counts.get(device.status.value, 0) + 1

    return DashboardSummary(
        total_devices=len(state.devices),
        in_repair=status_counts.get(DeviceStatus.IN_REPAIR.value, 0),
        total_capex=sum(d.cost for d in state.devices),
        total_opex=sum(r.cost for r in state.repairs),
        status_counts=status_counts,
        expiring_warranties=tuple(
            expiring_warranties(state.devices, as_of, params.warranty_window_months)
        ),
    )

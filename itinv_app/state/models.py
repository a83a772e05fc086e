"""
Inventory state data models.

This module defines immutable data structures for devices, repairs and the
application state snapshot that every lifecycle and registry operation takes
and returns.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_iso_date, parse_iso_date


class DeviceStatus(str, Enum):
    """Device lifecycle states."""
    IN_USE = "In Use"
    IN_REPAIR = "In Repair"
    IN_STORAGE = "In Storage"
    RETIRED = "Retired"


class RepairStatus(str, Enum):
    """Repair ticket states."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def is_active(self) -> bool:
        return self in (RepairStatus.PENDING, RepairStatus.IN_PROGRESS)

    @property
    def is_closed(self) -> bool:
        return self in (RepairStatus.COMPLETED, RepairStatus.CANCELLED)


class CategoryKind(str, Enum):
    """The three named sets managed by the category registry."""
    DEVICE = "device"
    REPAIR = "repair"
    LOCATION = "location"


@dataclass(frozen=True)
class DeviceDraft:
    """Device fields supplied by the caller before an id is assigned."""

    name: str
    category: str
    serial_number: str
    location: str
    purchase_date: date
    warranty_end_date: date
    status: DeviceStatus = DeviceStatus.IN_STORAGE
    cost: float = 0.0
    assigned_to: str = ""

    def with_id(self, device_id: str) -> "Device":
        return Device(
            id=device_id,
            name=self.name,
            category=self.category,
            serial_number=self.serial_number,
            assigned_to=self.assigned_to,
            location=self.location,
            purchase_date=self.purchase_date,
            warranty_end_date=self.warranty_end_date,
            status=self.status,
            cost=self.cost,
        )


@dataclass(frozen=True)
class Device:
    """A tracked IT asset."""

    id: str
    name: str
    category: str
    serial_number: str
    location: str
    purchase_date: date
    warranty_end_date: date
    status: DeviceStatus
    cost: float = 0.0
    assigned_to: str = ""

    def with_status(self, status: DeviceStatus) -> "Device":
        return replace(self, status=status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "serial_number": self.serial_number,
            "assigned_to": self.assigned_to,
            "location": self.location,
            "purchase_date": format_iso_date(self.purchase_date),
            "warranty_end_date": format_iso_date(self.warranty_end_date),
            "status": self.status.value,
            "cost": self.cost,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Device":
        return cls(
            id=data["id"],
            name=data["name"],
            category=data["category"],
            serial_number=data["serial_number"],
            assigned_to=data.get("assigned_to") or "",
            location=data["location"],
            purchase_date=parse_iso_date(data["purchase_date"]),
            warranty_end_date=parse_iso_date(data["warranty_end_date"]),
            status=DeviceStatus(data["status"]),
            cost=float(data.get("cost", 0.0)),
        )


@dataclass(frozen=True)
class RepairDraft:
    """Repair fields supplied by the caller before an id is assigned."""

    device_id: str
    issue_description: str
    category: str
    reported_date: date
    status: RepairStatus = RepairStatus.PENDING
    cost: float = 0.0
    completed_date: Optional[date] = None
    device_name: str = ""

    def with_id(self, repair_id: str, device_name: Optional[str] = None) -> "Repair":
        return Repair(
            id=repair_id,
            device_id=self.device_id,
            device_name=device_name if device_name is not None else self.device_name,
            issue_description=self.issue_description,
            category=self.category,
            reported_date=self.reported_date,
            completed_date=self.completed_date,
            status=self.status,
            cost=self.cost,
        )


@dataclass(frozen=True)
class Repair:
    """A repair ticket raised against a device."""

    id: str
    device_id: str
    device_name: str
    issue_description: str
    category: str
    reported_date: date
    status: RepairStatus
    cost: float = 0.0
    completed_date: Optional[date] = None

    def with_status(self, status: RepairStatus,
                    completed_date: Optional[date] = None) -> "Repair":
        """
        Copy with a new status.

        Closing keeps the existing completion date unless one is given;
        moving back to an active status clears it.
        """
        if status.is_active:
            return replace(self, status=status, completed_date=None)
        return replace(self, status=status, completed_date=completed_date or self.completed_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "device_id": self.device_id,
            "device_name": self.device_name,
            "issue_description": self.issue_description,
            "category": self.category,
            "reported_date": format_iso_date(self.reported_date),
            "completed_date": format_iso_date(self.completed_date),
            "status": self.status.value,
            "cost": self.cost,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Repair":
        return cls(
            id=data["id"],
            device_id=data["device_id"],
            device_name=data.get("device_name") or "",
            issue_description=data.get("issue_description") or "",
            category=data["category"],
            reported_date=parse_iso_date(data["reported_date"]),
            completed_date=parse_iso_date(data.get("completed_date")),
            status=RepairStatus(data["status"]),
            cost=float(data.get("cost", 0.0)),
        )


@dataclass(frozen=True)
class InventoryState:
    """
    Complete application state snapshot.

    Entity collections and category sets are siblings; the registry and
    lifecycle operations keep the references between them consistent.
    """

    devices: tuple[Device, ...] = ()
    repairs: tuple[Repair, ...] = ()
    device_categories: tuple[str, ...] = ()
    repair_categories: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()
    capex_budget: dict[str, float] = field(default_factory=dict)
    opex_budget: dict[str, float] = field(default_factory=dict)

    def get_device(self, device_id: str) -> Optional[Device]:
        for device in self.devices:
            if device.id == device_id:
                return device
        return None

    def get_repair(self, repair_id: str) -> Optional[Repair]:
        for repair in self.repairs:
            if repair.id == repair_id:
                return repair
        return None

    def repairs_for_device(self, device_id: str) -> list[Repair]:
        return [r for r in self.repairs if r.device_id == device_id]

    def with_devices(self, devices) -> "InventoryState":
        return replace(self, devices=tuple(devices))

    def with_repairs(self, repairs) -> "InventoryState":
        return replace(self, repairs=tuple(repairs))

    def with_device(self, device: Device) -> "InventoryState":
        """Replace the device with the same id, or append it if new."""
        if self.get_device(device.id) is None:
            return self.with_devices(self.devices + (device,))
        return self.with_devices(device if d.id == device.id else d for d in self.devices)

    def with_repair(self, repair: Repair) -> "InventoryState":
        """Replace the repair with the same id, or append it if new."""
        if self.get_repair(repair.id) is None:
            return self.with_repairs(self.repairs + (repair,))
        return self.with_repairs(repair if r.id == repair.id else r for r in self.repairs)

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON/YAML friendly representation."""
        return {
            "devices": [d.to_dict() for d in self.devices],
            "repairs": [r.to_dict() for r in self.repairs],
            "device_categories": list(self.device_categories),
            "repair_categories": list(self.repair_categories),
            "locations": list(self.locations),
            "capex_budget": dict(self.capex_budget),
            "opex_budget": dict(self.opex_budget),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InventoryState":
        return cls(
            devices=tuple(Device.from_dict(d) for d in data.get("devices", [])),
            repairs=tuple(Repair.from_dict(r) for r in data.get("repairs", [])),
            device_categories=tuple(data.get("device_categories", [])),
            repair_categories=tuple(data.get("repair_categories", [])),
            locations=tuple(data.get("locations", [])),
            capex_budget={k: float(v) for k, v in data.get("capex_budget", {}).items()},
            opex_budget={k: float(v) for k, v in data.get("opex_budget", {}).items()},
        )

"""Pytest configuration and shared fixtures."""

import itertools
from datetime import date
from typing import Any, Dict

import pytest

from itinv_app.engine import InventoryEngine
from itinv_app.state.models import (
    Device,
    DeviceStatus,
    InventoryState,
    Repair,
    RepairStatus,
)


def make_device(device_id: str = "d001", **overrides) -> Device:
    """Build a device with sensible defaults for tests."""
    fields = {
        "id": device_id,
        "name": f"Device {device_id}",
        "category": "LAPTOP",
        "serial_number": f"SN-{device_id}",
        "assigned_to": "Alice Johnson",
        "location": "New York Office",
        "purchase_date": date(2023, 1, 15),
        "warranty_end_date": date(2026, 1, 14),
        "status": DeviceStatus.IN_USE,
        "cost": 1000.0,
    }
    fields.update(overrides)
    return Device(**fields)


def make_repair(repair_id: str = "r001", device_id: str = "d001", **overrides) -> Repair:
    """Build a repair with sensible defaults for tests."""
    fields = {
        "id": repair_id,
        "device_id": device_id,
        "device_name": f"Device {device_id}",
        "issue_description": "Cracked screen",
        "category": "Screen Repair",
        "reported_date": date(2024, 7, 10),
        "completed_date": None,
        "status": RepairStatus.PENDING,
        "cost": 100.0,
    }
    fields.update(overrides)
    return Repair(**fields)


@pytest.fixture
def base_state() -> InventoryState:
    """Small inventory with two devices and no repairs."""
    return InventoryState(
        devices=(
            make_device("d001", name="MacBook Pro", category="LAPTOP", cost=2499.0),
            make_device("d002", name="HP EliteDesk", category="DESKTOP",
                        location="London Office", cost=1250.0),
        ),
        repairs=(),
        device_categories=("DESKTOP", "LAPTOP", "Monitor"),
        repair_categories=("Battery Replacement", "Other", "Screen Repair"),
        locations=("London Office", "New York Office"),
        capex_budget={"DESKTOP": 10000.0, "LAPTOP": 15000.0, "Monitor": 4000.0},
        opex_budget={"Battery Replacement": 1500.0, "Other": 500.0, "Screen Repair": 2000.0},
    )


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: d1, d2 ... / r1, r2 ..."""
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}{next(counter)}"


@pytest.fixture
def engine(base_state, sequential_ids) -> InventoryEngine:
    """Engine over the base state with predictable ids."""
    return InventoryEngine(state=base_state, id_factory=sequential_ids)


@pytest.fixture
def sample_device_payload() -> Dict[str, Any]:
    """Raw device form data in the web front end's camelCase shape."""
    return {
        "name": "Dell XPS 15",
        "type": "LAPTOP",
        "serialNumber": "DXPS5678EFGH",
        "assignedTo": "Bob Williams",
        "location": "London Office",
        "purchaseDate": "2022-11-20",
        "warrantyEndDate": "2025-11-19",
        "status": "In Use",
        "cost": 1899,
    }


@pytest.fixture
def sample_repair_payload() -> Dict[str, Any]:
    """Raw repair form data in the web front end's camelCase shape."""
    return {
        "deviceId": "d001",
        "issueDescription": "Battery not holding charge",
        "category": "Battery Replacement",
        "reportedDate": "2024-05-02",
        "completedDate": None,
        "status": "Pending",
        "cost": 150,
    }


@pytest.fixture
def seed_document() -> Dict[str, Any]:
    """Minimal seed document as loaded from seed.yaml."""
    return {
        "device_categories": ["LAPTOP", "DESKTOP", "Phone"],
        "repair_categories": ["Screen Repair", "Other"],
        "locations": ["New York Office", "Data Center A"],
        "capex_budget": {"LAPTOP": 15000, "Phone": 5000},
        "opex_budget": {"Screen Repair": 2000},
        "devices": [
            {"id": "d005", "name": "iPhone 15 Pro", "category": "Phone",
             "serial_number": "IP15P789UVWX", "assigned_to": "Dana White",
             "location": "New York Office", "purchase_date": "2023-09-22",
             "warranty_end_date": "2025-09-21", "status": "In Repair", "cost": 999},
            {"id": "d006", "name": "Lenovo ThinkPad X1", "category": "LAPTOP",
             "serial_number": "LTX1Y234ZABC", "assigned_to": "Eve Adams",
             "location": "Data Center A", "purchase_date": "2021-08-01",
             "warranty_end_date": "2024-07-31", "status": "In Storage", "cost": 1600},
        ],
        "repairs": [
            {"id": "r001", "device_id": "d005", "issue_description": "Cracked screen after drop",
             "category": "Screen Repair", "reported_date": "2024-07-10",
             "completed_date": None, "status": "In Progress", "cost": 299},
        ],
    }


@pytest.fixture
def device_factory():
    """Factory fixture wrapping make_device."""
    return make_device


@pytest.fixture
def repair_factory():
    """Factory fixture wrapping make_repair."""
    return make_repair

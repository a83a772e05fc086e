"""Tests for inventory data models."""

from datetime import date

import pytest

from itinv_app.state.models import (
    CategoryKind,
    Device,
    DeviceDraft,
    DeviceStatus,
    InventoryState,
    Repair,
    RepairDraft,
    RepairStatus,
)


class TestEnums:
    """Test status enums."""

    def test_device_status_values(self):
        assert [s.value for s in DeviceStatus] == ["In Use", "In Repair", "In Storage", "Retired"]

    @pytest.mark.parametrize("status,active", [
        (RepairStatus.PENDING, True),
        (RepairStatus.IN_PROGRESS, True),
        (RepairStatus.COMPLETED, False),
        (RepairStatus.CANCELLED, False),
    ])
    def test_repair_status_activity(self, status, active):
        assert status.is_active is active
        assert status.is_closed is not active

    def test_enums_compare_as_strings(self):
        assert DeviceStatus.IN_REPAIR == "In Repair"
        assert CategoryKind("location") is CategoryKind.LOCATION


class TestDevice:
    """Test Device and DeviceDraft."""

    def test_draft_with_id(self):
        draft = DeviceDraft(
            name="Dell Monitor",
            category="Monitor",
            serial_number="DU27Q789GHIJ",
            location="New York Office",
            purchase_date=date(2023, 6, 5),
            warranty_end_date=date(2026, 6, 4),
        )

        device = draft.with_id("d009")

        assert device.id == "d009"
        assert device.name == "Dell Monitor"
        assert device.status == DeviceStatus.IN_STORAGE
        assert device.cost == 0.0
        assert device.assigned_to == ""

    def test_device_is_immutable(self, device_factory):
        device = device_factory()

        with pytest.raises(AttributeError):
            device.status = DeviceStatus.RETIRED

    def test_with_status_returns_copy(self, device_factory):
        device = device_factory()

        retired = device.with_status(DeviceStatus.RETIRED)

        assert retired.status == DeviceStatus.RETIRED
        assert device.status == DeviceStatus.IN_USE

    def test_dict_round_trip(self, device_factory):
        device = device_factory(status=DeviceStatus.RETIRED, cost=749.5)

        data = device.to_dict()

        assert data["status"] == "Retired"
        assert data["purchase_date"] == "2023-01-15"
        assert Device.from_dict(data) == device


class TestRepair:
    """Test Repair and RepairDraft."""

    def test_draft_with_id_sets_device_name(self):
        draft = RepairDraft(
            device_id="d002",
            issue_description="Keyboard malfunction",
            category="Other",
            reported_date=date(2024, 3, 15),
        )

        repair = draft.with_id("r004", device_name="Dell XPS 15")

        assert repair.id == "r004"
        assert repair.device_name == "Dell XPS 15"
        assert repair.status == RepairStatus.PENDING
        assert repair.completed_date is None

    def test_reopen_clears_completed_date(self, repair_factory):
        repair = repair_factory(completed_date=date(2024, 7, 20), status=RepairStatus.COMPLETED)

        reopened = repair.with_status(RepairStatus.PENDING)

        assert reopened.status == RepairStatus.PENDING
        assert reopened.completed_date is None

    def test_close_keeps_completed_date(self, repair_factory):
        repair = repair_factory(completed_date=date(2024, 7, 20), status=RepairStatus.COMPLETED)

        cancelled = repair.with_status(RepairStatus.CANCELLED)

        assert cancelled.completed_date == date(2024, 7, 20)

    def test_with_status_sets_completed_date(self, repair_factory):
        repair = repair_factory(status=RepairStatus.IN_PROGRESS)

        done = repair.with_status(RepairStatus.COMPLETED, date(2024, 7, 21))

        assert done.completed_date == date(2024, 7, 21)

    def test_dict_round_trip(self, repair_factory):
        repair = repair_factory(status=RepairStatus.COMPLETED, completed_date=date(2024, 3, 20))

        data = repair.to_dict()

        assert data["completed_date"] == "2024-03-20"
        assert Repair.from_dict(data) == repair


class TestInventoryState:
    """Test InventoryState helpers."""

    def test_lookups(self, base_state, repair_factory):
        state = base_state.with_repair(repair_factory("r1", "d002"))

        assert state.get_device("d002").name == "HP EliteDesk"
        assert state.get_device("missing") is None
        assert state.get_repair("r1").device_id == "d002"
        assert state.repairs_for_device("d002") == [state.get_repair("r1")]
        assert state.repairs_for_device("d001") == []

    def test_with_device_replaces_in_place(self, base_state):
        device = base_state.get_device("d001").with_status(DeviceStatus.RETIRED)

        state = base_state.with_device(device)

        assert [d.id for d in state.devices] == ["d001", "d002"]
        assert state.get_device("d001").status == DeviceStatus.RETIRED

    def test_with_device_appends_new(self, base_state, device_factory):
        state = base_state.with_device(device_factory("d003"))

        assert [d.id for d in state.devices] == ["d001", "d002", "d003"]
        assert len(base_state.devices) == 2

    def test_with_repair_replaces_by_id(self, base_state, repair_factory):
        state = base_state.with_repair(repair_factory("r1", cost=10.0))

        state = state.with_repair(repair_factory("r1", cost=20.0))

        assert len(state.repairs) == 1
        assert state.get_repair("r1").cost == 20.0

    def test_state_dict_round_trip(self, base_state, repair_factory):
        state = base_state.with_repair(repair_factory("r1"))

        restored = InventoryState.from_dict(state.to_dict())

        assert restored == state

"""Tests for building inventory state from seed documents."""

import pytest

from itinv_app.config.defaults import BudgetDefaults
from itinv_app.config.loader import ConfigLoader
from itinv_app.data.seed import build_state
from itinv_app.errors import (
    DuplicateSerialError,
    MalformedRecordError,
    UnknownCategoryError,
    UnknownEntityError,
)
from itinv_app.state.models import DeviceStatus, RepairStatus


class TestBuildState:
    """Test build_state."""

    def test_categories_sorted(self, seed_document):
        state = build_state(seed_document)

        assert state.device_categories == ("DESKTOP", "LAPTOP", "Phone")
        assert state.repair_categories == ("Other", "Screen Repair")
        assert state.locations == ("Data Center A", "New York Office")

    def test_budgets_filled_with_defaults(self, seed_document):
        state = build_state(seed_document, BudgetDefaults(device_category=111.0, repair_category=22.0))

        assert state.capex_budget == {"DESKTOP": 111.0, "LAPTOP": 15000.0, "Phone": 5000.0}
        assert state.opex_budget == {"Other": 22.0, "Screen Repair": 2000.0}

    def test_budget_for_unregistered_category_dropped(self, seed_document):
        seed_document["capex_budget"]["Tablet"] = 900

        state = build_state(seed_document)

        assert "Tablet" not in state.capex_budget

    def test_statuses_taken_as_is(self, seed_document):
        state = build_state(seed_document)

        assert state.get_device("d005").status == DeviceStatus.IN_REPAIR
        assert state.get_device("d006").status == DeviceStatus.IN_STORAGE
        assert state.get_repair("r001").status == RepairStatus.IN_PROGRESS

    def test_missing_device_name_filled(self, seed_document):
        state = build_state(seed_document)

        assert state.get_repair("r001").device_name == "iPhone 15 Pro"

    def test_empty_seed(self):
        state = build_state(None)

        assert state.devices == ()
        assert state.capex_budget == {}

    def test_duplicate_category_names_collapse(self, seed_document):
        seed_document["locations"].append("Data Center A")

        assert build_state(seed_document).locations == ("Data Center A", "New York Office")


class TestSeedErrors:
    """Seed problems surface as the engine's validation errors."""

    def test_malformed_device(self, seed_document):
        seed_document["devices"][1]["cost"] = "expensive"

        with pytest.raises(MalformedRecordError, match=r"devices\[1\]: Invalid device cost"):
            build_state(seed_document)

    def test_duplicate_device_id(self, seed_document):
        seed_document["devices"][1]["id"] = "d005"

        with pytest.raises(MalformedRecordError, match="duplicate id"):
            build_state(seed_document)

    def test_unknown_device_category(self, seed_document):
        seed_document["devices"][0]["category"] = "Tablet"

        with pytest.raises(UnknownCategoryError):
            build_state(seed_document)

    def test_duplicate_serial(self, seed_document):
        seed_document["devices"][1]["serial_number"] = "IP15P789UVWX"

        with pytest.raises(DuplicateSerialError):
            build_state(seed_document)

    def test_repair_for_missing_device(self, seed_document):
        seed_document["repairs"][0]["device_id"] = "d404"

        with pytest.raises(UnknownEntityError):
            build_state(seed_document)

    @pytest.mark.parametrize("amount", [-10, float("nan"), float("inf"), ".nan", True])
    def test_invalid_budget(self, seed_document, amount):
        seed_document["opex_budget"]["Other"] = amount

        with pytest.raises(MalformedRecordError) as exc_info:
            build_state(seed_document)

        assert exc_info.value.field == "Other"

    def test_non_finite_default_budget(self, seed_document):
        with pytest.raises(MalformedRecordError):
            build_state(seed_document, BudgetDefaults(device_category=float("inf")))

    def test_negative_device_cost(self, seed_document):
        seed_document["devices"][0]["cost"] = -1

        with pytest.raises(MalformedRecordError, match=r"devices\[0\]: Invalid device cost"):
            build_state(seed_document)


class TestBundledSeed:
    """The shipped seed.yaml builds a consistent state."""

    def test_bundled_seed(self):
        loader = ConfigLoader.create()

        state = build_state(loader.load_seed(), loader.load_config().budgets)

        assert len(state.devices) == 8
        assert len(state.repairs) == 3
        assert len(state.device_categories) == 16
        assert state.opex_budget["Other"] == 500.0
        for repair in state.repairs:
            assert repair.device_name == state.get_device(repair.device_id).name

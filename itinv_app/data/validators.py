"""
Reference validation for device and repair records.

Checks that a record about to be stored has its required text and a usable
cost, points at live registry entries, and does not break serial number
uniqueness. The lifecycle rules themselves never validate; these checks run at
the command boundary before any mutation, for typed records and normalized
dict input alike.
"""

import math
from typing import Any, Optional

from ..errors import (
    DuplicateSerialError,
    MalformedRecordError,
    UnknownCategoryError,
    UnknownEntityError,
)
from ..state.models import CategoryKind, Device, InventoryState, Repair
from ..state.registry import is_registered


class RecordValidator:
    """Validates records against the current inventory state."""

    def _require_text(self, record_type: str, field: str, value: Any) -> None:
        if not isinstance(value, str) or not value.strip():
            raise MalformedRecordError(
                f"Invalid {record_type} {field}: cannot be empty",
                field=field,
                raw_value=value,
            )

    def _require_cost(self, record_type: str, cost: Any) -> None:
        if (isinstance(cost, bool) or not isinstance(cost, (int, float))
                or not math.isfinite(cost) or cost < 0):
            raise MalformedRecordError(
                f"Invalid {record_type} cost: must be a non-negative number",
                field="cost",
                raw_value=cost,
            )

    def _require_registered(self, state: InventoryState, kind: CategoryKind,
                            name: str, field: str) -> None:
        if not is_registered(state, kind, name):
            raise UnknownCategoryError(
                f"Unknown {kind.value} {field} '{name}'",
                kind=kind.value,
                name=name,
                context={"field": field},
            )

    def validate_device(self, state: InventoryState, device: Device,
                        exclude_id: Optional[str] = None) -> None:
        """
        Validate a device's fields, references and serial number.

        Args:
            state: Current inventory state
            device: Device (or draft) about to be stored
            exclude_id: Id of the device being edited, skipped for uniqueness

        Raises:
            MalformedRecordError: If name or serial is blank or cost is invalid
            UnknownCategoryError: If category or location is not registered
            DuplicateSerialError: If another device has the same serial
        """
        self._require_text("device", "name", device.name)
        self._require_text("device", "serial_number", device.serial_number)
        self._require_cost("device", device.cost)
        self._require_registered(state, CategoryKind.DEVICE, device.category, "category")
        self._require_registered(state, CategoryKind.LOCATION, device.location, "location")

        serial = device.serial_number.casefold()
        for other in state.devices:
            if other.id != exclude_id and other.serial_number.casefold() == serial:
                raise DuplicateSerialError(
                    f"Serial number '{device.serial_number}' is already used by device {other.id}",
                    serial_number=device.serial_number,
                    device_id=other.id,
                )

    def validate_repair(self, state: InventoryState, repair: Repair) -> Device:
        """
        Validate a repair's cost, category and owning device.

        Returns:
            The owning device

        Raises:
            MalformedRecordError: If the device id is blank or cost is invalid
            UnknownCategoryError: If the repair category is not registered
            UnknownEntityError: If the device does not exist
        """
        self._require_text("repair", "device_id", repair.device_id)
        self._require_cost("repair", repair.cost)
        self._require_registered(state, CategoryKind.REPAIR, repair.category, "category")

        device = state.get_device(repair.device_id)
        if device is None:
            raise UnknownEntityError(
                f"Device '{repair.device_id}' does not exist",
                entity_type="device",
                entity_id=repair.device_id,
            )
        return device


record_validator = RecordValidator()

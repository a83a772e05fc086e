"""
Record normalization for converting raw device/repair data to typed records.

Raw records arrive from seed files, forms or a transport layer, either with
snake_case keys or the camelCase keys used by the web front end
(``serialNumber``, ``assignedTo``, ``deviceId`` ...). This module maps both
onto the canonical field names, parses dates and enums, and checks costs.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..utils.time import parse_iso_date
from ..state.models import (
    Device,
    DeviceDraft,
    DeviceStatus,
    Repair,
    RepairDraft,
    RepairStatus,
)

logger = logging.getLogger(__name__)

DEVICE_ALIASES = {
    "type": "category",
    "serialNumber": "serial_number",
    "assignedTo": "assigned_to",
    "purchaseDate": "purchase_date",
    "warrantyEndDate": "warranty_end_date",
}

REPAIR_ALIASES = {
    "deviceId": "device_id",
    "deviceName": "device_name",
    "issueDescription": "issue_description",
    "reportedDate": "reported_date",
    "completedDate": "completed_date",
}

Record = Union[Device, DeviceDraft, Repair, RepairDraft]


class RecordError(ValueError):
    """Internal signal for a field that failed to normalize."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


@dataclass
class NormalizationResult:
    """Result of record normalization."""
    # Typed record (None if invalid)
    record: Optional[Record] = None
    # Processing metadata
    success: bool = True
    error_msg: Optional[str] = None
    error_field: Optional[str] = None

    @classmethod
    def ok(cls, record: Record) -> "NormalizationResult":
        """Create successful result with the typed record."""
        return cls(record=record, success=True)

    @classmethod
    def error(cls, error_msg: str, field: Optional[str] = None) -> "NormalizationResult":
        """Create error result."""
        return cls(success=False, error_msg=error_msg, error_field=field)


def _canonical_keys(raw: dict[str, Any], aliases: dict[str, str]) -> dict[str, Any]:
    data = {}
    for key, value in raw.items():
        data[aliases.get(key, key)] = value
    return data


def parse_enum(enum_cls: type[Enum], raw: Any) -> Enum:
    """
    Parse an enum from its display value, member name or compact form.

    ``"In Repair"``, ``"IN_REPAIR"`` and ``"InRepair"`` all map to
    ``DeviceStatus.IN_REPAIR``.
    """
    if isinstance(raw, enum_cls):
        return raw

    text = str(raw).strip()
    for member in enum_cls:
        if member.value == text:
            return member

    compact = "".join(ch for ch in text if ch.isalnum()).casefold()
    for member in enum_cls:
        if member.name.replace("_", "").casefold() == compact:
            return member

    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"'{raw}' is not one of {allowed}")


class RecordNormalizer:
    """
    Device and repair normalization pipeline.

    Every public method returns a NormalizationResult rather than raising, so
    callers can decide whether a bad record is fatal.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Initialize record normalizer with configuration.

        Args:
            config: Normalization configuration dict
        """
        self.config = config or {}
        self.logger = logger

    def _text(self, data: dict[str, Any], field: str, required: bool = True) -> str:
        value = data.get(field)
        if value is None:
            if required:
                raise RecordError(field, "is required")
            return ""
        text = str(value).strip()
        if required and not text:
            raise RecordError(field, "cannot be empty")
        return text

    def _date(self, data: dict[str, Any], field: str, required: bool = True):
        try:
            value = parse_iso_date(data.get(field))
        except (ValueError, TypeError) as e:
            raise RecordError(field, f"invalid date: {e}") from e
        if value is None and required:
            raise RecordError(field, "is required")
        return value

    def _cost(self, data: dict[str, Any], field: str = "cost") -> float:
        value = data.get(field)
        if value is None or value == "":
            return 0.0
        if isinstance(value, bool):
            raise RecordError(field, "must be a number")
        try:
            cost = float(value)
        except (ValueError, TypeError) as e:
            raise RecordError(field, f"must be a number: {e}") from e
        if not math.isfinite(cost) or cost < 0:
            raise RecordError(field, "must be a non-negative number")
        return cost

    def _status(self, data: dict[str, Any], enum_cls: type[Enum], default: Enum) -> Enum:
        value = data.get("status")
        if value is None or value == "":
            return default
        try:
            return parse_enum(enum_cls, value)
        except ValueError as e:
            raise RecordError("status", str(e)) from e

    def _device_draft(self, data: dict[str, Any]) -> DeviceDraft:
        return DeviceDraft(
            name=self._text(data, "name"),
            category=self._text(data, "category"),
            serial_number=self._text(data, "serial_number"),
            assigned_to=self._text(data, "assigned_to", required=False),
            location=self._text(data, "location"),
            purchase_date=self._date(data, "purchase_date"),
            warranty_end_date=self._date(data, "warranty_end_date"),
            status=self._status(data, DeviceStatus, DeviceStatus.IN_STORAGE),
            cost=self._cost(data),
        )

    def _repair_draft(self, data: dict[str, Any]) -> RepairDraft:
        return RepairDraft(
            device_id=self._text(data, "device_id"),
            device_name=self._text(data, "device_name", required=False),
            issue_description=self._text(data, "issue_description", required=False),
            category=self._text(data, "category"),
            reported_date=self._date(data, "reported_date"),
            completed_date=self._date(data, "completed_date", required=False),
            status=self._status(data, RepairStatus, RepairStatus.PENDING),
            cost=self._cost(data),
        )

    def _run(self, kind: str, build) -> NormalizationResult:
        try:
            return NormalizationResult.ok(build())
        except RecordError as e:
            self.logger.debug("Rejected %s record: %s", kind, e)
            return NormalizationResult.error(f"Invalid {kind} {e}", field=e.field)

    def normalize_device_draft(self, raw: dict[str, Any]) -> NormalizationResult:
        """Normalize device fields for a record that has no id yet."""
        data = _canonical_keys(raw, DEVICE_ALIASES)
        return self._run("device", lambda: self._device_draft(data))

    def normalize_device(self, raw: dict[str, Any]) -> NormalizationResult:
        """Normalize a stored device, id included."""
        data = _canonical_keys(raw, DEVICE_ALIASES)
        return self._run(
            "device",
            lambda: self._device_draft(data).with_id(self._text(data, "id")),
        )

    def normalize_repair_draft(self, raw: dict[str, Any]) -> NormalizationResult:
        """Normalize repair fields for a record that has no id yet."""
        data = _canonical_keys(raw, REPAIR_ALIASES)
        return self._run("repair", lambda: self._repair_draft(data))

    def normalize_repair(self, raw: dict[str, Any]) -> NormalizationResult:
        """Normalize a stored repair, id included."""
        data = _canonical_keys(raw, REPAIR_ALIASES)
        return self._run(
            "repair",
            lambda: self._repair_draft(data).with_id(self._text(data, "id")),
        )

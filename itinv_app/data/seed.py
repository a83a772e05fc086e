"""Build an InventoryState from a seed document (seed.yaml or a dict)."""

import math
from dataclasses import replace
from typing import Any, Optional

import structlog

from ..config.defaults import BudgetDefaults
from ..errors import MalformedRecordError
from ..state.models import InventoryState
from ..state.registry import sort_names
from .normalizer import RecordNormalizer
from .validators import record_validator

logger = structlog.get_logger(__name__)


def _normalized(result, index: int, kind: str):
    if not result.success:
        raise MalformedRecordError(
            f"{kind}[{index}]: {result.error_msg}",
            field=result.error_field,
        )
    return result.record


def _budget_map(names, configured: dict[str, Any], default: float) -> dict[str, float]:
    budget = {}
    for name in names:
        value = configured.get(name, default)
        if isinstance(value, bool):
            raise MalformedRecordError(f"Invalid budget for '{name}': must be a number", field=name, raw_value=value)
        try:
            amount = float(value)
        except (ValueError, TypeError) as e:
            raise MalformedRecordError(f"Invalid budget for '{name}': {e}", field=name, raw_value=value) from e
        if not math.isfinite(amount) or amount < 0:
            raise MalformedRecordError(f"Budget for '{name}' must be a finite non-negative number",
                                       field=name, raw_value=value)
        budget[name] = amount
    return budget


def build_state(seed: Optional[dict[str, Any]], defaults: Optional[BudgetDefaults] = None) -> InventoryState:
    """
    Build a consistent inventory state from a seed document.

    Categories without an explicit budget get the configured default. Every
    record is normalized and checked against the registries it references.

    Raises:
        MalformedRecordError: If a record or budget cannot be parsed
        UnknownCategoryError: If a record references an unregistered name
        UnknownEntityError: If a repair references a missing device
        DuplicateSerialError: If two devices share a serial number
    """
    seed = seed or {}
    defaults = defaults or BudgetDefaults()
    normalizer = RecordNormalizer()

    device_categories = sort_names(dict.fromkeys(seed.get("device_categories") or []))
    repair_categories = sort_names(dict.fromkeys(seed.get("repair_categories") or []))
    locations = sort_names(dict.fromkeys(seed.get("locations") or []))

    state = InventoryState(
        device_categories=device_categories,
        repair_categories=repair_categories,
        locations=locations,
        capex_budget=_budget_map(device_categories, seed.get("capex_budget") or {}, defaults.device_category),
        opex_budget=_budget_map(repair_categories, seed.get("opex_budget") or {}, defaults.repair_category),
    )

    for index, raw in enumerate(seed.get("devices") or []):
        device = _normalized(normalizer.normalize_device(raw), index, "devices")
        if state.get_device(device.id) is not None:
            raise MalformedRecordError(f"devices[{index}]: duplicate id '{device.id}'", field="id", raw_value=device.id)
        record_validator.validate_device(state, device)
        state = state.with_devices(state.devices + (device,))

    for index, raw in enumerate(seed.get("repairs") or []):
        repair = _normalized(normalizer.normalize_repair(raw), index, "repairs")
        if state.get_repair(repair.id) is not None:
            raise MalformedRecordError(f"repairs[{index}]: duplicate id '{repair.id}'", field="id", raw_value=repair.id)
        device = record_validator.validate_repair(state, repair)
        if not repair.device_name:
            repair = replace(repair, device_name=device.name)
        state = state.with_repairs(state.repairs + (repair,))

    logger.info(
        "Built inventory state from seed",
        devices=len(state.devices),
        repairs=len(state.repairs),
        device_categories=len(state.device_categories),
        repair_categories=len(state.repair_categories),
        locations=len(state.locations),
    )
    return state

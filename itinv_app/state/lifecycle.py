"""
Device lifecycle rules driven by repair events.

A device enters In Repair when an active repair (Pending or In Progress) is
created or updated against it, and returns to In Storage when a repair is
closed and no other active repair for the same device remains. Devices are
touched only in response to repair events; explicit device edits (for
example Retired) are never overridden here.

Every function is pure: it takes an ``InventoryState`` and returns a new one.
Referential integrity (the repair's device existing) is the caller's job; a
transition aimed at an unknown device id changes nothing.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from ..logging.config import get_state_logger, log_status_change
from .models import DeviceStatus, InventoryState, Repair

logger = structlog.get_logger(__name__)
state_logger = get_state_logger(__name__)

TRIGGER_REPAIR_CREATED = "repair_created"
TRIGGER_REPAIR_UPDATED = "repair_updated"


@dataclass(frozen=True)
class StatusTransition:
    """A device status change derived from a repair event."""

    device_id: str
    repair_id: str
    new_status: DeviceStatus
    trigger: str


def has_other_active_repair(
    repairs: Iterable[Repair],
    device_id: str,
    exclude_repair_id: str
) -> bool:
    """
    Check whether any repair other than ``exclude_repair_id`` keeps the device busy.

    Exclusion is by id: two repairs with identical fields are still distinct.
    """
    return any(
        r.device_id == device_id
        and r.id != exclude_repair_id
        and r.status.is_active
        for r in repairs
    )


def evaluate_repair_created(repair: Repair) -> Optional[StatusTransition]:
    """Derive the device transition for a newly created repair."""
    if repair.status.is_active:
        return StatusTransition(
            device_id=repair.device_id,
            repair_id=repair.id,
            new_status=DeviceStatus.IN_REPAIR,
            trigger=TRIGGER_REPAIR_CREATED,
        )
    return None


def evaluate_repair_updated(
    repairs: Iterable[Repair],
    updated: Repair
) -> Optional[StatusTransition]:
    """
    Derive the device transition for an edited repair.

    Args:
        repairs: All repairs after the update has been applied
        updated: The repair as it is now stored

    Returns:
        The transition to apply, or None when the device keeps its status
    """
    if updated.status.is_closed:
        if has_other_active_repair(repairs, updated.device_id, updated.id):
            return None
        return StatusTransition(
            device_id=updated.device_id,
            repair_id=updated.id,
            new_status=DeviceStatus.IN_STORAGE,
            trigger=TRIGGER_REPAIR_UPDATED,
        )

    # Active again: re-affirm, or pull back in from a reopened repair
    return StatusTransition(
        device_id=updated.device_id,
        repair_id=updated.id,
        new_status=DeviceStatus.IN_REPAIR,
        trigger=TRIGGER_REPAIR_UPDATED,
    )


def apply_status_transition(
    state: InventoryState,
    transition: Optional[StatusTransition]
) -> InventoryState:
    """Apply a derived transition to the owning device."""
    if transition is None:
        return state

    device = state.get_device(transition.device_id)
    if device is None:
        logger.debug(
            "Transition targets unknown device, ignoring",
            device_id=transition.device_id,
            repair_id=transition.repair_id
        )
        return state

    if device.status == transition.new_status:
        return state

    log_status_change(
        state_logger,
        device_id=device.id,
        from_status=device.status.value,
        to_status=transition.new_status.value,
        trigger=transition.trigger,
        context={"repair_id": transition.repair_id},
    )

    return state.with_device(device.with_status(transition.new_status))


def on_repair_created(state: InventoryState, repair: Repair) -> InventoryState:
    """Store a new repair and pull its device into In Repair when active."""
    new_state = state.with_repairs(state.repairs + (repair,))
    return apply_status_transition(new_state, evaluate_repair_created(repair))


def on_repair_updated(state: InventoryState, repair: Repair) -> InventoryState:
    """Replace the stored repair with the same id and re-derive device status."""
    new_state = state.with_repair(repair)
    transition = evaluate_repair_updated(new_state.repairs, repair)
    return apply_status_transition(new_state, transition)

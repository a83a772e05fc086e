"""
Category registry for device categories, repair categories and locations.

Each kind is a sorted set of unique names (compared case-insensitively).
Device and repair categories carry a budget map (CapEx and OpEx). Renames
cascade into every record that references the old name and move the budget
value with it; deletes are refused while any record still references the
name.

All checks run before anything is rebuilt, so a rejected command leaves the
state untouched.
"""

from dataclasses import dataclass, replace
from typing import Optional

import structlog

from ..config.defaults import BudgetDefaults
from ..errors import (
    BlankNameError,
    CategoryInUseError,
    DuplicateNameError,
    UnknownCategoryError,
)
from ..logging.config import get_registry_logger, log_registry_change
from .models import CategoryKind, InventoryState

logger = structlog.get_logger(__name__)
registry_logger = get_registry_logger(__name__)


@dataclass(frozen=True)
class RegistryBinding:
    """Where a category kind lives inside InventoryState."""

    names_attr: str
    entities_attr: str
    entity_field: str
    budget_attr: Optional[str] = None
    label: str = "category"


BINDINGS: dict[CategoryKind, RegistryBinding] = {
    CategoryKind.DEVICE: RegistryBinding(
        names_attr="device_categories",
        entities_attr="devices",
        entity_field="category",
        budget_attr="capex_budget",
        label="device category",
    ),
    CategoryKind.REPAIR: RegistryBinding(
        names_attr="repair_categories",
        entities_attr="repairs",
        entity_field="category",
        budget_attr="opex_budget",
        label="repair category",
    ),
    CategoryKind.LOCATION: RegistryBinding(
        names_attr="locations",
        entities_attr="devices",
        entity_field="location",
        label="location",
    ),
}


@dataclass(frozen=True)
class RegistryChange:
    """Result of a registry command."""

    state: InventoryState
    kind: CategoryKind
    action: str
    name: str
    changed: bool = True
    cascaded_ids: tuple[str, ...] = ()


def collation_key(name: str) -> tuple[str, str]:
    """Sort key: case-folded text first, then lowercase before uppercase on ties."""
    return (name.casefold(), name.swapcase())


def sort_names(names) -> tuple[str, ...]:
    return tuple(sorted(names, key=collation_key))


def names_for(state: InventoryState, kind: CategoryKind) -> tuple[str, ...]:
    return getattr(state, BINDINGS[kind].names_attr)


def budget_for(state: InventoryState, kind: CategoryKind) -> Optional[dict[str, float]]:
    binding = BINDINGS[kind]
    if binding.budget_attr is None:
        return None
    return getattr(state, binding.budget_attr)


def default_budget(kind: CategoryKind, defaults: BudgetDefaults) -> Optional[float]:
    if kind == CategoryKind.DEVICE:
        return defaults.device_category
    if kind == CategoryKind.REPAIR:
        return defaults.repair_category
    return None


def find_name(state: InventoryState, kind: CategoryKind, name: str) -> Optional[str]:
    """Return the registered spelling matching ``name`` case-insensitively."""
    folded = name.strip().casefold()
    for existing in names_for(state, kind):
        if existing.casefold() == folded:
            return existing
    return None


def is_registered(state: InventoryState, kind: CategoryKind, name: str) -> bool:
    """Exact-match membership, as required for record references."""
    return name in names_for(state, kind)


def referencing_ids(state: InventoryState, kind: CategoryKind, name: str) -> list[str]:
    """Ids of every record whose referencing field equals ``name``."""
    binding = BINDINGS[kind]
    entities = getattr(state, binding.entities_attr)
    return [e.id for e in entities if getattr(e, binding.entity_field) == name]


def _require_name(kind: CategoryKind, name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise BlankNameError(
            f"{BINDINGS[kind].label.capitalize()} name cannot be empty",
            kind=kind.value,
        )
    return cleaned


def add_category(
    state: InventoryState,
    kind: CategoryKind,
    name: str,
    defaults: Optional[BudgetDefaults] = None
) -> RegistryChange:
    """
    Register a new name and seed its budget.

    Raises:
        BlankNameError: If the name is empty
        DuplicateNameError: If the name already exists (case-insensitive)
    """
    binding = BINDINGS[kind]
    defaults = defaults or BudgetDefaults()
    cleaned = _require_name(kind, name)

    existing = find_name(state, kind, cleaned)
    if existing is not None:
        raise DuplicateNameError(
            f"{binding.label.capitalize()} '{cleaned}' already exists",
            kind=kind.value,
            name=cleaned,
            existing=existing,
        )

    updates = {binding.names_attr: sort_names(names_for(state, kind) + (cleaned,))}

    budget = budget_for(state, kind)
    if budget is not None:
        new_budget = dict(budget)
        new_budget[cleaned] = default_budget(kind, defaults)
        updates[binding.budget_attr] = new_budget

    new_state = replace(state, **updates)
    log_registry_change(registry_logger, kind.value, "add", cleaned)

    return RegistryChange(state=new_state, kind=kind, action="add", name=cleaned)


def rename_category(
    state: InventoryState,
    kind: CategoryKind,
    old_name: str,
    new_name: str
) -> RegistryChange:
    """
    Rename an entry and cascade the new name into records and budgets.

    Renaming to the same name (case-insensitive) is a successful no-op.

    Raises:
        BlankNameError: If the new name is empty
        UnknownCategoryError: If ``old_name`` is not registered
        DuplicateNameError: If the new name collides with a different entry
    """
    binding = BINDINGS[kind]
    cleaned = _require_name(kind, new_name)

    if not is_registered(state, kind, old_name):
        raise UnknownCategoryError(
            f"{binding.label.capitalize()} '{old_name}' does not exist",
            kind=kind.value,
            name=old_name,
        )

    if cleaned.casefold() == old_name.casefold():
        logger.debug("Rename to same name, nothing to do", kind=kind.value, name=old_name)
        return RegistryChange(state=state, kind=kind, action="rename", name=old_name, changed=False)

    existing = find_name(state, kind, cleaned)
    if existing is not None:
        raise DuplicateNameError(
            f"{binding.label.capitalize()} '{cleaned}' already exists",
            kind=kind.value,
            name=cleaned,
            existing=existing,
        )

    names = sort_names(cleaned if n == old_name else n for n in names_for(state, kind))
    updates = {binding.names_attr: names}

    entities = getattr(state, binding.entities_attr)
    cascaded = tuple(e.id for e in entities if getattr(e, binding.entity_field) == old_name)
    updates[binding.entities_attr] = tuple(
        replace(e, **{binding.entity_field: cleaned})
        if getattr(e, binding.entity_field) == old_name else e
        for e in entities
    )

    budget = budget_for(state, kind)
    if budget is not None and old_name in budget:
        new_budget = dict(budget)
        new_budget[cleaned] = new_budget.pop(old_name)
        updates[binding.budget_attr] = new_budget

    new_state = replace(state, **updates)
    log_registry_change(
        registry_logger, kind.value, "rename", old_name,
        cascaded=len(cascaded), context={"new_name": cleaned},
    )

    return RegistryChange(
        state=new_state,
        kind=kind,
        action="rename",
        name=cleaned,
        cascaded_ids=cascaded,
    )


def delete_category(
    state: InventoryState,
    kind: CategoryKind,
    name: str
) -> RegistryChange:
    """
    Remove an entry and its budget.

    Raises:
        UnknownCategoryError: If ``name`` is not registered
        CategoryInUseError: If any record still references ``name``
    """
    binding = BINDINGS[kind]

    if not is_registered(state, kind, name):
        raise UnknownCategoryError(
            f"{binding.label.capitalize()} '{name}' does not exist",
            kind=kind.value,
            name=name,
        )

    in_use = referencing_ids(state, kind, name)
    if in_use:
        raise CategoryInUseError(
            f"Cannot delete {binding.label} '{name}' because it is still in use",
            kind=kind.value,
            name=name,
            reference_count=len(in_use),
            context={"referenced_by": in_use},
        )

    updates = {binding.names_attr: tuple(n for n in names_for(state, kind) if n != name)}

    budget = budget_for(state, kind)
    if budget is not None:
        updates[binding.budget_attr] = {k: v for k, v in budget.items() if k != name}

    new_state = replace(state, **updates)
    log_registry_change(registry_logger, kind.value, "delete", name)

    return RegistryChange(state=new_state, kind=kind, action="delete", name=name)

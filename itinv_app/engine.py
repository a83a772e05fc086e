"""
Main inventory engine coordinator.

Owns the single InventoryState snapshot and is the only place it is replaced.
Each command normalizes its input, validates references, runs the pure
lifecycle or registry operation, and swaps in the resulting snapshot. Rejected
commands are logged and re-raised to the caller with the state untouched.
"""

import math
import uuid
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any, Callable, Optional, Union

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .data.normalizer import NormalizationResult, RecordNormalizer, parse_enum
from .data.seed import build_state
from .data.validators import record_validator
from .logging import configure_logging
from .errors import (
    IntegrityError,
    InventoryValidationError,
    MalformedRecordError,
    UnknownCategoryError,
    UnknownEntityError,
)
from .reporting.dashboard import DashboardSummary, build_dashboard
from .reporting.financials import FinancialSummary, build_financials
from .state import lifecycle, registry
from .state.models import (
    CategoryKind,
    Device,
    DeviceDraft,
    DeviceStatus,
    InventoryState,
    Repair,
    RepairDraft,
)
from .state.registry import RegistryChange

logger = structlog.get_logger(__name__)

CommandError = (InventoryValidationError, IntegrityError)


class InventoryEngine:
    """
    Coordinator for devices, repairs, categories and budgets.

    Commands run one at a time to completion; the stored snapshot is only
    replaced once a command has fully succeeded.
    """

    def __init__(
        self,
        state: Optional[InventoryState] = None,
        config: Optional[DefaultConfig] = None,
        id_factory: Optional[Callable[[str], str]] = None
    ) -> None:
        """
        Initialize the inventory engine.

        Args:
            state: Starting snapshot (empty inventory if omitted)
            config: Engine configuration (defaults if omitted)
            id_factory: Callable mapping an id prefix to a fresh id
        """
        self.logger = logger
        self.config = config or get_default_config()
        self.normalizer = RecordNormalizer()
        self._state = state or InventoryState()
        self._id_factory = id_factory or (lambda prefix: f"{prefix}{uuid.uuid4().hex[:12]}")

        self.logger.info(
            "Inventory engine initialized",
            devices=len(self._state.devices),
            repairs=len(self._state.repairs)
        )

    @classmethod
    def from_config(
        cls,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        setup_logging: bool = True
    ) -> "InventoryEngine":
        """
        Build an engine from settings.yaml and seed.yaml in ``config_dir``.

        Args:
            config_dir: Directory holding the YAML files (bundled config if omitted)
            overrides: Call-site configuration overrides
            setup_logging: Apply the logging section via configure_logging

        Raises:
            ConfigurationError: If the merged settings fail validation
        """
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        config = loader.load_config(overrides)
        if setup_logging:
            configure_logging(level=config.logging.level, format_json=config.logging.format_json)
        state = build_state(loader.load_seed(), config.budgets)
        return cls(state=state, config=config)

    # ------------------------------------------------------------------
    # Snapshot access

    @property
    def state(self) -> InventoryState:
        return self._state

    def snapshot(self) -> dict[str, Any]:
        """Serializable copy of the current state."""
        return self._state.to_dict()

    def _commit(self, new_state: InventoryState) -> None:
        self._state = new_state

    def _new_id(self, prefix: str, exists: Callable[[str], Any]) -> str:
        new_id = self._id_factory(prefix)
        while exists(new_id) is not None:
            new_id = self._id_factory(prefix)
        return new_id

    def _unwrap(self, result: NormalizationResult):
        if not result.success:
            raise MalformedRecordError(result.error_msg, field=result.error_field)
        return result.record

    def _reject(self, command: str, error: Exception, **context: Any) -> None:
        self.logger.warning(
            "Command rejected",
            command=command,
            error=str(error),
            error_type=type(error).__name__,
            **context
        )

    @staticmethod
    def _kind(kind: Union[CategoryKind, str]) -> CategoryKind:
        try:
            return CategoryKind(kind)
        except ValueError as e:
            allowed = ", ".join(k.value for k in CategoryKind)
            raise InventoryValidationError(
                f"Unknown registry kind '{kind}', expected one of {allowed}",
                context={"kind": str(kind)},
            ) from e

    # ------------------------------------------------------------------
    # Devices

    def create_device(self, data: Union[DeviceDraft, dict[str, Any]]) -> Device:
        """Validate a new device, assign it a fresh id and store it."""
        try:
            draft = data if isinstance(data, DeviceDraft) else self._unwrap(
                self.normalizer.normalize_device_draft(data)
            )
            record_validator.validate_device(self._state, draft)

            device_id = self._new_id(self.config.identity.device_prefix, self._state.get_device)
            device = draft.with_id(device_id)
        except CommandError as e:
            self._reject("create_device", e)
            raise

        self._commit(self._state.with_devices(self._state.devices + (device,)))
        self.logger.info("Device created", device_id=device.id, category=device.category,
                         status=device.status.value)
        return device

    def update_device(self, data: Union[Device, dict[str, Any]]) -> Device:
        """
        Apply an explicit device edit.

        The status given here (for example Retired) is stored as-is; repair
        events are the only thing that changes it afterwards.
        """
        try:
            device = data if isinstance(data, Device) else self._unwrap(
                self.normalizer.normalize_device(data)
            )
            previous = self._state.get_device(device.id)
            if previous is None:
                raise UnknownEntityError(
                    f"Device '{device.id}' does not exist",
                    entity_type="device",
                    entity_id=device.id,
                )
            record_validator.validate_device(self._state, device, exclude_id=device.id)
        except CommandError as e:
            self._reject("update_device", e)
            raise

        self._commit(self._state.with_device(device))
        self.logger.info("Device updated", device_id=device.id,
                         from_status=previous.status.value, to_status=device.status.value)
        return device

    def get_device(self, device_id: str) -> Optional[Device]:
        return self._state.get_device(device_id)

    def search_devices(self, term: str) -> list[Device]:
        """Devices whose name or serial number contains ``term`` (case-insensitive)."""
        needle = (term or "").strip().casefold()
        if not needle:
            return list(self._state.devices)
        return [
            d for d in self._state.devices
            if needle in d.name.casefold() or needle in d.serial_number.casefold()
        ]

    def filter_devices(
        self,
        term: Optional[str] = None,
        status: Optional[Union[DeviceStatus, str]] = None,
        category: Optional[str] = None,
        location: Optional[str] = None
    ) -> list[Device]:
        """
        Inventory listing filter.

        ``term`` matches name, serial number, assignee or location
        case-insensitively. ``status``, ``category`` and ``location`` are exact
        matches; None (or "all") leaves that filter off.

        Raises:
            MalformedRecordError: If ``status`` is not a device status
        """
        wanted_status = None
        if status is not None and status != "all":
            try:
                wanted_status = parse_enum(DeviceStatus, status)
            except ValueError as e:
                raise MalformedRecordError(f"Invalid device status filter: {e}",
                                           field="status", raw_value=status) from e
        if category == "all":
            category = None
        if location == "all":
            location = None
        needle = (term or "").strip().casefold()

        matches = []
        for device in self._state.devices:
            if wanted_status is not None and device.status != wanted_status:
                continue
            if category is not None and device.category != category:
                continue
            if location is not None and device.location != location:
                continue
            if needle and not any(
                needle in text.casefold()
                for text in (device.name, device.serial_number, device.assigned_to, device.location)
            ):
                continue
            matches.append(device)
        return matches

    def available_devices_for_repair(self, repair_id: Optional[str] = None) -> list[Device]:
        """
        Devices a repair can be logged against.

        Retired devices and devices busy with another active repair are left
        out; the device already attached to ``repair_id`` always stays.
        """
        current = self._state.get_repair(repair_id) if repair_id else None
        available = []
        for device in self._state.devices:
            if current is not None and device.id == current.device_id:
                available.append(device)
                continue
            if device.status == DeviceStatus.RETIRED:
                continue
            if lifecycle.has_other_active_repair(self._state.repairs, device.id, repair_id or ""):
                continue
            available.append(device)
        return available

    # ------------------------------------------------------------------
    # Repairs

    def create_repair(self, data: Union[RepairDraft, dict[str, Any]]) -> Repair:
        """Store a new repair and move its device into In Repair when active."""
        try:
            draft = data if isinstance(data, RepairDraft) else self._unwrap(
                self.normalizer.normalize_repair_draft(data)
            )
            repair_id = self._new_id(self.config.identity.repair_prefix, self._state.get_repair)
            repair = draft.with_id(repair_id)
            device = record_validator.validate_repair(self._state, repair)
            repair = replace(repair, device_name=device.name)
        except CommandError as e:
            self._reject("create_repair", e)
            raise

        self._commit(lifecycle.on_repair_created(self._state, repair))
        self.logger.info("Repair created", repair_id=repair.id, device_id=repair.device_id,
                         status=repair.status.value)
        return repair

    def update_repair(self, data: Union[Repair, dict[str, Any]]) -> None:
        """Replace a stored repair and re-derive its device's status."""
        try:
            repair = data if isinstance(data, Repair) else self._unwrap(
                self.normalizer.normalize_repair(data)
            )
            previous = self._state.get_repair(repair.id)
            if previous is None:
                raise UnknownEntityError(
                    f"Repair '{repair.id}' does not exist",
                    entity_type="repair",
                    entity_id=repair.id,
                )
            device = record_validator.validate_repair(self._state, repair)
            repair = replace(repair, device_name=device.name)
        except CommandError as e:
            self._reject("update_repair", e)
            raise

        self._commit(lifecycle.on_repair_updated(self._state, repair))
        self.logger.info("Repair updated", repair_id=repair.id, device_id=repair.device_id,
                         from_status=previous.status.value, to_status=repair.status.value)

    def get_repair(self, repair_id: str) -> Optional[Repair]:
        return self._state.get_repair(repair_id)

    def repairs_for_device(self, device_id: str) -> list[Repair]:
        return self._state.repairs_for_device(device_id)

    def active_repairs(self) -> list[Repair]:
        return [r for r in self._state.repairs if r.status.is_active]

    # ------------------------------------------------------------------
    # Category registry

    def list_categories(self, kind: Union[CategoryKind, str]) -> tuple[str, ...]:
        return registry.names_for(self._state, self._kind(kind))

    def _run_registry(self, command: str, operation, kind: Union[CategoryKind, str],
                      *args) -> RegistryChange:
        try:
            change = operation(self._state, self._kind(kind), *args)
        except CommandError as e:
            self._reject(command, e)
            raise
        self._commit(change.state)
        return change

    def add_category(self, kind: Union[CategoryKind, str], name: str) -> RegistryChange:
        """Register a category or location; budgeted kinds get the default budget."""
        return self._run_registry(
            "add_category",
            lambda state, k, n: registry.add_category(state, k, n, self.config.budgets),
            kind, name,
        )

    def rename_category(self, kind: Union[CategoryKind, str], old_name: str,
                        new_name: str) -> RegistryChange:
        """Rename a category or location and cascade it into records and budgets."""
        return self._run_registry(
            "rename_category", registry.rename_category, kind, old_name, new_name
        )

    def delete_category(self, kind: Union[CategoryKind, str], name: str) -> RegistryChange:
        """Delete an unreferenced category or location."""
        return self._run_registry(
            "delete_category", registry.delete_category, kind, name
        )

    # ------------------------------------------------------------------
    # Budgets

    def get_budget(self, kind: Union[CategoryKind, str]) -> dict[str, float]:
        budget = registry.budget_for(self._state, self._kind(kind))
        return dict(budget) if budget is not None else {}

    def _validated_budget(self, kind: CategoryKind, values: dict[str, Any]) -> dict[str, float]:
        budget = registry.budget_for(self._state, kind)
        if budget is None:
            raise InventoryValidationError(
                f"Registry kind '{kind.value}' has no budget",
                context={"kind": kind.value},
            )

        updated = dict(budget)
        for name, raw in values.items():
            if not registry.is_registered(self._state, kind, name):
                raise UnknownCategoryError(
                    f"Unknown {kind.value} category '{name}'",
                    kind=kind.value,
                    name=name,
                )
            if (isinstance(raw, bool) or not isinstance(raw, (int, float))
                    or not math.isfinite(raw) or raw < 0):
                raise MalformedRecordError(
                    f"Budget for '{name}' must be a finite non-negative number",
                    field=name,
                    raw_value=raw,
                )
            updated[name] = float(raw)
        return updated

    def set_budget(self, kind: Union[CategoryKind, str], name: str, amount: float) -> None:
        """Set the budget of a single device or repair category."""
        try:
            kind = self._kind(kind)
            if kind not in (CategoryKind.DEVICE, CategoryKind.REPAIR):
                raise InventoryValidationError(
                    f"Registry kind '{kind.value}' has no budget",
                    context={"kind": kind.value},
                )
        except CommandError as e:
            self._reject("set_budget", e)
            raise

        if kind == CategoryKind.DEVICE:
            self.update_budgets(capex={name: amount})
        else:
            self.update_budgets(opex={name: amount})

    def update_budgets(
        self,
        capex: Optional[dict[str, Any]] = None,
        opex: Optional[dict[str, Any]] = None
    ) -> None:
        """Update CapEx and/or OpEx budget values; both maps are checked before either is stored."""
        try:
            new_capex = self._validated_budget(CategoryKind.DEVICE, capex or {})
            new_opex = self._validated_budget(CategoryKind.REPAIR, opex or {})
        except CommandError as e:
            self._reject("update_budgets", e)
            raise

        self._commit(replace(self._state, capex_budget=new_capex, opex_budget=new_opex))
        self.logger.info("Budgets updated", capex=len(capex or {}), opex=len(opex or {}))

    # ------------------------------------------------------------------
    # Reports

    def dashboard(self, as_of: Optional[date] = None) -> DashboardSummary:
        return build_dashboard(self._state, as_of, self.config.reporting)

    def financials(self) -> FinancialSummary:
        return build_financials(self._state, self.config.reporting)

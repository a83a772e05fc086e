"""Tests for logging integration in lifecycle and registry components."""

from unittest.mock import Mock, patch

import pytest
import structlog

from itinv_app.engine import InventoryEngine
from itinv_app.errors import CategoryInUseError, InventoryValidationError
from itinv_app.logging.config import (
    configure_logging,
    get_registry_logger,
    get_state_logger,
    log_registry_change,
    log_status_change,
)
from itinv_app.state.models import CategoryKind, DeviceStatus, RepairStatus


class TestLoggingConfiguration:
    """Test structlog configuration."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_renderer_selected(self):
        configure_logging(level="DEBUG", format_json=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_by_default(self):
        configure_logging(level="INFO")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_extra_processors_run_before_renderer(self):
        marker = Mock(side_effect=lambda logger, name, event: event)

        configure_logging(extra_processors=[marker], format_json=True)

        processors = structlog.get_config()["processors"]
        assert processors[-2] is marker

    def test_invalid_level_rejected(self):
        with pytest.raises(AttributeError):
            configure_logging(level="LOUD")


class TestLogHelpers:
    """Test the audit log helpers."""

    def test_log_status_change_binds_transition(self):
        mock_logger = Mock()

        log_status_change(mock_logger, "d001", "In Use", "In Repair", "repair_created")

        mock_logger.bind.assert_called_once_with(
            device_id="d001",
            from_status="In Use",
            to_status="In Repair",
            trigger="repair_created",
        )
        mock_logger.bind.return_value.info.assert_called_once_with("Device status change")

    def test_log_status_change_with_context(self):
        mock_logger = Mock()

        log_status_change(mock_logger, "d001", "In Repair", "In Storage", "repair_updated",
                          context={"repair_id": "r1"})

        bound = mock_logger.bind.return_value
        bound.bind.assert_called_once_with(context={"repair_id": "r1"})
        bound.bind.return_value.info.assert_called_once_with("Device status change")

    def test_log_registry_change(self):
        mock_logger = Mock()

        log_registry_change(mock_logger, "location", "delete", "Remote")

        mock_logger.bind.assert_called_once_with(
            kind="location", action="delete", name="Remote", cascaded=0,
        )
        mock_logger.bind.return_value.info.assert_called_once_with("Registry change")

    def test_subsystem_loggers_are_bound(self):
        with patch("itinv_app.logging.config.get_logger") as mock_get_logger:
            get_state_logger("lifecycle")
            get_registry_logger("registry")

        bind_calls = mock_get_logger.return_value.bind.call_args_list
        assert bind_calls[0].kwargs == {"subsystem": "lifecycle", "audit_trail": True}
        assert bind_calls[1].kwargs == {"subsystem": "registry", "audit_trail": True}


class TestEngineLogging:
    """Engine commands log outcomes and rejections."""

    def test_repair_cycle_logs_both_transitions(self, engine, sample_repair_payload):
        mock_logger = Mock()
        with patch("itinv_app.state.lifecycle.state_logger", mock_logger):
            repair = engine.create_repair(sample_repair_payload)
            engine.update_repair(repair.with_status(RepairStatus.COMPLETED))

        transitions = [c.kwargs["to_status"] for c in mock_logger.bind.call_args_list]
        assert transitions == [DeviceStatus.IN_REPAIR.value, DeviceStatus.IN_STORAGE.value]

    def test_rejected_delete_logged_as_warning(self, engine):
        mock_logger = Mock()
        engine.logger = mock_logger

        with pytest.raises(CategoryInUseError):
            engine.delete_category(CategoryKind.DEVICE, "LAPTOP")

        mock_logger.warning.assert_called_once()
        args, kwargs = mock_logger.warning.call_args
        assert args == ("Command rejected",)
        assert kwargs["command"] == "delete_category"
        assert kwargs["error_type"] == "CategoryInUseError"

    @pytest.mark.parametrize("command, args", [
        ("add_category", ("vendor", "Acme")),
        ("rename_category", ("vendor", "Acme", "Acme Corp")),
        ("delete_category", ("vendor", "Acme")),
        ("set_budget", ("vendor", "Acme", 10)),
    ])
    def test_unknown_kind_logged_as_rejection(self, engine, command, args):
        mock_logger = Mock()
        engine.logger = mock_logger

        with pytest.raises(InventoryValidationError, match="Unknown registry kind 'vendor'"):
            getattr(engine, command)(*args)

        mock_logger.warning.assert_called_once()
        call_args, call_kwargs = mock_logger.warning.call_args
        assert call_args == ("Command rejected",)
        assert call_kwargs["command"] == command
        assert call_kwargs["error_type"] == "InventoryValidationError"


class TestEngineLoggingSetup:
    """from_config applies the logging section of the settings."""

    def test_logging_section_applied(self):
        with patch("itinv_app.engine.configure_logging") as mock_configure:
            InventoryEngine.from_config(overrides={"logging": {"level": "DEBUG", "format_json": True}})

        mock_configure.assert_called_once_with(level="DEBUG", format_json=True)

    def test_logging_setup_can_be_skipped(self):
        with patch("itinv_app.engine.configure_logging") as mock_configure:
            InventoryEngine.from_config(setup_logging=False)

        mock_configure.assert_not_called()

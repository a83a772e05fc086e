"""
Centralized logging configuration for the IT inventory engine.

This module provides standardized logging configuration using structlog
for all components. Device status changes and registry mutations are
logged through the helpers below so audit events share one shape.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )
    logging.getLogger().setLevel(log_level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for device lifecycle decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying the lifecycle subsystem context
    """
    return get_logger(name).bind(
        subsystem="lifecycle",
        audit_trail=True
    )


def get_registry_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for category registry mutations.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying the registry subsystem context
    """
    return get_logger(name).bind(
        subsystem="registry",
        audit_trail=True
    )


def log_status_change(
    logger: FilteringBoundLogger,
    device_id: str,
    from_status: Optional[str],
    to_status: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a device status change with standardized format.

    Args:
        logger: Structlog logger instance
        device_id: ID of the device whose status changed
        from_status: Status before the change (None if the device is unknown)
        to_status: Status after the change
        trigger: What caused the change (e.g. "repair_created")
        context: Additional context data
    """
    bound_logger = logger.bind(
        device_id=device_id,
        from_status=from_status,
        to_status=to_status,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Device status change")


def log_registry_change(
    logger: FilteringBoundLogger,
    kind: str,
    action: str,
    name: str,
    cascaded: int = 0,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a category registry mutation with standardized format.

    Args:
        logger: Structlog logger instance
        kind: Registry kind (device, repair, location)
        action: add, rename or delete
        name: Name the action applied to
        cascaded: Number of records rewritten by the cascade
        context: Additional context data
    """
    bound_logger = logger.bind(
        kind=kind,
        action=action,
        name=name,
        cascaded=cascaded,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Registry change")

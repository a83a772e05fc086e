"""
Validation error classifications for inventory commands.

These exceptions are raised before any state mutation when a command carries
bad input: blank or duplicate names, unknown references, malformed records.
"""

from typing import Optional, Dict, Any, List


class InventoryValidationError(Exception):
    """Base class for rejected commands that the caller can correct."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class BlankNameError(InventoryValidationError):
    """A category or location name was empty or whitespace only."""

    def __init__(self, message: str, kind: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.kind = kind


class DuplicateNameError(InventoryValidationError):
    """A name collides case-insensitively with an existing entry."""

    def __init__(self, message: str, kind: Optional[str] = None,
                 name: Optional[str] = None, existing: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.kind = kind
        self.name = name
        self.existing = existing


class UnknownCategoryError(InventoryValidationError):
    """A record or command references a category that is not registered."""

    def __init__(self, message: str, kind: Optional[str] = None,
                 name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.kind = kind
        self.name = name


class DuplicateSerialError(InventoryValidationError):
    """Serial numbers must be unique across devices."""

    def __init__(self, message: str, serial_number: Optional[str] = None,
                 device_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.serial_number = serial_number
        self.device_id = device_id


class MalformedRecordError(InventoryValidationError):
    """Record fields exist but hold values of the wrong shape."""

    def __init__(self, message: str, field: Optional[str] = None,
                 raw_value: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.raw_value = raw_value


class ConfigurationError(InventoryValidationError):
    """Merged settings failed validation; ``issues`` lists every problem found."""

    def __init__(self, message: str, issues: Optional[List[Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.issues = list(issues or [])

"""
Structured exception hierarchy for the inventory engine.

Validation errors describe bad input the caller can fix; integrity errors
describe commands that would break references between records.
"""

from .validation import (
    InventoryValidationError,
    BlankNameError,
    DuplicateNameError,
    UnknownCategoryError,
    DuplicateSerialError,
    MalformedRecordError,
    ConfigurationError,
)
from .integrity import (
    IntegrityError,
    CategoryInUseError,
    UnknownEntityError,
)

__all__ = [
    # Validation Errors
    "InventoryValidationError",
    "BlankNameError",
    "DuplicateNameError",
    "UnknownCategoryError",
    "DuplicateSerialError",
    "MalformedRecordError",
    "ConfigurationError",
    # Integrity Errors
    "IntegrityError",
    "CategoryInUseError",
    "UnknownEntityError",
]

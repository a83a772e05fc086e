"""
Referential integrity error classifications.

Raised when a command would leave a record pointing at nothing, or when the
facade is asked about an entity id it does not hold.
"""

from typing import Optional, Dict, Any


class IntegrityError(Exception):
    """Base class for commands rejected to protect referential integrity."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class CategoryInUseError(IntegrityError):
    """A category or location cannot be deleted while records reference it."""

    def __init__(self, message: str, kind: Optional[str] = None,
                 name: Optional[str] = None, reference_count: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.kind = kind
        self.name = name
        self.reference_count = reference_count


class UnknownEntityError(IntegrityError):
    """A device or repair id does not exist in the current state."""

    def __init__(self, message: str, entity_type: Optional[str] = None,
                 entity_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.entity_type = entity_type
        self.entity_id = entity_id

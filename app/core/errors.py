# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain errors raised by services and repositories.

They carry no HTTP knowledge; main.py maps each kind to a status code.
"""

from typing import Optional


class ResourceError(Exception):
    """Base class for every error the core raises on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(ResourceError):
    """A write payload breaks a business rule (e.g. type/status pairing)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ResourceError):
    """The referenced entity id does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConstraintError(ResourceError):
    """Unique or foreign-key constraint violated in the store."""

"""Domain errors raised by the store, auth and storage layers."""

from typing import Optional


class DentalDeskError(Exception):
    """Base class for all application errors."""


class EntityNotFoundError(DentalDeskError):
    """An update or delete referenced an id that does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class DanglingReferenceError(DentalDeskError):
    """A record points at a parent entity that does not exist."""

    def __init__(self, entity: str, field: str, value: Optional[str]):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity}.{field} references unknown id: {value}")


class DuplicateEntityError(DentalDeskError):
    """A create would reuse an id or a unique field value."""


class StorageWriteError(DentalDeskError):
    """The persistence substrate rejected a write (quota, I/O, database)."""


class AuthenticationError(DentalDeskError):
    """Credentials did not match any user."""


class RegistrationError(DentalDeskError):
    """A registration request could not be honoured."""

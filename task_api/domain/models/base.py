"""
Base entity, value object and exception classes for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime, timezone
from typing import Optional, Any
from abc import ABC, abstractmethod
from dataclasses import dataclass


def utcnow() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC. Naive input is assumed to be UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides identity semantics shared by every entity.
    """

    id: Optional[int] = None

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class InvalidArgumentError(DomainException):
    """Exception raised when a caller supplies an unusable argument."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_ARGUMENT")


class ValidationError(InvalidArgumentError):
    """Exception raised when entity or value object validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.code = "VALIDATION_ERROR"
        self.field = field


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any, message: Optional[str] = None):
        message = message or f"{entity_type} with ID {entity_id} not found."
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ForbiddenError(DomainException):
    """Exception raised when the caller is not allowed to perform an action."""

    def __init__(self, message: str = "You do not have permission to perform this action."):
        super().__init__(message, "FORBIDDEN")


class AuthenticationError(DomainException):
    """Exception raised when the caller cannot be authenticated."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "UNAUTHORIZED")


class ServiceUnavailableError(DomainException):
    """Exception raised when a remote dependency is temporarily down."""

    def __init__(self, service: str):
        super().__init__(
            f"The {service} service is temporarily unavailable. Please try again later.",
            "SERVICE_UNAVAILABLE"
        )
        self.service = service


class RemoteServiceError(DomainException):
    """Exception raised for remote 5xx responses and transport failures."""

    def __init__(self, message: str, service: Optional[str] = None):
        super().__init__(message, "INTERNAL_ERROR")
        self.service = service


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass

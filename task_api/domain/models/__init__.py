"""
Domain models for the task service.
This module exports the task entity, value objects, roles and paging types.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    InvalidArgumentError,
    ValidationError,
    EntityNotFoundError,
    ForbiddenError,
    AuthenticationError,
    ServiceUnavailableError,
    RemoteServiceError,
    ValueObject
)

# Value Objects
from .value_objects import (
    TaskId,
    ProjectId,
    UserId,
    OwnerUserId,
    TaskTitle,
    Description,
    DueDate
)

# Domain entities
from .task import Task, TaskStatus
from .user import User
from .project import Project
from .role import Role, is_admin
from .page import Page, PageRequest

__all__ = [
    # Base
    "BaseEntity",
    "DomainException",
    "InvalidArgumentError",
    "ValidationError",
    "EntityNotFoundError",
    "ForbiddenError",
    "AuthenticationError",
    "ServiceUnavailableError",
    "RemoteServiceError",
    "ValueObject",

    # Value Objects
    "TaskId",
    "ProjectId",
    "UserId",
    "OwnerUserId",
    "TaskTitle",
    "Description",
    "DueDate",

    # Entities
    "Task",
    "TaskStatus",
    "User",
    "Project",
    "Role",
    "is_admin",
    "Page",
    "PageRequest",
]

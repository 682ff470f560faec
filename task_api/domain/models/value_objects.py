"""
Value Objects for the domain layer.
Immutable, self-validating wrappers for task identifiers and task fields.
"""

from typing import Optional
from datetime import datetime
from dataclasses import dataclass

from task_api.domain.models.base import ValueObject, ValidationError, utcnow, to_naive_utc


TITLE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 250


def _require_positive_id(value, label: str, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"Invalid {label}: {value!r}", field)


@dataclass(frozen=True)
class TaskId(ValueObject):
    """Identifier of a persisted task."""

    value: int

    def validate(self) -> None:
        _require_positive_id(self.value, "task ID", "id")

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class ProjectId(ValueObject):
    """Identifier of a project owned by the project service."""

    value: int

    def validate(self) -> None:
        _require_positive_id(self.value, "project ID", "project_id")

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class UserId(ValueObject):
    """Identifier of a user owned by the user service."""

    value: int

    def validate(self) -> None:
        _require_positive_id(self.value, "user ID", "user_id")

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class OwnerUserId(UserId):
    """Identifier of the user who owns a task."""

    def validate(self) -> None:
        _require_positive_id(self.value, "owner user ID", "owner_user_id")


@dataclass(frozen=True)
class TaskTitle(ValueObject):
    """Task title: non-blank, at most 50 characters."""

    value: str

    def validate(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Task title cannot be blank", "title")

        if len(self.value) > TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Task title too long (max {TITLE_MAX_LENGTH} characters)", "title"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Description(ValueObject):
    """Optional task description of at most 250 characters."""

    value: Optional[str] = None

    def validate(self) -> None:
        if self.value is not None and len(self.value) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description too long (max {DESCRIPTION_MAX_LENGTH} characters)", "description"
            )

    def __str__(self) -> str:
        return self.value or ""


@dataclass(frozen=True)
class DueDate(ValueObject):
    """Due date that must lie strictly in the future when it is set."""

    value: datetime

    def __post_init__(self):
        if isinstance(self.value, datetime):
            object.__setattr__(self, 'value', to_naive_utc(self.value))
        super().__post_init__()

    def validate(self) -> None:
        if self.value is None:
            raise ValidationError("Due date cannot be null", "due_date")

        if not isinstance(self.value, datetime):
            raise ValidationError(f"Invalid due date: {self.value!r}", "due_date")

        if self.value <= utcnow():
            raise ValidationError("Due date must be in the future", "due_date")

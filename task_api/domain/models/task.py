"""
Task domain model.
Represents a task within a project, owned by one user and shared with a list
of responsible users.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Iterable
from enum import Enum

from task_api.domain.models.base import (
    BaseEntity,
    InvalidArgumentError,
    ValidationError,
)
from task_api.domain.models.value_objects import (
    TaskTitle,
    Description,
    DueDate,
    OwnerUserId,
    ProjectId,
    TaskId,
    UserId,
)


class TaskStatus(str, Enum):
    """
    Task status.
    Transitions are not restricted: any status may follow any other.
    """
    TODO = "TODO"
    INPROGRESS = "INPROGRESS"
    DONE = "DONE"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["TaskStatus"]:
        """
        Parse a status filter, case-insensitively.
        Empty or missing text means "no filter" and yields None.
        """
        if value is None or value == "":
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise InvalidArgumentError(f"Invalid status value: {value}")


@dataclass(eq=False)
class Task(BaseEntity):
    """
    Task entity.
    Field invariants are checked through value objects on creation and on
    every change to the task details.
    """

    # Required fields
    title: str = ""
    due_date: Optional[datetime] = None
    owner_user_id: int = 0
    project_id: int = 0

    # Task details
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    responsible_user_ids: List[int] = field(default_factory=list)

    def __post_init__(self):
        """Validate task after construction."""
        self.validate()

    @classmethod
    def create(
        cls,
        project_id: int,
        owner_user_id: int,
        title: str,
        due_date: datetime,
        responsible_user_ids: Iterable[int],
        description: Optional[str] = None,
    ) -> "Task":
        """
        Create a new task.
        Status always starts as TODO and the owner is always responsible.
        """
        task = cls(
            title=TaskTitle(title).value,
            description=Description(description).value,
            due_date=DueDate(due_date).value,
            owner_user_id=OwnerUserId(owner_user_id).value,
            project_id=ProjectId(project_id).value,
            status=TaskStatus.TODO,
            responsible_user_ids=[UserId(user_id).value for user_id in responsible_user_ids],
        )
        task.ensure_owner_is_responsible()
        return task

    def validate(self) -> None:
        """Validate task state."""
        if self.id is not None:
            TaskId(self.id)

        TaskTitle(self.title)
        Description(self.description)
        OwnerUserId(self.owner_user_id)
        ProjectId(self.project_id)

        if self.due_date is None:
            raise ValidationError("Due date cannot be null", "due_date")

        if not isinstance(self.status, TaskStatus):
            self.status = TaskStatus(self.status)

        for user_id in self.responsible_user_ids:
            UserId(user_id)

    def ensure_owner_is_responsible(self) -> None:
        """Append the owner to the responsible list when missing."""
        if self.owner_user_id not in self.responsible_user_ids:
            self.responsible_user_ids.append(self.owner_user_id)

    def update_details(
        self,
        title: str,
        description: Optional[str],
        due_date: datetime,
        responsible_user_ids: Iterable[int],
    ) -> None:
        """
        Overwrite the mutable task details.
        Status, owner and project are left untouched; the owner stays responsible.
        """
        self.title = TaskTitle(title).value
        self.description = Description(description).value
        self.due_date = DueDate(due_date).value
        self.responsible_user_ids = [UserId(user_id).value for user_id in responsible_user_ids]
        self.ensure_owner_is_responsible()

    def change_status(self, new_status: TaskStatus) -> None:
        """Set the status unconditionally."""
        self.status = TaskStatus(new_status)

    def belongs_to_project(self, project_id: int) -> bool:
        return self.project_id == project_id

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_user_id == user_id

    def is_responsible(self, user_id: int) -> bool:
        return user_id in self.responsible_user_ids

    @property
    def involved_user_ids(self) -> List[int]:
        """Owner followed by every responsible id, duplicates included."""
        return [self.owner_user_id, *self.responsible_user_ids]

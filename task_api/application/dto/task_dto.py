"""
Task DTOs for the application layer.
Data Transfer Objects for task-related operations.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import AliasChoices, Field, field_validator

from task_api.domain.models.task import TaskStatus
from task_api.domain.models.value_objects import TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH
from .base_dto import RequestDTO, ResponseDTO
from .user_dto import UserResponseDTO
from .project_dto import ProjectResponseDTO


# Request DTOs
class TaskRequestDTO(RequestDTO):
    """DTO for task creation and full update requests."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH, description="Task title")
    description: Optional[str] = Field(
        default=None, max_length=DESCRIPTION_MAX_LENGTH, description="Task description"
    )
    due_date: datetime = Field(
        validation_alias=AliasChoices("due_date", "dueDate"),
        description="Due date, must be in the future"
    )
    responsible_user_ids: List[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("responsible_user_ids", "usersResponsability"),
        description="IDs of the users responsible for the task"
    )

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Title cannot be blank')
        return v

    @field_validator('responsible_user_ids')
    @classmethod
    def validate_responsible_user_ids(cls, v: List[int]) -> List[int]:
        if any(user_id <= 0 for user_id in v):
            raise ValueError('Responsible user IDs must be positive')
        return v


class TaskRequestPatchDTO(RequestDTO):
    """DTO for status-only updates. An absent status leaves the task unchanged."""

    status: Optional[TaskStatus] = Field(default=None, description="New task status")

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


# Response DTOs
class TaskResponseDTO(ResponseDTO):
    """DTO for task responses, with owner and responsible users resolved."""

    id: int = Field(description="Task ID")
    title: str = Field(description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    due_date: datetime = Field(description="Due date")
    status: TaskStatus = Field(description="Task status")
    project_id: int = Field(description="Project ID")
    owner: UserResponseDTO = Field(description="Task owner")
    responsible_users: List[UserResponseDTO] = Field(
        default_factory=list, description="Users responsible for the task"
    )


class TaskResponseFilteredDTO(TaskResponseDTO):
    """DTO for filtered task search results, with the project resolved too."""

    project: ProjectResponseDTO = Field(description="Project the task belongs to")

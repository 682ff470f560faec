"""
Task management router.
Handles CRUD operations for task resources within projects.
"""

from datetime import datetime
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status

from task_api.config import settings
from task_api.application.dto.base_dto import PagedResponseDTO
from task_api.application.dto.task_dto import (
    TaskRequestDTO,
    TaskRequestPatchDTO,
    TaskResponseDTO,
    TaskResponseFilteredDTO
)
from task_api.application.services.task_service import TaskService
from task_api.domain.models.page import PageRequest
from task_api.infrastructure.auth.dependencies import get_current_user
from task_api.infrastructure.auth.jwt_handler import CurrentUser
from .dependencies import get_task_service


router = APIRouter()

ProjectId = Annotated[int, Path(gt=0, description="Project ID")]
TaskId = Annotated[int, Path(gt=0, description="Task ID")]
Caller = Annotated[CurrentUser, Depends(get_current_user)]
Service = Annotated[TaskService, Depends(get_task_service)]


@router.post(
    "/{project_id}/task",
    status_code=status.HTTP_201_CREATED,
    response_model=TaskResponseDTO
)
def create_task(
    project_id: ProjectId,
    request: TaskRequestDTO,
    caller: Caller,
    service: Service
):
    """
    Create a task in a project.

    - **title**: Task title (required, at most 50 characters)
    - **description**: Task description (at most 250 characters)
    - **due_date**: Due date, must be in the future
    - **responsible_user_ids**: Users responsible for the task; the caller is always added
    """
    return service.create_task(project_id, request, caller.user_id, caller.roles, caller.token)


@router.get("/task/search", response_model=PagedResponseDTO[TaskResponseFilteredDTO])
def search_tasks(
    caller: Caller,
    service: Service,
    status_filter: Optional[str] = Query(None, alias="status", description="TODO, INPROGRESS or DONE"),
    due_date: Optional[datetime] = Query(None, alias="dueDate", description="Only tasks due on or before this date"),
    project_id: Optional[int] = Query(None, alias="projectId", gt=0, description="Filter by project ID"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page")
):
    """
    Search tasks visible to the caller.
    Admins search every task; other users only tasks they own or are responsible for.
    """
    return service.list_tasks_filtered(
        status_filter,
        due_date,
        project_id,
        PageRequest(page=page, size=size),
        caller.user_id,
        caller.roles,
        caller.token
    )


@router.get("/{project_id}/task/{task_id}", response_model=TaskResponseDTO)
def get_task(
    project_id: ProjectId,
    task_id: TaskId,
    caller: Caller,
    service: Service
):
    """Get a task by ID."""
    return service.get_task_by_id(project_id, task_id, caller.user_id, caller.roles, caller.token)


@router.get(
    "/{project_id}/tasks/user/{user_id}",
    response_model=PagedResponseDTO[TaskResponseDTO]
)
def list_user_tasks(
    project_id: ProjectId,
    user_id: Annotated[int, Path(gt=0, description="User ID")],
    caller: Caller,
    service: Service,
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page")
):
    """List the tasks of a project a user is responsible for."""
    return service.list_tasks_for_user_in_project(
        PageRequest(page=page, size=size),
        project_id,
        user_id,
        caller.user_id,
        caller.roles,
        caller.token
    )


@router.put("/{project_id}/task/{task_id}", response_model=TaskResponseDTO)
def update_task(
    project_id: ProjectId,
    task_id: TaskId,
    request: TaskRequestDTO,
    caller: Caller,
    service: Service
):
    """Replace title, description, due date and responsible users of a task."""
    return service.update_task(
        project_id, task_id, request, caller.user_id, caller.roles, caller.token
    )


@router.patch("/{project_id}/task/{task_id}/updateStatus", response_model=TaskResponseDTO)
@router.patch("/{project_id}/task/{task_id}/status", response_model=TaskResponseDTO, include_in_schema=False)
def update_task_status(
    project_id: ProjectId,
    task_id: TaskId,
    patch: TaskRequestPatchDTO,
    caller: Caller,
    service: Service
):
    """Change the status of a task. Any status may follow any other."""
    return service.update_status(
        project_id, task_id, patch, caller.user_id, caller.roles, caller.token
    )


@router.delete("/{project_id}/task/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    project_id: ProjectId,
    task_id: TaskId,
    caller: Caller,
    service: Service
):
    """Permanently delete a task."""
    service.delete_task(project_id, task_id, caller.user_id, caller.roles)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

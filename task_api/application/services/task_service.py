"""
Task service for the application layer.
Authorizes every task operation against the remote project team and the local
owner/responsible lists, then re-hydrates responses with remote user and
project views.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional, Union

from task_api.application.dto.base_dto import PagedResponseDTO
from task_api.application.dto.project_dto import ProjectResponseDTO
from task_api.application.dto.task_dto import (
    TaskRequestDTO, TaskRequestPatchDTO, TaskResponseDTO, TaskResponseFilteredDTO
)
from task_api.application.dto.user_dto import UserResponseDTO
from task_api.domain.models.base import EntityNotFoundError, ForbiddenError, to_naive_utc
from task_api.domain.models.page import PageRequest
from task_api.domain.models.project import Project
from task_api.domain.models.role import Role, is_admin
from task_api.domain.models.task import Task, TaskStatus
from task_api.domain.repositories.task_repository import TaskRepository
from task_api.domain.repositories.user_repository import UserRepository
from task_api.domain.repositories.project_repository import ProjectRepository
from task_api.infrastructure.mappers.paged_response_mapper import PagedResponseMapper

logger = logging.getLogger(__name__)

Roles = Optional[Iterable[Union[Role, str]]]


class TaskService:
    """
    Core task operations.
    Every failure is raised before the first write; remote calls are sequential.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        project_repository: ProjectRepository
    ):
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.project_repository = project_repository

    # Commands

    def create_task(
        self,
        project_id: int,
        request: TaskRequestDTO,
        owner_id: int,
        roles: Roles,
        token: str
    ) -> TaskResponseDTO:
        """Create a task in a project the caller can view. Status always starts as TODO."""
        self._ensure_user_can_view_project(roles, project_id, owner_id, token)

        self.user_repository.get_user(owner_id, token)
        self.user_repository.get_users(request.responsible_user_ids, token)

        task = Task.create(
            project_id=project_id,
            owner_user_id=owner_id,
            title=request.title,
            description=request.description,
            due_date=request.due_date,
            responsible_user_ids=request.responsible_user_ids,
        )
        saved = self.task_repository.save(task)
        logger.info(f"Task {saved.id} created in project {project_id} by user {owner_id}")

        return self._to_response(saved, token)

    def update_task(
        self,
        project_id: int,
        task_id: int,
        request: TaskRequestDTO,
        caller_id: int,
        roles: Roles,
        token: str
    ) -> TaskResponseDTO:
        """Overwrite title, description, due date and responsible list."""
        task = self._get_task_in_project(project_id, task_id)
        self._ensure_user_can_access_task(task, caller_id, roles)

        self.user_repository.get_users(request.responsible_user_ids, token)

        task.update_details(
            title=request.title,
            description=request.description,
            due_date=request.due_date,
            responsible_user_ids=request.responsible_user_ids,
        )
        saved = self.task_repository.save(task)
        logger.info(f"Task {task_id} updated by user {caller_id}")

        return self._to_response(saved, token)

    def update_status(
        self,
        project_id: int,
        task_id: int,
        patch: TaskRequestPatchDTO,
        caller_id: int,
        roles: Roles,
        token: str
    ) -> TaskResponseDTO:
        """Set the task status. Any status may follow any other; an absent status is a no-op."""
        task = self._get_task_in_project(project_id, task_id)
        self._ensure_user_can_access_task(task, caller_id, roles)

        if patch.status is not None:
            task.change_status(TaskStatus(patch.status))
        saved = self.task_repository.save(task)
        logger.info(f"Task {task_id} status is {saved.status.value} (user {caller_id})")

        return self._to_response(saved, token)

    def delete_task(
        self,
        project_id: int,
        task_id: int,
        caller_id: int,
        roles: Roles
    ) -> None:
        """Permanently delete a task."""
        task = self._get_task_in_project(project_id, task_id)
        self._ensure_user_can_access_task(task, caller_id, roles)

        self.task_repository.delete(task)
        logger.info(f"Task {task_id} deleted by user {caller_id}")

    # Queries

    def get_task_by_id(
        self,
        project_id: int,
        task_id: int,
        caller_id: int,
        roles: Roles,
        token: str
    ) -> TaskResponseDTO:
        task = self._get_task_in_project(project_id, task_id)
        self._ensure_user_can_access_task(task, caller_id, roles)
        return self._to_response(task, token)

    def list_tasks_for_user_in_project(
        self,
        page_request: PageRequest,
        project_id: int,
        target_user_id: int,
        caller_id: int,
        roles: Roles,
        token: str
    ) -> PagedResponseDTO:
        """Page through the project tasks a user is responsible for."""
        self._ensure_user_can_view_project(roles, project_id, caller_id, token)

        if not is_admin(roles) and caller_id != target_user_id:
            raise ForbiddenError("You do not have permission to access this user's tasks.")

        self.user_repository.get_user(target_user_id, token)

        page = self.task_repository.find_by_project_and_responsible(
            project_id, target_user_id, page_request
        )
        return PagedResponseMapper.to_paged_response(
            page, lambda task: self._to_response(task, token)
        )

    def list_tasks_filtered(
        self,
        status_text: Optional[str],
        due_date: Optional[datetime],
        project_id: Optional[int],
        page_request: PageRequest,
        caller_id: int,
        roles: Roles,
        token: str
    ) -> PagedResponseDTO:
        """
        Search tasks by status, due date ceiling and project.
        Admins see every match; other callers only tasks they own or are responsible for.
        """
        status = TaskStatus.parse(status_text)
        due_date_ceiling = to_naive_utc(due_date) if due_date is not None else None

        if project_id is not None:
            self._ensure_user_can_view_project(roles, project_id, caller_id, token)

        if is_admin(roles):
            page = self.task_repository.find_filtered(
                status, due_date_ceiling, project_id, page_request
            )
        else:
            page = self.task_repository.find_filtered_for_user(
                caller_id, status, due_date_ceiling, project_id, page_request
            )

        return PagedResponseMapper.to_paged_response(
            page, lambda task: self._to_filtered_response(task, token)
        )

    # Authorization

    def _ensure_user_can_view_project(
        self,
        roles: Roles,
        project_id: int,
        user_id: int,
        token: str
    ) -> Project:
        """
        The project must exist; non-admins must be on its team.
        Team membership is matched by username.
        """
        project = self.project_repository.get_project(project_id, token)
        if is_admin(roles):
            return project

        caller = self.user_repository.get_user(user_id, token)
        if not project.has_member_named(caller.username):
            logger.warning(f"User {user_id} is not on the team of project {project_id}")
            raise ForbiddenError("You do not have permission to access this project.")
        return project

    def _ensure_user_can_access_task(self, task: Task, user_id: int, roles: Roles) -> None:
        if is_admin(roles):
            return
        if task.is_owned_by(user_id) or task.is_responsible(user_id):
            return
        logger.warning(f"User {user_id} denied access to task {task.id}")
        raise ForbiddenError("You do not have permission to access this task.")

    def _get_task_in_project(self, project_id: int, task_id: int) -> Task:
        task = self.task_repository.find_by_id(task_id)
        if task is None:
            raise EntityNotFoundError("Task", task_id)
        if not task.belongs_to_project(project_id):
            raise EntityNotFoundError(
                "Task",
                task_id,
                f"Task with ID {task_id} does not belong to project with ID {project_id}."
            )
        return task

    # Enrichment

    def _to_response(self, task: Task, token: str) -> TaskResponseDTO:
        # One lookup per id, duplicates included
        users = [
            UserResponseDTO.from_domain(user)
            for user in self.user_repository.get_users(task.involved_user_ids, token)
        ]
        return TaskResponseDTO(
            id=task.id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            status=task.status,
            project_id=task.project_id,
            owner=users[0],
            responsible_users=users[1:],
        )

    def _to_filtered_response(self, task: Task, token: str) -> TaskResponseFilteredDTO:
        project = self.project_repository.get_project(task.project_id, token)
        response = self._to_response(task, token)
        return TaskResponseFilteredDTO(
            **dict(response), project=ProjectResponseDTO.from_domain(project)
        )

"""
Wiring of the task service for request handlers.
Remote clients are process-wide so their connection pools are reused.
"""

from typing import Annotated, Optional
from fastapi import Depends
from sqlalchemy.orm import Session

from task_api.config import get_settings
from task_api.application.services.task_service import TaskService
from task_api.domain.repositories.task_repository import TaskRepository
from task_api.domain.repositories.user_repository import UserRepository
from task_api.domain.repositories.project_repository import ProjectRepository
from task_api.infrastructure.clients.user_service_client import UserServiceClient
from task_api.infrastructure.clients.project_service_client import ProjectServiceClient
from task_api.infrastructure.db.database import get_db
from task_api.infrastructure.pagination import OffsetPagination
from task_api.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository

_user_client: Optional[UserServiceClient] = None
_project_client: Optional[ProjectServiceClient] = None


def get_user_repository() -> UserRepository:
    """Dependency to get the user service client."""
    global _user_client
    if _user_client is None:
        settings = get_settings()
        _user_client = UserServiceClient(settings.user_service_url, settings.remote_timeout)
    return _user_client


def get_project_repository() -> ProjectRepository:
    """Dependency to get the project service client."""
    global _project_client
    if _project_client is None:
        settings = get_settings()
        _project_client = ProjectServiceClient(settings.project_service_url, settings.remote_timeout)
    return _project_client


def close_remote_clients() -> None:
    """Release the pooled connections of both clients."""
    global _user_client, _project_client
    for client in (_user_client, _project_client):
        if client is not None:
            client.close()
    _user_client = None
    _project_client = None


def get_task_repository(session: Annotated[Session, Depends(get_db)]) -> TaskRepository:
    """Dependency to get task repository."""
    settings = get_settings()
    return SQLAlchemyTaskRepository(
        session,
        OffsetPagination(settings.default_page_size, settings.max_page_size)
    )


def get_task_service(
    task_repository: Annotated[TaskRepository, Depends(get_task_repository)],
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    project_repository: Annotated[ProjectRepository, Depends(get_project_repository)]
) -> TaskService:
    """Dependency to get the task service."""
    return TaskService(task_repository, user_repository, project_repository)

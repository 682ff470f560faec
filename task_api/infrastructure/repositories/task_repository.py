"""
Task repository implementation using SQLAlchemy.
"""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, Query, selectinload

from task_api.domain.models.base import EntityNotFoundError
from task_api.domain.models.page import Page, PageRequest
from task_api.domain.models.task import Task, TaskStatus
from task_api.domain.repositories.task_repository import TaskRepository
from task_api.infrastructure.db.models import TaskModel, TaskResponsibleModel
from task_api.infrastructure.mappers.task_mapper import TaskMapper
from task_api.infrastructure.pagination import OffsetPagination

logger = logging.getLogger(__name__)


class SQLAlchemyTaskRepository(TaskRepository):
    """SQLAlchemy implementation of task repository. Each write is its own transaction."""

    def __init__(self, session: Session, paginator: Optional[OffsetPagination] = None):
        self.session = session
        self.mapper = TaskMapper()
        self.paginator = paginator or OffsetPagination()

    def save(self, task: Task) -> Task:
        """Save a task entity."""
        if task.is_new:
            # Create new task
            model = self.mapper.domain_to_model(task)
            self.session.add(model)
        else:
            # Update existing task
            model = self._query().filter(TaskModel.id == task.id).first()
            if not model:
                raise EntityNotFoundError("Task", task.id)
            self.mapper.update_model(model, task)

        self.session.commit()
        self.session.refresh(model)
        logger.debug(f"Saved task {model.id}")
        return self.mapper.model_to_domain(model)

    def find_by_id(self, task_id: int) -> Optional[Task]:
        """Get task by ID."""
        model = self._query().filter(TaskModel.id == task_id).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    def delete(self, task: Task) -> None:
        """Delete task and its responsible rows."""
        model = self.session.query(TaskModel).filter(TaskModel.id == task.id).first()

        if not model:
            raise EntityNotFoundError("Task", task.id)

        self.session.delete(model)
        self.session.commit()
        logger.debug(f"Deleted task {task.id}")

    def find_by_project_and_responsible(
        self,
        project_id: int,
        user_id: int,
        page_request: PageRequest
    ) -> Page[Task]:
        """Get tasks of a project where the user is responsible."""
        query = self._query().filter(
            TaskModel.project_id == project_id,
            self._has_responsible(user_id)
        )
        return self._paginate(query, page_request)

    def find_filtered(
        self,
        status: Optional[TaskStatus],
        due_date: Optional[datetime],
        project_id: Optional[int],
        page_request: PageRequest
    ) -> Page[Task]:
        """Get tasks matching the optional filters."""
        query = self._apply_filters(self._query(), status, due_date, project_id)
        return self._paginate(query, page_request)

    def find_filtered_for_user(
        self,
        user_id: int,
        status: Optional[TaskStatus],
        due_date: Optional[datetime],
        project_id: Optional[int],
        page_request: PageRequest
    ) -> Page[Task]:
        """Get tasks matching the optional filters that the user owns or is responsible for."""
        query = self._apply_filters(self._query(), status, due_date, project_id).filter(
            or_(
                TaskModel.owner_user_id == user_id,
                self._has_responsible(user_id)
            )
        )
        return self._paginate(query, page_request)

    def _query(self) -> Query:
        return self.session.query(TaskModel).options(selectinload(TaskModel.responsibles))

    @staticmethod
    def _has_responsible(user_id: int):
        return TaskModel.responsibles.any(TaskResponsibleModel.responsible_user_id == user_id)

    @staticmethod
    def _apply_filters(
        query: Query,
        status: Optional[TaskStatus],
        due_date: Optional[datetime],
        project_id: Optional[int]
    ) -> Query:
        if status is not None:
            query = query.filter(TaskModel.status == status)
        if due_date is not None:
            query = query.filter(TaskModel.due_date <= due_date)
        if project_id is not None:
            query = query.filter(TaskModel.project_id == project_id)
        return query

    def _paginate(self, query: Query, page_request: PageRequest) -> Page[Task]:
        models, metadata = self.paginator.paginate(
            query.order_by(TaskModel.id),
            page=page_request.page,
            page_size=page_request.size
        )
        return Page(
            content=[self.mapper.model_to_domain(model) for model in models],
            page_number=metadata.page,
            page_size=metadata.page_size,
            total_elements=metadata.total_items,
        )

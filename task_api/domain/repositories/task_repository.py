"""
Task repository interface.
Defines the contract for task data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime

from task_api.domain.models.task import Task, TaskStatus
from task_api.domain.models.page import Page, PageRequest


class TaskRepository(ABC):
    """
    Repository interface for Task entity.
    Defines all operations needed for task data persistence.
    """

    @abstractmethod
    def save(self, task: Task) -> Task:
        """
        Save a task entity.
        Returns the saved task with its generated ID.
        """
        pass

    @abstractmethod
    def find_by_id(self, task_id: int) -> Optional[Task]:
        """
        Find a task by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def delete(self, task: Task) -> None:
        """
        Permanently delete a task and its responsible list.
        """
        pass

    @abstractmethod
    def find_by_project_and_responsible(
        self,
        project_id: int,
        user_id: int,
        page_request: PageRequest
    ) -> Page[Task]:
        """
        Find tasks of a project where the user is in the responsible list.
        """
        pass

    @abstractmethod
    def find_filtered(
        self,
        status: Optional[TaskStatus],
        due_date: Optional[datetime],
        project_id: Optional[int],
        page_request: PageRequest
    ) -> Page[Task]:
        """
        Find tasks matching every given filter.
        A None filter is ignored; due_date keeps tasks due on or before it.
        """
        pass

    @abstractmethod
    def find_filtered_for_user(
        self,
        user_id: int,
        status: Optional[TaskStatus],
        due_date: Optional[datetime],
        project_id: Optional[int],
        page_request: PageRequest
    ) -> Page[Task]:
        """
        Same as find_filtered, restricted to tasks the user owns or is responsible for.
        """
        pass

"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .task_repository import TaskRepository
from .user_repository import UserRepository
from .project_repository import ProjectRepository

__all__ = [
    "TaskRepository",
    "UserRepository",
    "ProjectRepository",
]

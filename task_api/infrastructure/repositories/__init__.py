"""
Repository implementations (adapters) for the domain ports.
"""

from .task_repository import SQLAlchemyTaskRepository

__all__ = ["SQLAlchemyTaskRepository"]

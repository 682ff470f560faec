"""
SQLAlchemy models for the database.
Maps the task entity and its responsible list to tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from task_api.domain.models.task import TaskStatus
from task_api.domain.models.value_objects import TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH
from .database import Base


class TaskModel(Base):
    """Task table"""
    __tablename__ = 'tasks'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, nullable=False)
    owner_user_id = Column(Integer, nullable=False)

    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH))
    status = Column(SQLEnum(TaskStatus, name='task_status'), nullable=False, default=TaskStatus.TODO)

    # Dates (naive UTC)
    due_date = Column(DateTime, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    responsibles = relationship(
        "TaskResponsibleModel",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="TaskResponsibleModel.id",
    )

    __table_args__ = (
        Index('ix_tasks_project_id', 'project_id'),
        Index('ix_tasks_owner_user_id', 'owner_user_id'),
        Index('ix_tasks_status_due_date', 'status', 'due_date'),
    )


class TaskResponsibleModel(Base):
    """Responsible users of a task, in insertion order. Duplicates are allowed."""
    __tablename__ = 'task_responsibles'

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    responsible_user_id = Column(Integer, nullable=False)

    # Relationships
    task = relationship("TaskModel", back_populates="responsibles")

    __table_args__ = (
        Index('ix_task_responsibles_task_id', 'task_id'),
        Index('ix_task_responsibles_user_id', 'responsible_user_id'),
    )

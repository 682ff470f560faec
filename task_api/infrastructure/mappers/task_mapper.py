"""
Task mapper for converting between domain entities and database models.
"""

from task_api.domain.models.task import Task, TaskStatus
from task_api.infrastructure.db.models import TaskModel, TaskResponsibleModel


class TaskMapper:
    """Maps between Task domain entity and TaskModel database model."""

    def domain_to_model(self, task: Task) -> TaskModel:
        """Convert Task domain entity to a new TaskModel."""
        model = TaskModel(id=task.id)
        self.update_model(model, task)
        return model

    def update_model(self, model: TaskModel, task: Task) -> None:
        """Copy every mutable field of the entity onto an existing row."""
        model.project_id = task.project_id
        model.owner_user_id = task.owner_user_id
        model.title = task.title
        model.description = task.description
        model.status = task.status
        model.due_date = task.due_date
        # Replacing the collection deletes the previous rows (delete-orphan)
        model.responsibles = [
            TaskResponsibleModel(responsible_user_id=user_id)
            for user_id in task.responsible_user_ids
        ]

    def model_to_domain(self, model: TaskModel) -> Task:
        """Convert TaskModel to Task domain entity."""
        return Task(
            id=model.id,
            project_id=model.project_id,
            owner_user_id=model.owner_user_id,
            title=model.title,
            description=model.description,
            status=TaskStatus(model.status) if model.status else TaskStatus.TODO,
            due_date=model.due_date,
            responsible_user_ids=[r.responsible_user_id for r in model.responsibles],
        )

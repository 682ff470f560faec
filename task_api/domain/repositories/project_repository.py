"""
Project lookup interface.
Projects are owned by the remote project service and only read by this service.
"""

from abc import ABC, abstractmethod

from task_api.domain.models.project import Project


class ProjectRepository(ABC):
    """Read-only port to the project service."""

    @abstractmethod
    def get_project(self, project_id: int, token: str) -> Project:
        """
        Fetch one project with its team and creator.
        Raises EntityNotFoundError when the project does not exist.
        """
        pass

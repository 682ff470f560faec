"""
Client for the remote project service.
"""

import logging

from task_api.application.dto.project_dto import ProjectResponseDTO
from task_api.domain.models.project import Project
from task_api.domain.repositories.project_repository import ProjectRepository
from .base_client import RemoteServiceClient

logger = logging.getLogger(__name__)


class ProjectServiceClient(RemoteServiceClient, ProjectRepository):
    """Fetches project views, team included, from GET {base_url}/api/project/{id}."""

    service_name = "project"

    def get_project(self, project_id: int, token: str) -> Project:
        data = self._get(f"/api/project/{project_id}", token, "Project", project_id)
        project = self._parse(ProjectResponseDTO, data).to_domain()
        logger.debug(f"Fetched project {project.id} with {len(project.team)} team members")
        return project

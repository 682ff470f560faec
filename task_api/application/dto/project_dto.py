"""
Project DTOs.
Read-only view of a project as returned by the project service.
"""

from typing import List, Optional
from pydantic import Field

from task_api.domain.models.project import Project
from .base_dto import RemoteDTO
from .user_dto import UserResponseDTO


class ProjectResponseDTO(RemoteDTO):
    """Project view with its team and creator."""

    id: int = Field(description="Project ID")
    title: str = Field(description="Project title")
    description: Optional[str] = Field(default=None, description="Project description")
    team: List[UserResponseDTO] = Field(default_factory=list, description="Team members")
    creator: Optional[UserResponseDTO] = Field(default=None, description="Project creator")

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponseDTO":
        return cls(
            id=project.id,
            title=project.title,
            description=project.description,
            team=[UserResponseDTO.from_domain(member) for member in project.team],
            creator=UserResponseDTO.from_domain(project.creator) if project.creator else None,
        )

    def to_domain(self) -> Project:
        return Project(
            id=self.id,
            title=self.title,
            description=self.description,
            team=[member.to_domain() for member in self.team],
            creator=self.creator.to_domain() if self.creator else None,
        )

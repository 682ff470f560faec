"""
Project domain model.
Projects live in the remote project service; tasks only keep their id.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from task_api.domain.models.user import User


@dataclass(frozen=True)
class Project:
    """A project with its team and creator."""
    id: int
    title: str
    description: Optional[str] = None
    team: List[User] = field(default_factory=list)
    creator: Optional[User] = None

    def has_member_named(self, username: str) -> bool:
        """Team membership is decided by username."""
        return any(member.username == username for member in self.team)

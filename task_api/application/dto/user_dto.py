"""
User DTOs.
Read-only view of a user as returned by the user service.
"""

from typing import Optional
from pydantic import AliasChoices, Field

from task_api.domain.models.user import User
from .base_dto import RemoteDTO


class UserResponseDTO(RemoteDTO):
    """User view: identifier, username and email."""

    user_id: int = Field(
        validation_alias=AliasChoices("user_id", "userId", "id"),
        description="User ID"
    )
    username: str = Field(
        validation_alias=AliasChoices("username", "userName"),
        description="Unique username"
    )
    email: Optional[str] = Field(default=None, description="Email address")

    @classmethod
    def from_domain(cls, user: User) -> "UserResponseDTO":
        return cls(user_id=user.user_id, username=user.username, email=user.email)

    def to_domain(self) -> User:
        return User(user_id=self.user_id, username=self.username, email=self.email)

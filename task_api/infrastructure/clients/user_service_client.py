"""
Client for the remote user service.
"""

import logging

from task_api.application.dto.user_dto import UserResponseDTO
from task_api.domain.models.user import User
from task_api.domain.repositories.user_repository import UserRepository
from .base_client import RemoteServiceClient

logger = logging.getLogger(__name__)


class UserServiceClient(RemoteServiceClient, UserRepository):
    """Fetches user views from GET {base_url}/api/user/{id}."""

    service_name = "user"

    def get_user(self, user_id: int, token: str) -> User:
        data = self._get(f"/api/user/{user_id}", token, "User", user_id)
        user = self._parse(UserResponseDTO, data).to_domain()
        logger.debug(f"Fetched user {user.user_id} ({user.username})")
        return user

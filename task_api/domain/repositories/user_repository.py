"""
User lookup interface.
Users are owned by the remote user service and only read by this service.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

from task_api.domain.models.user import User


class UserRepository(ABC):
    """Read-only port to the user service."""

    @abstractmethod
    def get_user(self, user_id: int, token: str) -> User:
        """
        Fetch one user.
        Raises EntityNotFoundError when the user does not exist.
        """
        pass

    def get_users(self, user_ids: Iterable[int], token: str) -> List[User]:
        """
        Fetch several users, one lookup per id.
        Order is kept, duplicates are fetched again and the first failure aborts the batch.
        """
        return [self.get_user(user_id, token) for user_id in user_ids]

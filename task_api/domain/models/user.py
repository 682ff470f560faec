"""
User domain model.
Users live in the remote user service; this is the read-only view the task
service works with.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """A user as known by the user service."""
    user_id: int
    username: str
    email: Optional[str] = None

"""
HTTP clients for the remote user and project services.
"""

from .base_client import RemoteServiceClient
from .user_service_client import UserServiceClient
from .project_service_client import ProjectServiceClient

__all__ = [
    "RemoteServiceClient",
    "UserServiceClient",
    "ProjectServiceClient",
]

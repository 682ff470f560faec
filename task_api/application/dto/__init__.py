"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .user_dto import *
from .project_dto import *
from .task_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "RemoteDTO",
    "PagedResponseDTO",
    "HealthCheckResponseDTO",
    "ErrorResponseDTO",
    "ValidationErrorResponseDTO",

    # Remote views
    "UserResponseDTO",
    "ProjectResponseDTO",

    # Task DTOs
    "TaskRequestDTO",
    "TaskRequestPatchDTO",
    "TaskResponseDTO",
    "TaskResponseFilteredDTO",
]

"""
Mappers between domain entities, database rows and response DTOs.
"""

from .task_mapper import TaskMapper
from .paged_response_mapper import PagedResponseMapper

__all__ = [
    "TaskMapper",
    "PagedResponseMapper",
]

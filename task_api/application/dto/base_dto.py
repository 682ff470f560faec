"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Any, Dict, List, Optional, TypeVar, Generic
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict

from task_api.domain.models.base import utcnow


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        # Validate assignment
        validate_assignment=True,
        # Reject unknown request fields
        extra="forbid",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""
    pass


class RemoteDTO(BaseDTO):
    """
    Base class for payloads received from remote services.
    Accepts both camelCase and snake_case keys and ignores unknown ones.
    """

    model_config = ConfigDict(extra="ignore", from_attributes=True)


T = TypeVar('T')


class PagedResponseDTO(BaseDTO, Generic[T]):
    """One page of mapped items with the source page metadata."""

    model_config = ConfigDict(from_attributes=True)

    content: List[T] = Field(default_factory=list, description="Items on this page")
    page_number: int = Field(description="Current page number (1-based)")
    page_size: int = Field(description="Items per page")
    total_elements: int = Field(description="Total number of items")
    total_pages: int = Field(description="Total number of pages")
    last: bool = Field(description="Whether this is the last page")


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(default_factory=utcnow, description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")


class ErrorResponseDTO(BaseDTO):
    """Error response DTO."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")
    code: Optional[str] = Field(default=None, description="Machine readable error code")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(default_factory=utcnow, description="Error timestamp")


class ValidationErrorResponseDTO(ErrorResponseDTO):
    """Validation error response DTO."""

    field_errors: List[Dict[str, str]] = Field(description="Field-specific validation errors")

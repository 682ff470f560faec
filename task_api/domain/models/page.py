"""
Paging primitives shared by the storage port and the response mapper.
"""

from dataclasses import dataclass, field
from math import ceil
from typing import Generic, List, TypeVar

from task_api.domain.models.base import ValidationError

T = TypeVar('T')


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page number and a page size."""

    page: int = 1
    size: int = 20

    def __post_init__(self):
        if self.page < 1:
            raise ValidationError("Page number must be at least 1", "page")
        if self.size < 1:
            raise ValidationError("Page size must be at least 1", "size")

    @property
    def offset(self) -> int:
        """Row offset for storage queries."""
        return (self.page - 1) * self.size

    @property
    def limit(self) -> int:
        return self.size


@dataclass
class Page(Generic[T]):
    """One page of results plus the metadata describing it."""

    content: List[T] = field(default_factory=list)
    page_number: int = 1
    page_size: int = 20
    total_elements: int = 0

    @classmethod
    def of(cls, content: List[T], request: PageRequest, total_elements: int) -> "Page[T]":
        return cls(
            content=list(content),
            page_number=request.page,
            page_size=request.size,
            total_elements=total_elements,
        )

    @property
    def total_pages(self) -> int:
        return ceil(self.total_elements / self.page_size) if self.page_size > 0 else 0

    @property
    def last(self) -> bool:
        """True on the final page, and on any page with no content."""
        if not self.content:
            return True
        return self.page_number >= self.total_pages

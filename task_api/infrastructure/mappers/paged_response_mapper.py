"""
Paged response mapper.
Turns a storage page into a PagedResponseDTO, converting each item on the way.
"""

from typing import Any, Callable, Type, TypeVar, Union

from pydantic import BaseModel

from task_api.application.dto.base_dto import PagedResponseDTO
from task_api.domain.models.page import Page

T = TypeVar('T')


class PagedResponseMapper:
    """Maps Page[T] to PagedResponseDTO, keeping order and page metadata."""

    @staticmethod
    def to_paged_response(
        page: Page[T],
        target: Union[Type[BaseModel], Callable[[T], Any]]
    ) -> PagedResponseDTO:
        """
        Convert a page.

        Args:
            page: Source page
            target: Either a pydantic model class, filled field by field from
                each item's attributes, or a per-item conversion function

        Returns:
            PagedResponseDTO with converted content and unchanged metadata
        """
        if isinstance(target, type) and issubclass(target, BaseModel):
            converter = lambda item: target.model_validate(item, from_attributes=True)
        elif callable(target):
            converter = target
        else:
            raise TypeError(f"Cannot map page items with {target!r}")

        return PagedResponseDTO(
            content=[converter(item) for item in page.content],
            page_number=page.page_number,
            page_size=page.page_size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            last=page.last,
        )

"""
Offset pagination for SQLAlchemy queries.
"""

from typing import Any, List, Optional, Tuple
from dataclasses import dataclass
from sqlalchemy.orm import Query


@dataclass
class PaginationMetadata:
    """Window actually applied to a query, after clamping."""
    page: int
    page_size: int
    total_items: int


class OffsetPagination:
    """
    Offset-based pagination with a page size ceiling.
    Runs one count query and one windowed query.
    """

    def __init__(self, default_page_size: int = 20, max_page_size: int = 100):
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def paginate(
        self,
        query: Query,
        page: int = 1,
        page_size: Optional[int] = None
    ) -> Tuple[List[Any], PaginationMetadata]:
        """
        Apply an offset window to an ordered query.

        Args:
            query: SQLAlchemy query to paginate, already ordered
            page: Page number (1-based), clamped to 1
            page_size: Items per page, capped at max_page_size

        Returns:
            Tuple of (rows, metadata)
        """
        size = min(page_size or self.default_page_size, self.max_page_size)
        page = max(1, page)

        total_items = query.order_by(None).count()
        rows = query.offset((page - 1) * size).limit(size).all()

        return rows, PaginationMetadata(page=page, page_size=size, total_items=total_items)

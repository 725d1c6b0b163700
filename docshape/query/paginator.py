"""
Page slicing for processed document lists.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence

from ..utils.validation import validate_page, validate_page_size


@dataclass
class PageInfo:
    """
    Position of one page within a result set.

    ``start_index`` and ``end_index`` are 0-based and half-open; both
    equal ``total_items`` when the page lies past the end.
    """
    page: int
    page_size: int
    total_items: int
    total_pages: int
    start_index: int
    end_index: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def is_empty(self) -> bool:
        return self.start_index >= self.end_index

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["has_next"] = self.has_next
        result["has_previous"] = self.has_previous
        return result


def _bounds(total_items: int, page: int, page_size: int):
    start = min((page - 1) * page_size, total_items)
    end = min(page * page_size, total_items)
    return start, end


def paginate(documents: Sequence[Any], page: int, page_size: int) -> List[Any]:
    """
    Return one page of documents.

    Args:
        documents: Ordered documents
        page: 1-based page number
        page_size: Documents per page

    Returns:
        The slice ``[(page-1)*page_size, page*page_size)``; an empty
        list when the page is past the end

    Raises:
        ValidationError: If page or page_size is below 1
    """
    validate_page(page)
    validate_page_size(page_size)

    start, end = _bounds(len(documents), page, page_size)
    return list(documents[start:end])


def page_info(total_items: int, page: int, page_size: int) -> PageInfo:
    """Describe ``page`` of a result set holding ``total_items`` items."""
    validate_page(page)
    validate_page_size(page_size)

    total_items = max(int(total_items), 0)
    total_pages = -(-total_items // page_size)
    start, end = _bounds(total_items, page, page_size)

    return PageInfo(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        start_index=start,
        end_index=end,
    )

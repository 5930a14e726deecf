"""
Pagination utilities for the EduPartner API.
Every list endpoint returns the same envelope.
"""
from typing import TypeVar, List

T = TypeVar("T")


def create_paginated_response(
    items: List[T],
    total: int,
    page: int,
    limit: int
) -> dict:
    """
    Wrap one page of items with paging metadata.

    Args:
        items: Items on the current page
        total: Count of all matching items
        page: Current page number (1-indexed)
        limit: Page size

    Returns:
        Dictionary with items, total, page, limit, pages, has_next, has_prev
    """
    pages = (total + limit - 1) // limit if limit > 0 else 0

    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "pages": pages,
        "has_next": page < pages,
        "has_prev": page > 1
    }

"""
Pagination helpers for list queries.
"""

from typing import List, Optional

from .schema import INVALID_START, ListResult, ListResultMetadata


def ceil_div(x: int, y: int) -> int:
    """Ceiling counterpart of floor division, e.g. ceil_div(3, 2) == 2."""
    return -((-x) // y)


def build_list_result(values: List, total_count: int, start: int, page_size: int,
                      metadata: Optional[ListResultMetadata] = None) -> ListResult:
    """Wrap one page of values with its paging information."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")

    next_start = start + len(values)
    has_next = next_start < total_count
    return ListResult(
        values=list(values),
        metadata=metadata,
        next_start=next_start if has_next else INVALID_START,
        has_next=has_next,
        total_count=total_count,
        total_page_count=ceil_div(total_count, page_size),
        page_size=page_size,
    )

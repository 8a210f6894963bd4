"""
Offset/limit pagination helpers.
"""

import math
from typing import Any, Dict

# Largest offset a 64-bit integer column can take
MAX_OFFSET = 2 ** 63 - 1


def page_to_skip(page: int, take: int) -> int:
    """Number of records to skip for a 1-based page."""
    return (page - 1) * take


def max_page(take: int) -> int:
    """Highest page number whose offset fits in MAX_OFFSET for the given page size."""
    return MAX_OFFSET // take + 1


def build_pagination_meta(total_items: int, item_count: int, page: int, take: int) -> Dict[str, Any]:
    """
    Build pagination metadata for a listing response.

    Args:
        total_items: Size of the filtered set
        item_count: Number of items in the returned page
        page: Requested page number
        take: Requested page size

    Returns:
        Dictionary matching PaginationMeta
    """
    return {
        "totalItems": total_items,
        "itemCount": item_count,
        "itemsPerPage": take,
        "totalPages": math.ceil(total_items / take),
        "currentPage": page,
    }

# core/pagination.py
"""
Pagination helpers shared by every list endpoint.

Pages are 1-based. Collections are paginated in memory after the
tenant-scoped fetch, the same way the dashboard tables page through a
hook's items.
"""

import math
from typing import Any, Dict, List, Sequence, Tuple, Union

ELLIPSIS = "..."

PageToken = Union[int, str]


def paginate(items: Sequence[Any], page: int = 1, page_size: int = 10) -> Dict[str, Any]:
    """
    Slice one page out of `items`.

    Returns a dict with the page's items plus navigation flags:
    total_items, total_pages, has_next_page, has_previous_page.
    """
    total_items = len(items)
    total_pages = math.ceil(total_items / page_size) if page_size > 0 else 0
    start_index = max(0, (page - 1) * page_size)
    end_index = min(start_index + page_size, total_items)

    return {
        "items": list(items[start_index:end_index]),
        "page": page,
        "page_size": page_size,
        "total_items": total_items,
        "total_pages": total_pages,
        "has_next_page": page * page_size < total_items,
        "has_previous_page": page > 1,
    }


def generate_page_numbers(current_page: int, total_pages: int, max_visible_pages: int = 5) -> List[PageToken]:
    """
    Page buttons for pagination controls.

    A window of `max_visible_pages` pages centred on `current_page`.
    The window is preceded by 1 when it starts at page 2 or by "..." when
    it starts later, and followed by `total_pages` when it stops one short
    of the end or by "..." when it stops earlier. The result never holds
    more than max_visible_pages + 2 entries.

    From a middle window such as (5, 10, 5) -> ["...", 3, 4, 5, 6, 7, "..."]
    neither page 1 nor the last page gets a button; callers that need
    first/last jumps render them separately.
    """
    if total_pages <= 0:
        return []

    if total_pages <= max_visible_pages:
        return list(range(1, total_pages + 1))

    half = max_visible_pages // 2
    start_page = max(1, current_page - half)
    end_page = start_page + max_visible_pages - 1

    if end_page > total_pages:
        end_page = total_pages
        start_page = max(1, end_page - max_visible_pages + 1)

    pages: List[PageToken] = []

    if start_page == 2:
        pages.append(1)
    elif start_page > 2:
        pages.append(ELLIPSIS)

    pages.extend(range(start_page, end_page + 1))

    if end_page == total_pages - 1:
        pages.append(total_pages)
    elif end_page < total_pages - 1:
        pages.append(ELLIPSIS)

    return pages


def get_pagination_offset(page: int, page_size: int) -> int:
    """Row offset for a range()/offset query."""
    return (page - 1) * page_size


def validate_pagination(page=1, page_size=10, max_page_size: int = 100) -> Tuple[int, int]:
    """
    Clamp requested paging to sane values:
    page ≥ 1, 1 ≤ page_size ≤ max_page_size. Garbage falls back to defaults.
    """
    try:
        validated_page = max(1, int(math.floor(float(page))) or 1)
    except (TypeError, ValueError, OverflowError):
        validated_page = 1

    try:
        validated_page_size = int(math.floor(float(page_size))) or 10
    except (TypeError, ValueError, OverflowError):
        validated_page_size = 10

    validated_page_size = min(max(1, validated_page_size), max_page_size)

    return validated_page, validated_page_size


def build_page(items: Sequence[Any], page: int, page_size: int, max_visible_pages: int = 5) -> Tuple[List[Any], Dict[str, Any]]:
    """paginate() split into (items, metadata) with page buttons attached."""
    result = paginate(items, page, page_size)
    page_items = result.pop("items")
    result["page_numbers"] = generate_page_numbers(page, result["total_pages"], max_visible_pages)
    return page_items, result

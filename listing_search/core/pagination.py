from __future__ import annotations

import math
from typing import Sequence, TypeVar

from listing_search.core.config import DEFAULT_PAGE_SIZE


T = TypeVar("T")

ELLIPSIS = "..."


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    if count <= 0 or page_size <= 0:
        return 0
    return math.ceil(count / page_size)


def clamp_page(page: int, pages: int) -> int:
    return max(1, min(page, pages)) if pages else 1


def paginate(items: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> tuple[list[T], int, int]:
    """
    Slice one 1-indexed page. Returns (page_items, resolved_page, total_pages).
    """
    pages = total_pages(len(items), page_size)
    resolved = clamp_page(page, pages)
    start = (resolved - 1) * page_size
    return list(items[start : start + page_size]), resolved, pages


def page_numbers(current: int, pages: int, delta: int = 2) -> list[int | str]:
    """
    Pager strip: first, last, and current +/- delta; a one-page gap shows the page itself
    instead of an ellipsis.
    """
    shown = [
        number
        for number in range(1, pages + 1)
        if number in (1, pages) or current - delta <= number <= current + delta
    ]
    out: list[int | str] = []
    previous: int | None = None
    for number in shown:
        if previous is not None:
            if number - previous == 2:
                out.append(previous + 1)
            elif number - previous != 1:
                out.append(ELLIPSIS)
        out.append(number)
        previous = number
    return out

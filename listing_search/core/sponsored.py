from __future__ import annotations

from typing import Sequence

from listing_search.core.models import Listing


NEIGHBOURHOOD_WINDOW = 20


def sponsored_pool(listings: Sequence[Listing]) -> list[Listing]:
    return [listing for listing in listings if listing.is_sponsored and listing.is_available]


def pick_sponsored(
    pool: Sequence[Listing],
    page_items: Sequence[Listing],
    page: int,
    day_of_month: int,
) -> Listing | None:
    """
    Prefer sponsored listings sharing a city with the page, then a region, then the whole pool.
    The pick rotates with the page number and the day, so it is stable within a day.
    """
    if not pool:
        return None
    top = page_items[:NEIGHBOURHOOD_WINDOW]
    cities = {_norm(item.city) for item in top if item.city.strip()}
    regions = {_norm(item.region) for item in top if item.region.strip()}

    candidates = [listing for listing in pool if _norm(listing.city) in cities]
    if not candidates:
        candidates = [listing for listing in pool if _norm(listing.region) in regions]
    if not candidates:
        candidates = list(pool)
    return candidates[(page + day_of_month) % len(candidates)]


def inject_sponsored(page_items: Sequence[Listing], sponsored: Listing | None) -> list[Listing]:
    """Place the sponsored listing in the 2nd or 3rd slot, never first."""
    if sponsored is None:
        return list(page_items)
    others = [item for item in page_items if item.id != sponsored.id]
    if not others:
        return [sponsored]
    position = 1 if len(others) == 1 else 2
    return others[:position] + [sponsored] + others[position:]


def _norm(value: str) -> str:
    return value.strip().lower()

from __future__ import annotations

from typing import Sequence

from listing_search.core.models import Listing, SortState


def sort_listings(listings: Sequence[Listing], sort: SortState | None = None) -> list[Listing]:
    """
    Stable sort: unavailable listings always go last. With no sort key, listings with a
    Facebook link come first and relevance order is otherwise kept; with a key, the numeric
    comparator applies within each availability group.
    """
    sort = sort or SortState()

    def key(listing: Listing) -> tuple[int, int, float]:
        unavailable = 0 if listing.is_available else 1
        if sort.key is None:
            return unavailable, 0 if listing.facebook_link.strip() else 1, 0.0
        value = listing.sort_value(sort.key)
        return unavailable, 0, value if sort.direction == "asc" else -value

    return sorted(listings, key=key)

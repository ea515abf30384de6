from __future__ import annotations

import logging
from typing import Sequence

from listing_search.core.clock import local_day_of_month
from listing_search.core.config import Settings
from listing_search.core.filters import (
    DEFAULT_FLOOR_AREA_MAX,
    DEFAULT_LEASE_PRICE_MAX,
    DEFAULT_LOT_AREA_MAX,
    DEFAULT_PRICE_MAX,
    DEFAULT_PRICE_PER_SQM_MAX,
    apply_filters,
    category_scope,
    geography_options,
    price_of,
    price_per_sqm_of,
    range_bounds,
)
from listing_search.core.models import Listing, PageView, ViewState
from listing_search.core.pagination import page_numbers, paginate
from listing_search.core.search import find_id_match, search_listings
from listing_search.core.sorting import sort_listings
from listing_search.core.sponsored import inject_sponsored, pick_sponsored, sponsored_pool


LOGGER = logging.getLogger(__name__)


def recompute(
    listings: Sequence[Listing],
    state: ViewState,
    settings: Settings | None = None,
    day_of_month: int | None = None,
    with_sponsored: bool = True,
) -> PageView:
    """
    Full, side-effect free view for the current state: search, filter, sort, page.

    Re-run on every state change; listings are never mutated.
    """
    settings = settings or Settings()
    query = (state.query or "").strip()

    if query:
        results = search_listings(listings, query, state.min_score, price_band=settings.price_band)
    else:
        results = list(listings)

    id_match = find_id_match(listings, query) if query else None
    if id_match is not None and all(item.id != id_match.id for item in results):
        results.insert(0, id_match)

    filtered = apply_filters(results, state.filters, id_match=id_match)
    ordered = sort_listings(filtered, state.sort)
    page_items, page, pages = paginate(ordered, state.page, settings.page_size)

    if with_sponsored and page_items:
        day = day_of_month if day_of_month is not None else local_day_of_month(tz_name=settings.timezone)
        pick = pick_sponsored(sponsored_pool(listings), page_items, page, day)
        page_items = inject_sponsored(page_items, pick)

    sale_type = state.filters.sale_type
    scoped = category_scope(results, state.filters)
    LOGGER.debug(
        "Recompute query=%r results=%s filtered=%s page=%s/%s",
        query,
        len(results),
        len(filtered),
        page,
        pages,
    )
    return PageView(
        items=page_items,
        page=page,
        total_pages=pages,
        total_count=len(filtered),
        page_numbers=page_numbers(page, pages),
        geography=geography_options(results, state.filters),
        price_bounds=range_bounds(
            scoped,
            lambda listing: price_of(listing, sale_type),
            DEFAULT_LEASE_PRICE_MAX if sale_type == "lease" else DEFAULT_PRICE_MAX,
        ),
        price_per_sqm_bounds=range_bounds(
            scoped, lambda listing: price_per_sqm_of(listing, sale_type), DEFAULT_PRICE_PER_SQM_MAX
        ),
        lot_area_bounds=range_bounds(scoped, lambda listing: listing.lot_area, DEFAULT_LOT_AREA_MAX),
        floor_area_bounds=range_bounds(scoped, lambda listing: listing.floor_area, DEFAULT_FLOOR_AREA_MAX),
    )

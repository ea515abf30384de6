from __future__ import annotations

from collections import Counter
from dataclasses import replace
from typing import Callable, Iterable, Sequence

from listing_search.core.models import FilterState, GeographyOptions, Listing, Range


GEOGRAPHY_LEVELS = ("region", "province", "city", "barangay")

DEFAULT_PRICE_MAX = 100_000_000.0
DEFAULT_LEASE_PRICE_MAX = 1_000_000.0
DEFAULT_PRICE_PER_SQM_MAX = 1_000_000.0
DEFAULT_LOT_AREA_MAX = 100_000.0
DEFAULT_FLOOR_AREA_MAX = 10_000.0


def matches_sale_type(listing: Listing, sale_type: str | None) -> bool:
    # Driven by price presence; the saleType string is display-only.
    if sale_type is None:
        return True
    if sale_type == "sale":
        return listing.price > 0
    if sale_type == "lease":
        return listing.lease_price > 0
    return listing.price > 0 and listing.lease_price > 0


def matches_category(listing: Listing, category: str | None) -> bool:
    if not category:
        return True
    combined = f"{listing.category} {listing.column_ae}".lower()
    return category.strip().lower() in combined


def matches_geography(listing: Listing, filters: FilterState, levels: Iterable[str] = GEOGRAPHY_LEVELS) -> bool:
    for level in levels:
        selected = getattr(filters, level)
        if selected and _norm(getattr(listing, level)) != _norm(selected):
            return False
    return True


def in_range(value: float, bounds: Range | None) -> bool:
    if bounds is None:
        return True
    low, high = bounds
    return low <= value <= high


def price_of(listing: Listing, sale_type: str | None) -> float:
    return listing.lease_price if sale_type == "lease" else listing.price


def price_per_sqm_of(listing: Listing, sale_type: str | None) -> float:
    return listing.lease_price_per_sqm if sale_type == "lease" else listing.price_per_sqm


def matches_filters(listing: Listing, filters: FilterState) -> bool:
    if not matches_sale_type(listing, filters.sale_type):
        return False
    if not matches_category(listing, filters.category):
        return False
    if not matches_geography(listing, filters):
        return False
    if filters.direct_only and not listing.is_direct:
        return False
    if filters.available_only and not listing.is_available:
        return False
    return (
        in_range(price_of(listing, filters.sale_type), filters.price_range)
        and in_range(price_per_sqm_of(listing, filters.sale_type), filters.price_per_sqm_range)
        and in_range(listing.lot_area, filters.lot_area_range)
        and in_range(listing.floor_area, filters.floor_area_range)
    )


def apply_filters(
    listings: Sequence[Listing],
    filters: FilterState,
    id_match: Listing | None = None,
) -> list[Listing]:
    """
    AND-combined filter pass. The id_match listing, when given, is kept regardless of filters.
    """
    return [
        listing
        for listing in listings
        if (id_match is not None and listing.id == id_match.id) or matches_filters(listing, filters)
    ]


def category_scope(listings: Sequence[Listing], filters: FilterState) -> list[Listing]:
    """Listings passing the sale-type and category filters only."""
    return [
        listing
        for listing in listings
        if matches_sale_type(listing, filters.sale_type) and matches_category(listing, filters.category)
    ]


def geography_options(listings: Sequence[Listing], filters: FilterState) -> GeographyOptions:
    """
    Dropdown values for the region > province > city > barangay cascade.

    Regions are ordered by listing count (then name); the rest alphabetically and narrowed by
    the selected parents.
    """
    scoped = category_scope(listings, filters)
    region_counts = Counter(listing.region.strip() for listing in scoped if listing.region.strip())
    regions = sorted(region_counts, key=lambda name: (-region_counts[name], name))
    return GeographyOptions(
        regions=regions,
        provinces=_child_options(scoped, filters, "province"),
        cities=_child_options(scoped, filters, "city"),
        barangays=_child_options(scoped, filters, "barangay"),
    )


def select_geography(filters: FilterState, level: str, value: str | None) -> FilterState:
    """Set one geography level and clear every level below it."""
    if level not in GEOGRAPHY_LEVELS:
        raise ValueError(f"Unknown geography level={level!r}")
    index = GEOGRAPHY_LEVELS.index(level)
    changes: dict[str, str | None] = {level: value or None}
    for child in GEOGRAPHY_LEVELS[index + 1 :]:
        changes[child] = None
    return replace(filters, **changes)


def range_bounds(
    listings: Sequence[Listing],
    getter: Callable[[Listing], float],
    default_max: float,
) -> Range:
    """
    (min, max) of the positive values for a range slider; never NaN, never an empty span.
    """
    values = [value for value in (getter(listing) for listing in listings) if value and value > 0]
    if not values:
        return 0.0, default_max
    low, high = min(values), max(values)
    if high <= low:
        return 0.0, high
    return low, high


def _child_options(listings: Sequence[Listing], filters: FilterState, level: str) -> list[str]:
    parents = GEOGRAPHY_LEVELS[: GEOGRAPHY_LEVELS.index(level)]
    values = {
        getattr(listing, level).strip()
        for listing in listings
        if getattr(listing, level).strip() and matches_geography(listing, filters, parents)
    }
    return sorted(values)


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


class PropertyType:
    CONDO = "Condo"
    LOT = "Lot"
    UNKNOWN = "Unknown"


SALE_TYPES = ("sale", "lease", "sale_lease")
SORT_KEYS = ("price", "pricePerSqm", "lotArea", "floorArea")
SORT_DIRECTIONS = ("asc", "desc")
CATEGORIES = ("residential", "commercial", "industrial", "agricultural")

Range = tuple[float, float]


@dataclass(slots=True, frozen=True)
class Listing:
    id: str
    price: float = 0.0
    lease_price: float = 0.0
    price_per_sqm: float = 0.0
    lease_price_per_sqm: float = 0.0
    lot_area: float = 0.0
    floor_area: float = 0.0
    type: str = PropertyType.UNKNOWN
    category: str = ""
    region: str = ""
    province: str = ""
    city: str = ""
    barangay: str = ""
    area: str = ""
    building: str = ""
    sale_type: str = ""
    is_direct: bool = False
    status_aq: str = "available"
    is_sponsored: bool = False
    lat: float = 0.0
    lng: float = 0.0
    summary: str = ""
    display_summary: str = ""
    facebook_link: str = ""
    photo_link: str = ""
    map_link: str = ""
    column_j: str = ""
    column_k: str = ""
    column_p: str = ""
    column_ae: str = ""  # category badge
    column_v: str = ""  # comments
    column_bc: str = ""
    column_bd: str = ""

    @property
    def is_available(self) -> bool:
        return self.status_aq.strip().lower() == "available"

    def sort_value(self, key: str) -> float:
        return {
            "price": self.price,
            "pricePerSqm": self.price_per_sqm,
            "lotArea": self.lot_area,
            "floorArea": self.floor_area,
        }[key]


@dataclass(slots=True)
class ParsedQuery:
    min_price: float | None = None
    max_price: float | None = None
    locations: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)

    @property
    def has_price_range(self) -> bool:
        return self.min_price is not None or self.max_price is not None


@dataclass(slots=True)
class ScoredListing:
    listing: Listing
    score: float  # -1 means hard-filtered out


@dataclass(slots=True, frozen=True)
class FilterState:
    sale_type: str | None = None
    category: str | None = None
    region: str | None = None
    province: str | None = None
    city: str | None = None
    barangay: str | None = None
    direct_only: bool = False
    available_only: bool = False
    price_range: Range | None = None
    price_per_sqm_range: Range | None = None
    lot_area_range: Range | None = None
    floor_area_range: Range | None = None

    def __post_init__(self) -> None:
        if self.sale_type is not None and self.sale_type not in SALE_TYPES:
            raise ValueError(f"Unknown sale_type={self.sale_type!r}; expected one of {SALE_TYPES}")
        if self.category is not None and self.category.lower() not in CATEGORIES:
            raise ValueError(f"Unknown category={self.category!r}; expected one of {CATEGORIES}")


@dataclass(slots=True, frozen=True)
class SortState:
    key: str | None = None
    direction: str = "desc"

    def __post_init__(self) -> None:
        if self.key is not None and self.key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key={self.key!r}; expected one of {SORT_KEYS}")
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction={self.direction!r}")

    def toggle(self, key: str | None) -> SortState:
        """
        Header-click semantics: a new key starts descending, the same key flips direction,
        and None (relevance) keeps the current order.
        """
        if key is None or key == "relevance":
            return SortState()
        if key == self.key:
            return SortState(key=key, direction="asc" if self.direction == "desc" else "desc")
        return SortState(key=key, direction="desc")


@dataclass(slots=True, frozen=True)
class ViewState:
    query: str = ""
    min_score: float = 50
    filters: FilterState = field(default_factory=FilterState)
    sort: SortState = field(default_factory=SortState)
    page: int = 1

    def update(self, **changes: Any) -> ViewState:
        """
        Return a new state; any change besides the page number sends the user back to page 1.
        """
        if set(changes) - {"page"}:
            changes["page"] = 1
        return replace(self, **changes)


@dataclass(slots=True)
class GeographyOptions:
    regions: list[str] = field(default_factory=list)
    provinces: list[str] = field(default_factory=list)
    cities: list[str] = field(default_factory=list)
    barangays: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PageView:
    items: list[Listing]
    page: int
    total_pages: int
    total_count: int
    page_numbers: list[int | str] = field(default_factory=list)
    geography: GeographyOptions = field(default_factory=GeographyOptions)
    price_bounds: Range = (0.0, 0.0)
    price_per_sqm_bounds: Range = (0.0, 0.0)
    lot_area_bounds: Range = (0.0, 0.0)
    floor_area_bounds: Range = (0.0, 0.0)

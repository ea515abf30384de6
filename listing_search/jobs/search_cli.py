from __future__ import annotations

import argparse
import logging
from typing import Sequence

from listing_search.collectors.sheet.collector import SheetCollector
from listing_search.core.config import Settings
from listing_search.core.models import FilterState, Listing, PageView, SortState, ViewState
from listing_search.core.pipeline import recompute


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
LOGGER = logging.getLogger(__name__)


def build_state(args: argparse.Namespace, settings: Settings) -> ViewState:
    filters = FilterState(
        sale_type=args.sale_type,
        category=args.category,
        direct_only=args.direct,
        available_only=args.available,
        price_range=_range(args.min_price, args.max_price),
        price_per_sqm_range=_range(args.min_price_per_sqm, args.max_price_per_sqm),
        lot_area_range=_range(args.min_lot_area, args.max_lot_area),
        floor_area_range=_range(args.min_floor_area, args.max_floor_area),
        region=args.region,
        province=args.province,
        city=args.city,
        barangay=args.barangay,
    )
    sort = SortState(key=args.sort, direction=args.direction) if args.sort else SortState()
    min_score = args.min_score if args.min_score is not None else settings.min_score
    return ViewState(query=args.query or "", min_score=min_score, filters=filters, sort=sort, page=args.page)


def render(view: PageView) -> str:
    if view.total_pages == 0:
        return "No listings found."
    lines = [f"Page {view.page}/{view.total_pages} ({view.total_count} listings)"]
    for listing in view.items:
        lines.append(_render_listing(listing))
    if view.page_numbers:
        lines.append("Pages: " + " ".join(str(number) for number in view.page_numbers))
    return "\n".join(lines)


def run(argv: Sequence[str] | None = None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()
    if args.page_size:
        settings.page_size = args.page_size

    listings = SheetCollector(sheet_url=args.url or None).collect()
    if not listings:
        LOGGER.warning("No listings loaded; results will be empty.")
    view = recompute(listings, build_state(args, settings), settings=settings, with_sponsored=not args.no_sponsored)
    print(render(view))
    return 0


def _render_listing(listing: Listing) -> str:
    place = ", ".join(part for part in (listing.barangay, listing.city, listing.province) if part)
    price = f"P{listing.price:,.0f}" if listing.price else f"P{listing.lease_price:,.0f}/mo"
    flags = []
    if listing.is_sponsored:
        flags.append("SPONSORED")
    if not listing.is_available:
        flags.append(listing.status_aq.upper())
    suffix = f" [{' '.join(flags)}]" if flags else ""
    return f"{listing.id:<8} {listing.type:<7} {price:>16}  {place}{suffix}"


def _range(low: float | None, high: float | None) -> tuple[float, float] | None:
    if low is None and high is None:
        return None
    return (low or 0.0, high if high is not None else float("inf"))


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search and filter property listings.")
    parser.add_argument("query", nargs="?", default="", help='Free text, e.g. "Lot in Caloocan" or "condo under 10m".')
    parser.add_argument("--min-score", type=float, default=None, help="Relevance threshold (0 broad .. 100 exact).")
    parser.add_argument("--sale-type", choices=["sale", "lease", "sale_lease"], default=None)
    parser.add_argument("--category", choices=["residential", "commercial", "industrial", "agricultural"])
    parser.add_argument("--region")
    parser.add_argument("--province")
    parser.add_argument("--city")
    parser.add_argument("--barangay")
    parser.add_argument("--direct", action="store_true", help="Only listings without a broker.")
    parser.add_argument("--available", action="store_true", help="Hide sold, rented and unavailable listings.")
    parser.add_argument("--min-price", type=float)
    parser.add_argument("--max-price", type=float)
    parser.add_argument("--min-price-per-sqm", type=float)
    parser.add_argument("--max-price-per-sqm", type=float)
    parser.add_argument("--min-lot-area", type=float)
    parser.add_argument("--max-lot-area", type=float)
    parser.add_argument("--min-floor-area", type=float)
    parser.add_argument("--max-floor-area", type=float)
    parser.add_argument("--sort", choices=["price", "pricePerSqm", "lotArea", "floorArea"])
    parser.add_argument("--direction", choices=["asc", "desc"], default="desc")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--page-size", type=int, default=None)
    parser.add_argument("--url", help="Override LISTINGS_SHEET_URL.")
    parser.add_argument("--no-sponsored", action="store_true", help="Do not inject sponsored listings.")
    return parser


if __name__ == "__main__":
    raise SystemExit(run())

from __future__ import annotations

import logging
from typing import Sequence

from listing_search.core.config import DEFAULT_PRICE_BAND
from listing_search.core.models import Listing, ScoredListing
from listing_search.core.query_parser import parse_query, query_tokens
from listing_search.core.scoring import EXCLUDED, score_listing


LOGGER = logging.getLogger(__name__)


def search_listings(
    listings: Sequence[Listing],
    query: str | None,
    min_score: float = 0,
    price_band: float = DEFAULT_PRICE_BAND,
) -> list[Listing]:
    """
    Rank listings against a free-text query.

    Keeps listings scoring at least min_score, highest first; equal scores keep their input order.
    """
    return [item.listing for item in score_listings(listings, query, min_score, price_band=price_band)]


def score_listings(
    listings: Sequence[Listing],
    query: str | None,
    min_score: float = 0,
    price_band: float = DEFAULT_PRICE_BAND,
) -> list[ScoredListing]:
    criteria = parse_query(query, price_band=price_band)
    clean_query = (query or "").lower().strip()
    tokens = query_tokens(clean_query)
    LOGGER.debug("Search criteria=%s min_score=%s total=%s tokens=%s", criteria, min_score, len(listings), tokens)

    scored: list[ScoredListing] = []
    for listing in listings:
        try:
            score = score_listing(listing, criteria, clean_query, tokens)
        except Exception:  # noqa: BLE001
            LOGGER.exception("Scoring failed for listing id=%s", getattr(listing, "id", None))
            score = EXCLUDED
        scored.append(ScoredListing(listing=listing, score=score))

    # sorted() is stable, so ties stay in listing order.
    results = sorted(
        (item for item in scored if item.score >= min_score and item.score != EXCLUDED),
        key=lambda item: item.score,
        reverse=True,
    )
    LOGGER.debug("Search results=%s", len(results))
    return results


def find_id_match(listings: Sequence[Listing], query: str | None) -> Listing | None:
    """Listing whose id equals the trimmed, uppercased query, if any."""
    needle = (query or "").strip().upper()
    if not needle:
        return None
    for listing in listings:
        if listing.id.strip().upper() == needle:
            return listing
    return None

from __future__ import annotations

from listing_search.core.models import Listing, ParsedQuery


EXCLUDED = -1
EXACT_PHRASE_BONUS = 100
TOKEN_MATCH_POINTS = 15
ALL_TOKENS_BONUS = 35
LOCATION_MATCH_POINTS = 20


def passes_hard_filters(listing: Listing, criteria: ParsedQuery) -> bool:
    if criteria.min_price is not None and listing.price < criteria.min_price:
        return False
    if criteria.max_price is not None and listing.price > criteria.max_price:
        return False
    if criteria.types and listing.type not in criteria.types:
        return False
    return True


def listing_haystack(listing: Listing) -> str:
    return " ".join(
        [
            listing.city,
            listing.province,
            listing.barangay,
            listing.region,
            listing.area,
            listing.building,
            listing.summary,
            listing.column_j,
            listing.column_k,
            listing.column_p,
            listing.id,
        ]
    ).lower()


def location_haystack(listing: Listing) -> str:
    return " ".join([listing.city, listing.province, listing.barangay]).lower()


def score_listing(
    listing: Listing,
    criteria: ParsedQuery,
    clean_query: str,
    tokens: list[str] | None = None,
) -> float:
    """
    Relevance of one listing for a parsed query, or EXCLUDED when a hard filter fails.

    Exact phrase +100, +15 per matched token, +35 when every token matched,
    +20 per location token found in city/province/barangay.
    """
    if not passes_hard_filters(listing, criteria):
        return EXCLUDED

    query_tokens = criteria.keywords if tokens is None else tokens
    haystack = listing_haystack(listing)
    score = 0

    if clean_query in haystack:
        score += EXACT_PHRASE_BONUS

    matched = sum(1 for token in query_tokens if token in haystack)
    score += matched * TOKEN_MATCH_POINTS
    if query_tokens and matched == len(query_tokens):
        score += ALL_TOKENS_BONUS

    if criteria.locations:
        locations = location_haystack(listing)
        score += LOCATION_MATCH_POINTS * sum(1 for location in criteria.locations if location in locations)

    return score

"""
Rule-based parser turning a free-text property query into price bounds,
property-type hints, location tokens and keyword tokens.
"""
from __future__ import annotations

import re

from listing_search.core.config import DEFAULT_PRICE_BAND
from listing_search.core.models import ParsedQuery, PropertyType


# Word-boundary anchored so codes like G07463 never read as a price.
PRICE_REGEX = re.compile(r"\b(\d+(?:,\d{3})*(?:\.\d+)?)\s*(million|thousand|m|k)?\b")
PRICE_TOKEN_REGEX = re.compile(r"^\d+[mk]?$", re.IGNORECASE)
PUNCTUATION_REGEX = re.compile(r"[^\w]")

PRICE_FLOOR = 1000
UNIT_MULTIPLIERS = {
    "m": 1_000_000,
    "million": 1_000_000,
    "k": 1_000,
    "thousand": 1_000,
}

UNDER_KEYWORDS = ("under", "below")
OVER_KEYWORDS = ("over", "above")
PRICE_WORDS = UNDER_KEYWORDS + OVER_KEYWORDS

TYPE_KEYWORDS = {
    PropertyType.CONDO: ("condo", "unit"),
    PropertyType.LOT: ("lot", "land"),
}

STOP_WORDS = frozenset(
    {
        "in",
        "at",
        "near",
        "around",
        "with",
        "a",
        "an",
        "the",
        "for",
        "sale",
        "lease",
        "price",
        "seeking",
        "looking",
        "find",
        "me",
        "condo",
        "lot",
        "unit",
        *PRICE_WORDS,
    }
)


def extract_price_range(
    lowered_query: str,
    band: float = DEFAULT_PRICE_BAND,
) -> tuple[float | None, float | None]:
    match = PRICE_REGEX.search(lowered_query)
    if not match:
        return None, None

    number_text, unit = match.group(1), match.group(2)
    try:
        value = float(number_text.replace(",", ""))
    except ValueError:
        return None, None
    if unit:
        value *= UNIT_MULTIPLIERS[unit]

    # Small bare numbers ("2 br") are not prices.
    if value <= PRICE_FLOOR and not unit:
        return None, None

    if any(keyword in lowered_query for keyword in UNDER_KEYWORDS):
        return 0.0, value
    if any(keyword in lowered_query for keyword in OVER_KEYWORDS):
        return value, None
    return value * (1 - band), value * (1 + band)


def extract_types(lowered_query: str) -> list[str]:
    return [
        property_type
        for property_type, keywords in TYPE_KEYWORDS.items()
        if any(keyword in lowered_query for keyword in keywords)
    ]


def extract_locations(lowered_query: str) -> list[str]:
    locations: list[str] = []
    for word in lowered_query.split():
        clean = PUNCTUATION_REGEX.sub("", word)
        if not clean or clean in STOP_WORDS or clean[0].isdigit():
            continue
        locations.append(clean)
    return locations


def query_tokens(query: str | None) -> list[str]:
    """
    Tokens used for keyword scoring: whitespace split of the lowered query, at least two
    characters, without price-direction words or price-like numbers such as 10m, 5k or 100.
    """
    clean_query = (query or "").lower().strip()
    return [
        token
        for token in clean_query.split()
        if len(token) >= 2 and token not in PRICE_WORDS and not PRICE_TOKEN_REGEX.match(token)
    ]


def parse_query(query: str | None, price_band: float = DEFAULT_PRICE_BAND) -> ParsedQuery:
    lowered_query = (query or "").lower()
    min_price, max_price = extract_price_range(lowered_query, band=price_band)
    return ParsedQuery(
        min_price=min_price,
        max_price=max_price,
        locations=extract_locations(lowered_query),
        types=extract_types(lowered_query),
        keywords=query_tokens(lowered_query),
    )

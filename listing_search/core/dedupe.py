from __future__ import annotations

import logging
from typing import Iterable

from listing_search.core.models import Listing


LOGGER = logging.getLogger(__name__)


def dedupe_by_id(listings: Iterable[Listing]) -> list[Listing]:
    """
    Listing ids are override keys, so the first row for an id wins. Rows without an id are kept.
    """
    seen: set[str] = set()
    out: list[Listing] = []
    for listing in listings:
        key = listing.id.strip().upper()
        if key and key in seen:
            LOGGER.warning("Duplicate listing id=%s dropped", listing.id)
            continue
        if key:
            seen.add(key)
        out.append(listing)
    return out

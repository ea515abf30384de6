from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from listing_search.core.dedupe import dedupe_by_id
from listing_search.core.models import Listing


LOGGER = logging.getLogger(__name__)


class Collector(ABC):
    source_name: str
    fetch_attempts: int = 3
    retry_wait_seconds: float = 2.0

    @abstractmethod
    def fetch(self) -> list[Any]:
        """Fetch raw rows from source."""

    @abstractmethod
    def normalize(self, raw_item: Any) -> Listing | None:
        """Normalize one source row into a listing, or None to skip it."""

    def collect(self) -> list[Listing]:
        """
        Fetch and normalize the whole source once. Failures degrade to an empty list.
        """
        try:
            raw_items = self._fetch_with_retry()
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Collector fetch failed for %s: %s", self.source_name, exc)
            return []

        listings: list[Listing] = []
        for index, item in enumerate(raw_items):
            try:
                listing = self.normalize(item)
            except Exception:  # noqa: BLE001
                LOGGER.exception("Skipping malformed row source=%s index=%s", self.source_name, index)
                continue
            if listing is None:
                continue
            # Nothing without a sale or lease price is shown.
            if listing.price > 0 or listing.lease_price > 0:
                listings.append(listing)

        listings = dedupe_by_id(listings)
        LOGGER.info("Source=%s fetched=%s normalized=%s", self.source_name, len(raw_items), len(listings))
        return listings

    def _fetch_with_retry(self) -> list[Any]:
        last_error: Exception | None = None
        max_attempts = max(1, self.fetch_attempts)
        for attempt in range(1, max_attempts + 1):
            try:
                result = self.fetch()
                return result if isinstance(result, list) else []
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                if attempt >= max_attempts:
                    break
                wait_seconds = attempt * self.retry_wait_seconds
                LOGGER.warning(
                    "Collector retry source=%s attempt=%s/%s wait=%ss error=%s",
                    self.source_name,
                    attempt,
                    max_attempts,
                    wait_seconds,
                    exc,
                )
                time.sleep(wait_seconds)
        if last_error:
            raise last_error
        return []

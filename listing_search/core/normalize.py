from __future__ import annotations

import re
from typing import Any

from listing_search.core.models import PropertyType


NUMBER_NOISE_REGEX = re.compile(r"php|[p,\s]", re.IGNORECASE)
CATEGORY_LABELS = ("RESIDENTIAL", "COMMERCIAL", "INDUSTRIAL", "AGRICULTURAL")
STATUS_MARKERS = ("SOLD", "RENTED", "NOT AVAILABLE")
TRUTHY_MARKERS = {"1", "y", "yes", "true", "sponsored"}


def parse_number(value: Any) -> float:
    """'P 4,200,000' -> 4200000.0; blanks and junk -> 0."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return max(0.0, float(value))
    cleaned = NUMBER_NOISE_REGEX.sub("", str(value))
    match = re.match(r"\d+(?:\.\d+)?", cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def derive_sale_type(price: float, lease_price: float) -> str:
    if price > 0 and lease_price > 0:
        return "SALE/LEASE"
    if price > 0:
        return "FOR SALE"
    if lease_price > 0:
        return "FOR LEASE"
    return ""


def infer_property_type(lot_area: float, floor_area: float) -> str:
    if not lot_area:
        return PropertyType.CONDO
    if not floor_area:
        return PropertyType.LOT
    return PropertyType.UNKNOWN


def derive_category(flags: list[str]) -> str:
    return ", ".join(label for label, flag in zip(CATEGORY_LABELS, flags) if (flag or "").strip())


def detect_status(status: str, summary: str, comments: str) -> str:
    """
    A blank or 'available' status is overridden when the free text says the property is gone.
    """
    resolved = (status or "").strip()
    if resolved and resolved.lower() != "available":
        return resolved
    combined = f"{summary or ''} {comments or ''}".upper()
    for marker in STATUS_MARKERS:
        if marker in combined:
            return marker
    return resolved or "available"


def display_summary(raw_summary: str) -> str:
    # First non-empty line is the listing code; a trailing line after the description is a photo link.
    lines = [line.strip() for line in (raw_summary or "").strip().splitlines()]
    non_empty = [idx for idx, line in enumerate(lines) if line]
    if len(non_empty) < 2:
        return ""
    if len(non_empty) == 2:
        return lines[non_empty[1]]
    return "\n".join(lines[non_empty[0] + 1 : non_empty[-1]]).strip()


def parse_coordinates(raw: str) -> tuple[float, float]:
    if not raw or "," not in raw:
        return 0.0, 0.0
    lat_text, lng_text = raw.split(",", 1)
    lat = _safe_float(lat_text)
    lng = _safe_float(lng_text)
    lat = lat if lat is not None and -90 <= lat <= 90 else 0.0
    lng = lng if lng is not None and -180 <= lng <= 180 else 0.0
    return lat, lng


def is_truthy_marker(value: Any) -> bool:
    return str(value or "").strip().lower() in TRUTHY_MARKERS


def _safe_float(value: Any) -> float | None:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None

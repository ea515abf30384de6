from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/1OYk_LGiLYb_ayGoVJ-tistDias2VdETdR60SP5ALBlo"
    "/export?format=csv&gid=628592557"
)
DEFAULT_PAGE_SIZE = 14
DEFAULT_MIN_SCORE = 50
DEFAULT_PRICE_BAND = 0.10
DEFAULT_TIMEZONE = "Asia/Manila"


@dataclass(slots=True)
class Settings:
    sheet_url: str = DEFAULT_SHEET_URL
    timeout_seconds: float = 20.0
    fetch_attempts: int = 3
    page_size: int = DEFAULT_PAGE_SIZE
    min_score: float = DEFAULT_MIN_SCORE
    price_band: float = DEFAULT_PRICE_BAND
    timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            sheet_url=os.environ.get("LISTINGS_SHEET_URL", "").strip() or DEFAULT_SHEET_URL,
            timeout_seconds=_env_float("LISTINGS_TIMEOUT_SECONDS", 20.0),
            fetch_attempts=max(1, _env_int("LISTINGS_FETCH_ATTEMPTS", 3)),
            page_size=max(1, _env_int("LISTINGS_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
            min_score=_env_float("LISTINGS_MIN_SCORE", DEFAULT_MIN_SCORE),
            price_band=min(1.0, max(0.0, _env_float("LISTINGS_PRICE_BAND", DEFAULT_PRICE_BAND))),
            timezone=os.environ.get("LISTINGS_TIMEZONE", "").strip() or DEFAULT_TIMEZONE,
        )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except (TypeError, ValueError):
        return default

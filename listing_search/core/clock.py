from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from listing_search.core.config import DEFAULT_TIMEZONE


def local_now(now_utc: datetime | None = None, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    current_utc = now_utc or datetime.now(timezone.utc)
    if current_utc.tzinfo is None:
        current_utc = current_utc.replace(tzinfo=timezone.utc)
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        zone = ZoneInfo(DEFAULT_TIMEZONE)
    return current_utc.astimezone(zone)


def local_day_of_month(now_utc: datetime | None = None, tz_name: str = DEFAULT_TIMEZONE) -> int:
    """
    Day of month in the market time zone; drives the daily sponsored rotation.
    """
    return local_now(now_utc, tz_name).day

from __future__ import annotations

import csv
import io
from typing import Any

import httpx

from listing_search.collectors.base import Collector
from listing_search.core.config import Settings
from listing_search.core.models import Listing
from listing_search.core.normalize import (
    derive_category,
    derive_sale_type,
    detect_status,
    display_summary,
    infer_property_type,
    is_truthy_marker,
    parse_coordinates,
    parse_number,
)


# 0-based positions in the spreadsheet export.
COL_OWNER = 10
COL_FACEBOOK = 25
COL_SUMMARY = 26
COL_PHOTO = 27
COL_ID = 28
COL_MAP = 29
COL_REGION = 30
COL_PROVINCE = 31
COL_CITY = 32
COL_BARANGAY = 33
COL_AREA = 34
COL_BUILDING = 35
COL_CATEGORY_FLAGS = (36, 37, 38, 39)
COL_LOT_AREA = 40
COL_FLOOR_AREA = 41
COL_STATUS = 42
COL_CATEGORY_BADGE = 43
COL_PRICE = 44
COL_PRICE_PER_SQM = 45
COL_LEASE_PRICE = 46
COL_LEASE_PRICE_PER_SQM = 47
COL_COMMENTS = 48
COL_DIRECT = 50
COL_BC = 54
COL_BD = 55
COL_COORDINATES = 56
COL_SPONSORED = 57


class SheetCollector(Collector):
    source_name = "sheet"

    def __init__(
        self,
        sheet_url: str | None = None,
        timeout_seconds: float | None = None,
        fetch_attempts: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = Settings.from_env()
        self.sheet_url = sheet_url or settings.sheet_url
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.timeout_seconds
        self.fetch_attempts = fetch_attempts if fetch_attempts is not None else settings.fetch_attempts
        self.transport = transport

    def fetch(self) -> list[list[str]]:
        headers = {
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
                "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36"
            ),
            "Accept": "text/csv,text/plain;q=0.9,*/*;q=0.8",
        }
        with httpx.Client(
            timeout=self.timeout_seconds,
            follow_redirects=True,
            headers=headers,
            transport=self.transport,
        ) as client:
            response = client.get(self.sheet_url)
            response.raise_for_status()
            return parse_rows(response.text)

    def normalize(self, raw_item: list[str]) -> Listing | None:
        return row_to_listing(raw_item)


def parse_rows(csv_text: str) -> list[list[str]]:
    """Data rows of the export: header row dropped, blank rows skipped."""
    rows = list(csv.reader(io.StringIO(csv_text)))
    return [row for row in rows[1:] if any(cell.strip() for cell in row)]


def row_to_listing(row: list[str]) -> Listing | None:
    listing_id = _cell(row, COL_ID).strip()
    price = parse_number(_cell(row, COL_PRICE))
    lease_price = parse_number(_cell(row, COL_LEASE_PRICE))
    if price <= 0 and lease_price <= 0:
        return None

    raw_summary = _cell(row, COL_SUMMARY).strip()
    comments = _cell(row, COL_COMMENTS)
    lot_area = parse_number(_cell(row, COL_LOT_AREA))
    floor_area = parse_number(_cell(row, COL_FLOOR_AREA))
    lat, lng = parse_coordinates(_cell(row, COL_COORDINATES))

    return Listing(
        id=listing_id,
        price=price,
        lease_price=lease_price,
        price_per_sqm=parse_number(_cell(row, COL_PRICE_PER_SQM)),
        lease_price_per_sqm=parse_number(_cell(row, COL_LEASE_PRICE_PER_SQM)),
        lot_area=lot_area,
        floor_area=floor_area,
        type=infer_property_type(lot_area, floor_area),
        category=derive_category([_cell(row, index) for index in COL_CATEGORY_FLAGS]),
        region=_cell(row, COL_REGION).strip(),
        province=_cell(row, COL_PROVINCE).strip(),
        city=_cell(row, COL_CITY).strip(),
        barangay=_cell(row, COL_BARANGAY).strip(),
        area=_cell(row, COL_AREA).strip(),
        building=_cell(row, COL_BUILDING).strip(),
        sale_type=derive_sale_type(price, lease_price),
        is_direct="DIRECT" in _cell(row, COL_DIRECT).upper() or "DIRECT" in raw_summary.upper(),
        status_aq=detect_status(_cell(row, COL_STATUS), raw_summary, comments),
        is_sponsored=is_truthy_marker(_cell(row, COL_SPONSORED)),
        lat=lat,
        lng=lng,
        summary=f"{raw_summary}\n\n{comments}" if comments else raw_summary,
        display_summary=display_summary(raw_summary),
        facebook_link=_cell(row, COL_FACEBOOK).strip(),
        photo_link=_cell(row, COL_PHOTO).strip(),
        map_link=_cell(row, COL_MAP).strip(),
        column_k=_cell(row, COL_OWNER),
        column_ae=_cell(row, COL_CATEGORY_BADGE),
        column_v=comments,
        column_bc=_cell(row, COL_BC),
        column_bd=_cell(row, COL_BD),
    )


def _cell(row: list[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index])

import csv
import io

import httpx

from listing_search.collectors.sheet.collector import (
    COL_CATEGORY_FLAGS,
    COL_CITY,
    COL_COORDINATES,
    COL_DIRECT,
    COL_FACEBOOK,
    COL_FLOOR_AREA,
    COL_ID,
    COL_LEASE_PRICE,
    COL_LOT_AREA,
    COL_PRICE,
    COL_SPONSORED,
    COL_SUMMARY,
    SheetCollector,
    parse_rows,
    row_to_listing,
)
from listing_search.core.models import PropertyType


def _row(cells):
    row = [""] * 58
    for index, value in cells.items():
        row[index] = value
    return row


def _csv(rows):
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["header"] * 58)
    writer.writerows(rows)
    return buffer.getvalue()


def _lot_row(listing_id="G1", price="P 5,000,000", city="Caloocan"):
    return _row(
        {
            COL_ID: listing_id,
            COL_PRICE: price,
            COL_CITY: city,
            COL_LOT_AREA: "250",
            COL_SUMMARY: f"{listing_id}\nCorner lot\nhttps://photos",
            COL_CATEGORY_FLAGS[0]: "x",
            COL_COORDINATES: "14.65, 120.98",
            COL_FACEBOOK: "https://fb.com/p",
        }
    )


def test_row_to_listing_maps_columns():
    listing = row_to_listing(_lot_row())
    assert listing is not None
    assert listing.id == "G1"
    assert listing.price == 5_000_000
    assert listing.type == PropertyType.LOT
    assert listing.sale_type == "FOR SALE"
    assert listing.category == "RESIDENTIAL"
    assert listing.display_summary == "Corner lot"
    assert (listing.lat, listing.lng) == (14.65, 120.98)
    assert listing.facebook_link == "https://fb.com/p"
    assert listing.is_available
    assert not listing.is_sponsored


def test_row_to_listing_skips_rows_without_any_price():
    assert row_to_listing(_lot_row(price="")) is None


def test_row_to_listing_flags_direct_and_sponsored_and_short_rows():
    row = _row(
        {
            COL_ID: "G9",
            COL_LEASE_PRICE: "45,000",
            COL_FLOOR_AREA: "60",
            COL_DIRECT: "Direct owner",
            COL_SPONSORED: "Yes",
        }
    )
    listing = row_to_listing(row)
    assert listing.is_direct and listing.is_sponsored
    assert listing.type == PropertyType.CONDO
    assert listing.sale_type == "FOR LEASE"
    assert row_to_listing(["only", "three", "cells"]) is None


def test_parse_rows_skips_header_and_blank_rows():
    text = _csv([_lot_row(), [""] * 58, _lot_row("G2")])
    rows = parse_rows(text)
    assert [row[COL_ID] for row in rows] == ["G1", "G2"]


def test_collect_fetches_normalizes_and_dedupes():
    body = _csv([_lot_row("G1"), _lot_row("G2", price=""), _lot_row("G1", city="Makati"), _lot_row("G3")])

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "sheet.example"
        return httpx.Response(200, text=body)

    collector = SheetCollector(sheet_url="https://sheet.example/export?format=csv", transport=httpx.MockTransport(handler))
    listings = collector.collect()
    assert [listing.id for listing in listings] == ["G1", "G3"]
    assert listings[0].city == "Caloocan"


def test_collect_degrades_to_empty_on_http_error():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503)

    collector = SheetCollector(
        sheet_url="https://sheet.example/export",
        fetch_attempts=2,
        transport=httpx.MockTransport(handler),
    )
    collector.retry_wait_seconds = 0
    assert collector.collect() == []
    assert len(calls) == 2


def test_collect_degrades_to_empty_on_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    collector = SheetCollector(
        sheet_url="https://sheet.example/export",
        fetch_attempts=1,
        transport=httpx.MockTransport(handler),
    )
    assert collector.collect() == []

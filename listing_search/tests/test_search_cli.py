import httpx

from listing_search.collectors.sheet import collector as sheet_collector
from listing_search.jobs import search_cli
from listing_search.core.models import Listing


def test_run_prints_page(monkeypatch, capsys):
    listings = [
        Listing(id="G1", city="Caloocan", price=5_000_000, lot_area=200, type="Lot"),
        Listing(id="G2", city="Makati", price=9_500_000, type="Condo"),
    ]
    monkeypatch.setattr(sheet_collector.SheetCollector, "collect", lambda self: listings)

    assert search_cli.run(["Lot in Caloocan", "--min-score", "0", "--no-sponsored"]) == 0
    out = capsys.readouterr().out
    assert "Page 1/1 (1 listings)" in out
    assert "G1" in out and "G2" not in out


def test_run_survives_empty_source(monkeypatch, capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    monkeypatch.setenv("LISTINGS_FETCH_ATTEMPTS", "1")
    real_init = sheet_collector.SheetCollector.__init__

    def offline_init(self, sheet_url=None, **kwargs):
        real_init(self, sheet_url="https://sheet.example/export", transport=httpx.MockTransport(handler))

    monkeypatch.setattr(sheet_collector.SheetCollector, "__init__", offline_init)
    assert search_cli.run(["condo"]) == 0
    assert "No listings found." in capsys.readouterr().out


def test_price_per_sqm_options_reach_filter_state():
    args = search_cli._parser().parse_args(["--min-price-per-sqm", "50000", "--max-price-per-sqm", "90000"])
    state = search_cli.build_state(args, search_cli.Settings())
    assert state.filters.price_per_sqm_range == (50_000, 90_000)

    args = search_cli._parser().parse_args(["--max-price-per-sqm", "90000"])
    assert search_cli.build_state(args, search_cli.Settings()).filters.price_per_sqm_range == (0.0, 90_000)
    assert search_cli.build_state(search_cli._parser().parse_args([]), search_cli.Settings()).filters.price_per_sqm_range is None

from listing_search.core.models import Listing
from listing_search.core.sponsored import inject_sponsored, pick_sponsored, sponsored_pool


def test_pool_only_has_available_sponsored_listings():
    listings = [
        Listing(id="s1", is_sponsored=True),
        Listing(id="s2", is_sponsored=True, status_aq="SOLD"),
        Listing(id="n1"),
    ]
    assert [listing.id for listing in sponsored_pool(listings)] == ["s1"]


def test_pick_prefers_same_city_then_region_then_pool():
    pool = [
        Listing(id="s-cebu", city="Cebu City", region="VII", is_sponsored=True),
        Listing(id="s-pasig", city="Pasig", region="NCR", is_sponsored=True),
        Listing(id="s-makati", city="Makati", region="NCR", is_sponsored=True),
    ]
    page = [Listing(id="p1", city="Makati", region="NCR")]
    assert pick_sponsored(pool, page, page=1, day_of_month=17).id == "s-makati"

    page = [Listing(id="p1", city="Taguig", region="NCR")]
    picks = {pick_sponsored(pool, page, page=n, day_of_month=1).id for n in range(1, 5)}
    assert picks == {"s-pasig", "s-makati"}

    page = [Listing(id="p1", city="Davao", region="XI")]
    assert pick_sponsored(pool, page, page=1, day_of_month=1).id == pool[2].id


def test_pick_is_stable_for_the_same_page_and_day():
    pool = [Listing(id=f"s{n}", is_sponsored=True) for n in range(5)]
    page = [Listing(id="p1")]
    first = pick_sponsored(pool, page, page=3, day_of_month=9)
    assert first.id == "s2"
    assert pick_sponsored(pool, page, page=3, day_of_month=9) is first
    assert pick_sponsored([], page, page=3, day_of_month=9) is None


def test_inject_never_places_sponsored_first():
    ad = Listing(id="ad")
    one = [Listing(id="a")]
    many = [Listing(id="a"), Listing(id="b"), Listing(id="c")]

    assert [x.id for x in inject_sponsored(one, ad)] == ["a", "ad"]
    assert [x.id for x in inject_sponsored(many, ad)] == ["a", "b", "ad", "c"]
    assert [x.id for x in inject_sponsored([ad, *many], ad)] == ["a", "b", "ad", "c"]
    assert [x.id for x in inject_sponsored([ad, one[0]], ad)] == ["a", "ad"]
    assert [x.id for x in inject_sponsored(many, None)] == ["a", "b", "c"]

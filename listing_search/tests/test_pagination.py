from listing_search.core.pagination import ELLIPSIS, page_numbers, paginate, total_pages


def test_paginate_boundary():
    items = list(range(15))
    first, page, pages = paginate(items, 1, page_size=14)
    assert (len(first), page, pages) == (14, 1, 2)
    second, page, pages = paginate(items, 2, page_size=14)
    assert (second, page, pages) == ([14], 2, 2)


def test_paginate_clamps_out_of_range_pages():
    items = list(range(5))
    assert paginate(items, 9, page_size=2) == ([4], 3, 3)
    assert paginate(items, 0, page_size=2) == ([0, 1], 1, 3)
    assert paginate([], 4, page_size=2) == ([], 1, 0)


def test_total_pages():
    assert total_pages(0, 14) == 0
    assert total_pages(14, 14) == 1
    assert total_pages(29, 14) == 3


def test_page_numbers_window():
    assert page_numbers(1, 1) == [1]
    assert page_numbers(1, 5) == [1, 2, 3, 4, 5]
    assert page_numbers(1, 10) == [1, 2, 3, ELLIPSIS, 10]
    assert page_numbers(6, 12) == [1, ELLIPSIS, 4, 5, 6, 7, 8, ELLIPSIS, 12]
    # A single hidden page is shown instead of an ellipsis.
    assert page_numbers(5, 10) == [1, 2, 3, 4, 5, 6, 7, ELLIPSIS, 10]
    assert page_numbers(1, 0) == []

"""
Tests for result set pagination.
"""

import pytest

from hotel_discovery.utils import paginate

ITEMS = list(range(20))


def test_first_page():
    page = paginate(ITEMS, 1, 5)
    assert page.items == (0, 1, 2, 3, 4)
    assert page.meta.total == 20
    assert page.meta.total_pages == 4
    assert page.meta.has_next_page is True
    assert page.meta.has_prev_page is False


def test_last_partial_page():
    page = paginate(ITEMS, 3, 8)
    assert page.items == (16, 17, 18, 19)
    assert page.meta.total_pages == 3
    assert page.meta.has_next_page is False
    assert page.meta.has_prev_page is True


def test_out_of_range_page_is_empty_not_an_error():
    page = paginate(ITEMS, 10, 5)
    assert page.items == ()
    assert page.meta.total == 20
    assert page.meta.page == 10
    assert page.meta.has_next_page is False


@pytest.mark.parametrize("bad_page, bad_limit", [(0, 5), (-3, 5), (1, 0), (1, -1)])
def test_invalid_page_and_limit_are_clamped(bad_page, bad_limit):
    page = paginate(ITEMS, bad_page, bad_limit)
    assert page.meta.page >= 1
    assert page.meta.limit >= 1
    assert page.items[0] == 0


def test_empty_result_set():
    page = paginate([], 1, 20)
    assert page.items == ()
    assert page.meta.total == 0
    assert page.meta.total_pages == 0
    assert page.meta.has_next_page is False


@pytest.mark.parametrize("limit", [1, 3, 7, 20, 25])
def test_pages_cover_the_set_exactly_once(limit):
    """Concatenating every page yields the original set."""
    first = paginate(ITEMS, 1, limit)
    collected = []
    for number in range(1, first.meta.total_pages + 1):
        collected.extend(paginate(ITEMS, number, limit).items)
    assert collected == ITEMS

"""
Tests for query fingerprints.
"""

from datetime import date

from hotel_discovery.entities import NEAREST, SearchParams
from hotel_discovery.utils import fingerprint


def test_fingerprint_is_deterministic(search_params):
    """Equal queries produce the same 32-char hex key."""
    key = fingerprint(search_params)
    assert key == fingerprint(SearchParams(**vars(search_params)))
    assert len(key) == 32
    int(key, 16)


def test_fingerprint_ignores_key_order_and_none_fields():
    """Mappings are canonicalized: order and None values do not matter."""
    first = {"lat": 1.5, "lng": 2.5, "guests": 2, "radius_meters": None}
    second = {"guests": 2, "lng": 2.5, "lat": 1.5}
    assert fingerprint(first) == fingerprint(second)


def test_fingerprint_matches_between_params_and_mapping(search_params):
    """A SearchParams and its query dict share a key."""
    assert fingerprint(search_params) == fingerprint(search_params.to_query_dict())


def test_fingerprint_discriminates_fields(search_params):
    """Changing any defined field changes the key."""
    base = fingerprint(search_params)
    variants = [
        SearchParams(**{**vars(search_params), "guests": 3}),
        SearchParams(**{**vars(search_params), "lat": 40.7129}),
        SearchParams(**{**vars(search_params), "checkout": date(2026, 3, 13)}),
        SearchParams(**{**vars(search_params), "sort": "rating"}),
        SearchParams(**{**vars(search_params), "kind": NEAREST}),
    ]
    keys = {fingerprint(variant) for variant in variants}
    assert base not in keys
    assert len(keys) == len(variants)


def test_query_dict_round_trip(search_params):
    """from_query_dict rebuilds the same params, dates included."""
    data = search_params.to_query_dict()
    assert data["checkin"] == "2026-03-10"
    assert "city_id" not in data
    assert SearchParams.from_query_dict(data) == search_params

"""Tests for the Google-backed location resolver."""

import pytest

from tourdesk.api.errors import InvalidCoordinateError
from tourdesk.api.geocoding import (
    GoogleLocationResolver,
    coordinate_from_event,
    describe_location,
)
from tourdesk.api.models import Coordinate


class FakeGoogleClient:
    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.calls = []

    def geocode(self, query, language=None):
        self.calls.append((query, language))
        if self.error:
            raise self.error
        return self.results


def _result(lat, lng, address):
    return {"formatted_address": address, "geometry": {"location": {"lat": lat, "lng": lng}}}


def test_search_returns_candidates_in_order():
    client = FakeGoogleClient([
        _result(-1.4061, 35.0117, "Maasai Mara, Kenya"),
        _result(-1.5, 35.1, "Mara North, Kenya"),
    ])
    resolver = GoogleLocationResolver(client=client, limit=5, language="en")

    candidates = resolver.search("  Maasai Mara ")

    assert [c.display_name for c in candidates] == ["Maasai Mara, Kenya", "Mara North, Kenya"]
    assert candidates[0].coordinate == Coordinate(-1.4061, 35.0117)
    assert client.calls == [("Maasai Mara", "en")]


def test_search_respects_limit():
    client = FakeGoogleClient([_result(i, i, f"Place {i}") for i in range(8)])

    candidates = GoogleLocationResolver(client=client, limit=3).search("place")

    assert len(candidates) == 3


def test_blank_query_makes_no_call():
    client = FakeGoogleClient([_result(0, 0, "x")])

    assert GoogleLocationResolver(client=client).search("   ") == []
    assert client.calls == []


def test_lookup_failure_returns_no_results():
    client = FakeGoogleClient(error=RuntimeError("quota exceeded"))

    assert GoogleLocationResolver(client=client).search("Nairobi") == []


def test_malformed_results_are_skipped():
    client = FakeGoogleClient([
        {"geometry": {}},
        _result(200, 0, "Nowhere"),
        {"geometry": {"location": {"lat": 1, "lng": 2}}},
    ])

    candidates = GoogleLocationResolver(client=client).search("somewhere")

    assert len(candidates) == 1
    assert candidates[0].display_name == "Lat: 1.000000, Lng: 2.000000"


def test_missing_api_key_returns_no_results(monkeypatch):
    import tourdesk.api.geocoding as geocoding

    monkeypatch.setattr(geocoding, "_gmaps", None)
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)

    assert GoogleLocationResolver().search("Nairobi") == []


def test_candidate_to_dict():
    client = FakeGoogleClient([_result(-1.2921, 36.8219, "Nairobi, Kenya")])

    (candidate,) = GoogleLocationResolver(client=client).search("Nairobi")

    assert candidate.to_dict() == {
        "latitude": -1.2921, "longitude": 36.8219, "display_name": "Nairobi, Kenya",
    }


@pytest.mark.parametrize(
    "event",
    [{"lat": -1.3, "lng": 36.9}, {"latitude": -1.3, "longitude": 36.9}],
)
def test_resolve_click_accepts_both_shapes(event):
    assert GoogleLocationResolver(client=FakeGoogleClient()).resolve_click(event) == Coordinate(-1.3, 36.9)


@pytest.mark.parametrize("event", [{"lat": 95, "lng": 0}, {}, "here"])
def test_resolve_click_rejects_bad_events(event):
    with pytest.raises(InvalidCoordinateError):
        coordinate_from_event(event)


def test_describe_location():
    coordinate = Coordinate(-1.2921, 36.8219)

    assert describe_location(coordinate, " Nairobi ") == "Nairobi"
    assert describe_location(coordinate) == "Lat: -1.292100, Lng: 36.821900"

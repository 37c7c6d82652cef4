"""tests/test_query.py – build_search_url / format_coordinate."""
import pytest

from geosearch.core.query import build_search_url, format_coordinate
from geosearch.models import LocationSnapshot

BASE = "https://photon.komoot.io/api"


class TestFormatCoordinate:
    @pytest.mark.parametrize("value,expected", [
        (38.89610, "38.8961"),
        (-77.03637, "-77.0364"),
        (38.896, "38.8960"),
        (-77.0223, "-77.0223"),
        (0, "0.0000"),
        (40.7128, "40.7128"),
        (-74.0060, "-74.0060"),
    ])
    def test_four_decimals(self, value, expected):
        assert format_coordinate(value) == expected


class TestBuildSearchUrl:
    def test_without_location(self):
        assert build_search_url("coffee", None, base_url=BASE, limit=0) == f"{BASE}?q=coffee"

    def test_with_location(self):
        loc = LocationSnapshot(latitude=38.896, longitude=-77.0223)
        url = build_search_url("foo", loc, base_url=BASE, limit=0)
        assert url == f"{BASE}?q=foo&lat=38.8960&lon=-77.0223"

    def test_text_is_percent_encoded(self):
        url = build_search_url("café & bar/1", None, base_url=BASE, limit=0)
        assert url == f"{BASE}?q=caf%C3%A9%20%26%20bar%2F1"

    def test_limit_only_when_positive(self):
        assert build_search_url("x", None, base_url=BASE, limit=7).endswith("?q=x&limit=7")

    def test_default_base_from_settings(self, monkeypatch):
        monkeypatch.setattr("geosearch.core.query.settings.GEOCODER_URL", "https://geo.local/api")
        monkeypatch.setattr("geosearch.core.query.settings.SEARCH_LIMIT", 0)
        assert build_search_url("x") == "https://geo.local/api?q=x"

"""tests/conftest.py – shared fixtures for all tests."""
import json
from dataclasses import dataclass
from typing import Callable, Optional

import pytest

from geosearch.core.connectivity import ConnectivityMonitor
from geosearch.core.location import LocationTracker
from geosearch.core.orchestrator import SearchOrchestrator
from geosearch.core.tokens import RequestToken
from geosearch.models import LocationSnapshot, POI, SearchMode


def make_feature(name="Cafe A", lon=-74.01, lat=40.71, **props) -> dict:
    return {
        "type": "Feature",
        "properties": {"name": name, **props},
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
    }


def make_body(*features) -> str:
    return json.dumps({"type": "FeatureCollection", "features": list(features)})


@dataclass
class FetchCall:
    url: str
    callback: Callable
    token: RequestToken

    def respond(self, status: int = 200, body: Optional[str] = None, error: Optional[Exception] = None) -> None:
        self.callback(status, body, error)
        self.token.mark_settled()


class FakeGeocodeClient:
    """Ghi lại mọi fetch(); test tự gọi callback khi muốn."""

    def __init__(self) -> None:
        self.calls: list[FetchCall] = []

    def fetch(self, url, callback) -> RequestToken:
        token = RequestToken()
        self.calls.append(FetchCall(url, callback, token))
        return token


class RecordingListener:
    is_caching_required = False

    def __init__(self, presenting_default: bool = False, telemetry_context: str = "test") -> None:
        self.events: list[tuple] = []
        self.is_presenting_default_results = presenting_default
        self.telemetry_context = telemetry_context

    def on_search_started(self) -> None:
        self.events.append(("started",))

    def on_results_updated(self, results, location) -> None:
        self.events.append(("results", results, location))

    def on_search_cancelled(self) -> None:
        self.events.append(("cancelled",))

    @property
    def kinds(self) -> list[str]:
        return [e[0] for e in self.events]

    @property
    def results_events(self) -> list[tuple]:
        return [e for e in self.events if e[0] == "results"]


@pytest.fixture
def fake_client() -> FakeGeocodeClient:
    return FakeGeocodeClient()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def tracker() -> LocationTracker:
    return LocationTracker()


@pytest.fixture
def connectivity() -> ConnectivityMonitor:
    return ConnectivityMonitor()


@pytest.fixture
def nyc() -> LocationSnapshot:
    return LocationSnapshot(latitude=40.7128, longitude=-74.0060)


@pytest.fixture
def make_orchestrator(fake_client, tracker, connectivity, listener):
    created: list[SearchOrchestrator] = []

    def _make(mode: SearchMode = SearchMode.COMPLETE) -> SearchOrchestrator:
        orch = SearchOrchestrator(
            fake_client, tracker, connectivity, listener=listener, mode=mode,
            base_url="https://photon.example/api",
        )
        created.append(orch)
        return orch

    yield _make
    for orch in created:
        orch.close()


@pytest.fixture
def cafe() -> POI:
    return POI(name="Cafe A", latitude=40.71, longitude=-74.01, address="")

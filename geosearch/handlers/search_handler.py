"""
handlers/search_handler.py – SearchHandler class.
Trách nhiệm: điều phối GET /search – một orchestrator COMPLETE mode cho mỗi request.
"""
import logging
from typing import Optional

from ..core.client import GeocodeClient
from ..core.connectivity import ConnectivityProvider
from ..core.location import LocationTracker
from ..core.orchestrator import SearchOrchestrator
from ..models import LocationSnapshot, POI, SearchMode, SearchResponse

logger = logging.getLogger(__name__)


class CollectingListener:
    """Listener giữ lại lần results_updated cuối cùng."""

    is_presenting_default_results = False
    is_caching_required = False

    def __init__(self, telemetry_context: str = "rest") -> None:
        self.telemetry_context = telemetry_context
        self.results: list[POI] = []
        self.location: Optional[LocationSnapshot] = None

    def on_search_started(self) -> None:
        pass

    def on_results_updated(self, results: list[POI], location: Optional[LocationSnapshot]) -> None:
        self.results = results
        self.location = location

    def on_search_cancelled(self) -> None:
        pass


class SearchHandler:
    """Xử lý /search endpoint."""

    def __init__(self, client: GeocodeClient, connectivity: ConnectivityProvider) -> None:
        self._client = client
        self._connectivity = connectivity

    async def handle(self, q: str, lat: Optional[float] = None, lon: Optional[float] = None) -> SearchResponse:
        if (lat is None) != (lon is None):
            raise ValueError("lat and lon must be given together")
        location = LocationSnapshot(latitude=lat, longitude=lon) if lat is not None else None

        listener = CollectingListener()
        orchestrator = SearchOrchestrator(
            self._client, LocationTracker(location), self._connectivity,
            listener=listener, mode=SearchMode.COMPLETE,
        )
        try:
            orchestrator.on_submit(q)
            token = orchestrator.current_token
            if token is not None:
                await token.wait()
        finally:
            orchestrator.close()

        logger.info("[Search] '%s' → %d result(s)", q[:40], len(listener.results))
        return SearchResponse(
            query=q, results=listener.results, total=len(listener.results), location=listener.location,
        )

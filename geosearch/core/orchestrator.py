"""
core/orchestrator.py – SearchOrchestrator class.
Trách nhiệm: biến text người dùng gõ thành request geocode, giữ tối đa 1 request
đang bay (request mới huỷ request cũ), gắn vị trí gần nhất và phát event cho listener.

Mọi method chạy trên cùng một thread (event loop). Không cần lock.
Lỗi transport, lỗi parse, offline, response cũ – đều bị bỏ qua im lặng;
listener chỉ thấy started / updated (N ≥ 0 kết quả) / cancelled.
"""
import logging
from typing import Optional, Protocol

from ..models import LocationSnapshot, POI, SearchMode, SearchResult
from .client import HTTP_OK, GeocodeClient
from .connectivity import ConnectivityProvider
from .location import LocationProvider
from .parser import parse_results
from .query import build_search_url
from .tokens import RequestToken

logger = logging.getLogger(__name__)


class SearchListener(Protocol):
    def on_search_started(self) -> None: ...

    def on_results_updated(self, results: list[POI], location: Optional[LocationSnapshot]) -> None: ...

    def on_search_cancelled(self) -> None: ...

    @property
    def is_presenting_default_results(self) -> bool: ...

    @property
    def telemetry_context(self) -> str: ...

    # True nếu kết quả được chọn sẽ được cache trên thiết bị
    @property
    def is_caching_required(self) -> bool: ...


class SearchOrchestrator:
    """Một instance cho mỗi phiên search (mỗi lần mở search surface)."""

    def __init__(
        self,
        client: GeocodeClient,
        location_provider: LocationProvider,
        connectivity: ConnectivityProvider,
        listener: Optional[SearchListener] = None,
        mode: SearchMode = SearchMode.PARTIAL,
        base_url: Optional[str] = None,
    ) -> None:
        self._client       = client
        self._locations    = location_provider
        self._connectivity = connectivity
        self.listener      = listener
        self.mode          = mode
        self._base_url     = base_url

        self._token: Optional[RequestToken] = None
        self._updating = False
        self._search_button_clicked = False
        self._closed = False

        self._location: Optional[LocationSnapshot] = location_provider.last_location
        location_provider.subscribe(self.on_location_updated)

    # ── State ──────────────────────────────────────────────────────────────────

    @property
    def location(self) -> Optional[LocationSnapshot]:
        return self._location

    @property
    def current_token(self) -> Optional[RequestToken]:
        return self._token

    @property
    def is_updating(self) -> bool:
        return self._updating

    @property
    def search_button_clicked(self) -> bool:
        return self._search_button_clicked

    # ── Public: Input events ───────────────────────────────────────────────────

    def on_input_changed(self, text: str) -> None:
        self._search_button_clicked = False
        if not text:
            self._updating = False
            self._emit_results([], None)
            return
        if self.mode == SearchMode.PARTIAL:
            self._partial_search(text)

    def on_submit(self, text: str) -> None:
        self._search_button_clicked = True
        if not text:
            return
        self.dispatch(text)

    def on_cancelled(self) -> None:
        # Không huỷ token: request chỉ bị thay thế bởi lần dispatch sau
        if self.listener is not None:
            self.listener.on_search_cancelled()

    def on_location_updated(self, snapshot: LocationSnapshot) -> None:
        self._location = snapshot

    # ── Public: Dispatch ───────────────────────────────────────────────────────

    def dispatch(self, text: str) -> None:
        """Full search: started → huỷ token cũ → (online?) → gửi request mới."""
        self._updating = True
        if self.listener is not None:
            self.listener.on_search_started()

        self._cancel_current()

        if not self._connectivity.is_online():
            logger.debug("Offline – search for %r not sent", text)
            return

        location = self._location
        url = build_search_url(text, location, base_url=self._base_url)
        logger.info("search.request_made context=%s", self._telemetry_context())

        issued: dict[str, RequestToken] = {}

        def _callback(status: int, body: Optional[str], error: Optional[Exception]) -> None:
            self._on_response(issued.get("token"), location, status, body, error)

        token = self._client.fetch(url, _callback)
        issued["token"] = token
        self._token = token

    # ── Public: Selection / teardown ───────────────────────────────────────────

    def select_result(self, poi: POI) -> SearchResult:
        if self.listener is not None and self.listener.is_presenting_default_results:
            logger.info("recent_entity_selected.search context=%s", self.listener.telemetry_context)
        return SearchResult(poi=poi)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._locations.unsubscribe(self.on_location_updated)
        self._cancel_current()

    # ── Private ────────────────────────────────────────────────────────────────

    def _partial_search(self, text: str) -> None:
        if not self._updating:
            self._updating = True
            if self.listener is not None:
                self.listener.on_search_started()

        if not self._connectivity.is_online():
            return

        logger.info("autosuggest.request_made context=%s", self._telemetry_context())
        self._cancel_current()
        # TODO: gửi autosuggest request ở đây khi có endpoint gợi ý riêng;
        # hiện tại chỉ tìm khi submit để giảm tải cho geocoder.

    def _on_response(
        self,
        token: Optional[RequestToken],
        location: Optional[LocationSnapshot],
        status: int,
        body: Optional[str],
        error: Optional[Exception],
    ) -> None:
        if error is not None or status != HTTP_OK:
            logger.debug("Search failed (status=%s, error=%s) – dropped", status, error)
            return
        if token is None or token is not self._token or token.cancelled:
            logger.debug("Stale response dropped")
            return
        self._token = None
        results = parse_results(body)
        self._updating = False
        self._emit_results(results, location)

    def _emit_results(self, results: list[POI], location: Optional[LocationSnapshot]) -> None:
        if self.listener is not None:
            self.listener.on_results_updated(results, location)

    def _cancel_current(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None

    def _telemetry_context(self) -> str:
        return self.listener.telemetry_context if self.listener is not None else ""

"""
deps.py – Dependency Injection: singleton service instances.
Khởi tạo 1 lần duy nhất khi server start.
"""
from .config import settings
from .core.client import PhotonClient
from .core.connectivity import ConnectivityMonitor, ConnectivityState
from .handlers.search_handler import SearchHandler
from .handlers.session_handler import SearchSessionHandler
from .models import SearchMode

# ── Core singletons ────────────────────────────────────────────────────────────

_client       = PhotonClient()
_connectivity = ConnectivityMonitor(
    ConnectivityState.OFFLINE if settings.START_OFFLINE else ConnectivityState.ONLINE
)

# ── Handler singletons ─────────────────────────────────────────────────────────

_search_h  = SearchHandler(_client, _connectivity)
_session_h = SearchSessionHandler(_client, _connectivity, SearchMode(settings.DEFAULT_SEARCH_MODE))


# ── Getters (dùng trong routes) ────────────────────────────────────────────────

def get_client()          -> PhotonClient:         return _client
def get_connectivity()    -> ConnectivityMonitor:  return _connectivity
def get_search_handler()  -> SearchHandler:        return _search_h
def get_session_handler() -> SearchSessionHandler: return _session_h

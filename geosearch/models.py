"""
models.py – Pydantic schemas: POI, LocationSnapshot, request/response, session events.
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal


class SearchMode(str, Enum):
    """PARTIAL: tìm khi đang gõ. COMPLETE: chỉ tìm khi submit."""
    PARTIAL  = "partial"
    COMPLETE = "complete"


# ── Domain Models ──────────────────────────────────────────────────────────────

class LocationSnapshot(BaseModel):
    """Vị trí (lat, lon) bất biến, chụp tại một thời điểm."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class POI(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    latitude: float
    longitude: float
    address: str = ""


class SearchResult(BaseModel):
    kind: Literal["entity"] = "entity"
    poi: POI


# ── Response Models ────────────────────────────────────────────────────────────

class SearchResponse(BaseModel):
    query: str
    results: List[POI]
    total: int
    location: Optional[LocationSnapshot] = None


# ── WebSocket Session ──────────────────────────────────────────────────────────

class SessionMessage(BaseModel):
    """Message client gửi lên /ws/search."""
    type: Literal["input", "submit", "cancel", "location", "mode", "select"]
    text: str = ""
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lon: Optional[float] = Field(default=None, ge=-180, le=180)
    mode: Optional[SearchMode] = None
    poi: Optional[POI] = None


class SessionEvent(BaseModel):
    """Event server đẩy xuống client, theo đúng thứ tự phát."""
    event: Literal["started", "results", "cancelled", "selected"]
    results: Optional[List[POI]] = None
    location: Optional[LocationSnapshot] = None
    result: Optional[SearchResult] = None

"""
handlers/session_handler.py – SearchSessionHandler class.
Trách nhiệm: WS /ws/search – mỗi kết nối là một phiên search với orchestrator riêng.

Event của orchestrator là callback đồng bộ; chúng được đẩy vào asyncio.Queue
và một task riêng gửi xuống WebSocket theo đúng thứ tự phát.
"""
import asyncio
import logging
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from ..core.client import GeocodeClient
from ..core.connectivity import ConnectivityProvider
from ..core.location import LocationTracker
from ..core.orchestrator import SearchOrchestrator
from ..models import LocationSnapshot, POI, SearchMode, SessionEvent, SessionMessage

logger = logging.getLogger(__name__)


class QueueListener:
    """Chuyển event của orchestrator thành SessionEvent trong queue."""

    is_caching_required = False

    def __init__(self, queue: asyncio.Queue, telemetry_context: str = "ws") -> None:
        self._queue = queue
        self.telemetry_context = telemetry_context
        self.is_presenting_default_results = True

    def on_search_started(self) -> None:
        self._queue.put_nowait(SessionEvent(event="started"))

    def on_results_updated(self, results: list[POI], location: Optional[LocationSnapshot]) -> None:
        # Chưa có text → đang hiển thị kết quả mặc định
        self.is_presenting_default_results = not results and location is None
        self._queue.put_nowait(SessionEvent(event="results", results=results, location=location))

    def on_search_cancelled(self) -> None:
        self._queue.put_nowait(SessionEvent(event="cancelled"))


class SearchSessionHandler:
    """Xử lý WS /ws/search – vòng lặp nhận message → orchestrator → event."""

    def __init__(
        self,
        client: GeocodeClient,
        connectivity: ConnectivityProvider,
        default_mode: SearchMode = SearchMode.PARTIAL,
    ) -> None:
        self._client = client
        self._connectivity = connectivity
        self._default_mode = default_mode

    async def handle_ws(self, websocket: WebSocket) -> None:
        await websocket.accept()
        queue: asyncio.Queue = asyncio.Queue()
        tracker = LocationTracker()
        orchestrator = SearchOrchestrator(
            self._client, tracker, self._connectivity,
            listener=QueueListener(queue), mode=self._default_mode,
        )
        sender = asyncio.create_task(self._pump(queue, websocket))
        try:
            while True:
                raw = await websocket.receive_text()
                try:
                    msg = SessionMessage.model_validate_json(raw)
                    self._apply(msg, orchestrator, tracker, queue)
                except (ValidationError, ValueError) as e:
                    queue.put_nowait({"error": str(e)})
        except WebSocketDisconnect:
            logger.info("Search session disconnected")
        except Exception as e:
            logger.error("Search session error: %s", e)
        finally:
            orchestrator.close()
            sender.cancel()
            await asyncio.gather(sender, return_exceptions=True)

    # ── Private helpers ────────────────────────────────────────────────────────

    @staticmethod
    def _apply(
        msg: SessionMessage,
        orchestrator: SearchOrchestrator,
        tracker: LocationTracker,
        queue: asyncio.Queue,
    ) -> None:
        if msg.type == "input":
            orchestrator.on_input_changed(msg.text)
        elif msg.type == "submit":
            orchestrator.on_submit(msg.text)
        elif msg.type == "cancel":
            orchestrator.on_cancelled()
        elif msg.type == "location":
            if msg.lat is None or msg.lon is None:
                raise ValueError("location message requires lat and lon")
            tracker.update(LocationSnapshot(latitude=msg.lat, longitude=msg.lon))
        elif msg.type == "mode":
            if msg.mode is None:
                raise ValueError("mode message requires mode")
            orchestrator.mode = msg.mode
        elif msg.type == "select":
            if msg.poi is None:
                raise ValueError("select message requires poi")
            queue.put_nowait(SessionEvent(event="selected", result=orchestrator.select_result(msg.poi)))

    @staticmethod
    async def _pump(queue: asyncio.Queue, ws: WebSocket) -> None:
        while True:
            item = await queue.get()
            payload = _event_payload(item) if isinstance(item, SessionEvent) else item
            try:
                await ws.send_json(payload)
            except Exception as e:
                logger.debug("Search session send failed: %s", e)
                return


def _event_payload(event: SessionEvent) -> dict:
    # Bỏ field None không được set; results có location=None vẫn giữ lại
    data = event.model_dump(mode="json")
    return {k: v for k, v in data.items() if v is not None or k in event.model_fields_set}

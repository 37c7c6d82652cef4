"""
core/client.py – PhotonClient class.
Trách nhiệm: gọi HTTP tới geocoder (httpx.AsyncClient), trả kết quả qua callback.

fetch() phải được gọi trên thread của event loop. Request chạy trong một
asyncio.Task nên callback luôn được gọi lại trên chính event loop đó.
"""
import asyncio
import logging
from typing import Callable, Optional, Protocol

import httpx

from ..config import settings
from .tokens import RequestToken

logger = logging.getLogger(__name__)

# (status, body, error) – status = 0 khi lỗi transport
FetchCallback = Callable[[int, Optional[str], Optional[Exception]], None]

HTTP_OK = 200


class GeocodeClient(Protocol):
    def fetch(self, url: str, callback: FetchCallback) -> RequestToken: ...


class PhotonClient:
    """Fire-and-forget GET; huỷ token = huỷ Task, callback sẽ không chạy."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.GEOCODER_TIMEOUT,
            headers={"User-Agent": user_agent or settings.GEOCODER_USER_AGENT},
            transport=transport,
        )

    # ── Public ─────────────────────────────────────────────────────────────────

    def fetch(self, url: str, callback: FetchCallback) -> RequestToken:
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run(url, callback))
        return RequestToken(task=task)

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Private ────────────────────────────────────────────────────────────────

    async def _run(self, url: str, callback: FetchCallback) -> None:
        try:
            resp = await self._http.get(url)
        except httpx.HTTPError as e:
            logger.warning("Geocoder request failed: %s", e)
            callback(0, None, e)
            return
        logger.debug("Geocoder %s → %d (%d bytes)", url, resp.status_code, len(resp.content))
        callback(resp.status_code, resp.text, None)

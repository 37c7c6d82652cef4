"""
core/tokens.py – RequestToken.
Handle huỷ cho đúng một request đang bay.
"""
import asyncio
from typing import Optional


class RequestToken:
    """Đại diện cho một request đang chạy.

    cancel() idempotent: gọi nhiều lần hoặc sau khi request đã xong đều là no-op.
    Transport không chạy bằng asyncio.Task thì tạo token không có task và tự gọi
    mark_settled() khi request kết thúc.
    """

    def __init__(self, task: Optional[asyncio.Task] = None) -> None:
        self._task = task
        self._cancelled = False
        self._settled = False

    # ── Public ─────────────────────────────────────────────────────────────────

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def settled(self) -> bool:
        if self._task is not None and self._task.done():
            return True
        return self._settled

    def cancel(self) -> None:
        if self._cancelled or self.settled:
            return
        self._cancelled = True
        if self._task is not None:
            self._task.cancel()

    def mark_settled(self) -> None:
        """Đánh dấu request đã xong – cho transport không có Task."""
        self._settled = True

    async def wait(self) -> None:
        """Chờ task kết thúc (xong, lỗi hoặc bị huỷ) – không raise CancelledError."""
        if self._task is None:
            return
        await asyncio.wait({self._task})

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "settled" if self.settled else "live"
        return f"<RequestToken {state} at {id(self):#x}>"

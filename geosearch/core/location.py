"""
core/location.py – LocationTracker.
Giữ vị trí mới nhất và phát cho các subscriber đã đăng ký tường minh.
Không tự theo dõi GPS – chỉ nhận update từ bên ngoài.
"""
import logging
from typing import Callable, Optional, Protocol

from ..models import LocationSnapshot

logger = logging.getLogger(__name__)

LocationListener = Callable[[LocationSnapshot], None]


class LocationProvider(Protocol):
    @property
    def last_location(self) -> Optional[LocationSnapshot]: ...

    def subscribe(self, listener: LocationListener) -> None: ...

    def unsubscribe(self, listener: LocationListener) -> None: ...


class LocationTracker:
    """Observer đơn giản: update() → gọi lần lượt từng listener."""

    def __init__(self, initial: Optional[LocationSnapshot] = None) -> None:
        self._last = initial
        self._listeners: list[LocationListener] = []

    @property
    def last_location(self) -> Optional[LocationSnapshot]:
        return self._last

    def subscribe(self, listener: LocationListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: LocationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def update(self, snapshot: LocationSnapshot) -> None:
        self._last = snapshot
        logger.debug("Location updated: %.4f, %.4f", snapshot.latitude, snapshot.longitude)
        for listener in list(self._listeners):
            listener(snapshot)

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

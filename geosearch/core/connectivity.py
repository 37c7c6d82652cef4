"""
core/connectivity.py – ConnectivityMonitor.
Trạng thái mạng tri-state, được hỏi đồng bộ trước mỗi lần dispatch.
"""
import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class ConnectivityState(str, Enum):
    ONLINE  = "online"
    OFFLINE = "offline"
    UNKNOWN = "unknown"


class ConnectivityProvider(Protocol):
    def is_online(self) -> bool: ...


class ConnectivityMonitor:
    def __init__(self, state: ConnectivityState = ConnectivityState.ONLINE) -> None:
        self._state = state

    @property
    def state(self) -> ConnectivityState:
        return self._state

    @state.setter
    def state(self, value: ConnectivityState) -> None:
        if value != self._state:
            logger.info("Connectivity: %s → %s", self._state.value, value.value)
        self._state = value

    def is_online(self) -> bool:
        # UNKNOWN được coi như offline
        return self._state == ConnectivityState.ONLINE

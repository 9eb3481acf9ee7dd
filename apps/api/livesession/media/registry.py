"""Session handle registry."""
from __future__ import annotations

import enum
import logging
from typing import Dict, Iterator

from .errors import UnsupportedClientError
from .sdk import STREAM_CREATED, EventHandler, RtcSdk, SdkSession, Stream

logger = logging.getLogger(__name__)


class ConnectionState(str, enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"


class SessionHandle:
    """One SDK session plus the state the coordinator tracks for it."""

    def __init__(self, session: SdkSession, session_id: str) -> None:
        self.session = session
        self.session_id = session_id
        self.state = ConnectionState.DISCONNECTED
        self.observers: set[str] = set()
        self.latest_stream: Stream | None = None
        self.observe("stream", STREAM_CREATED, self._on_stream_created)

    @property
    def is_connected(self) -> bool:
        return self.state in (ConnectionState.CONNECTED, ConnectionState.RECONNECTING)

    def observe(self, key: str, event: str, handler: EventHandler) -> bool:
        """Attach ``handler`` to ``event`` unless an observer named ``key`` is already attached."""

        if key in self.observers:
            return False
        self.session.on(event, handler)
        self.observers.add(key)
        return True

    def _on_stream_created(self, event) -> None:
        stream = getattr(event, "stream", event)
        self.latest_stream = stream
        logger.info("Stream %s created in session %s", getattr(stream, "stream_id", stream), self.session_id)


class SessionRegistry:
    """Create at most one :class:`SessionHandle` per session id and keep it for good.

    Handles are not evicted on disconnect; only their connection state changes.
    """

    def __init__(self, sdk: RtcSdk) -> None:
        self._sdk = sdk
        self._handles: Dict[str, SessionHandle] = {}

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._handles

    def __iter__(self) -> Iterator[SessionHandle]:
        return iter(list(self._handles.values()))

    def __len__(self) -> int:
        return len(self._handles)

    def get(self, session_id: str) -> SessionHandle | None:
        return self._handles.get(session_id)

    def get_or_create_session(self, session_id: str) -> SessionHandle:
        if not self._sdk.check_capability():
            raise UnsupportedClientError("The client does not support WebRTC.")

        handle = self._handles.get(session_id)
        if handle is not None:
            return handle

        handle = SessionHandle(self._sdk.init_session(session_id), session_id)
        self._handles[session_id] = handle
        logger.info("Created session handle for %s", session_id)
        return handle

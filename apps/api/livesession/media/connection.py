"""Connect and disconnect sessions."""
from __future__ import annotations

import logging

from .errors import SessionConnectionError
from .registry import ConnectionState, SessionHandle, SessionRegistry
from .sdk import SESSION_DISCONNECTED, SESSION_RECONNECTED, SESSION_RECONNECTING, SdkError
from .tokens import Role, TokenCache

logger = logging.getLogger(__name__)


class ConnectionController:
    """Drive the connection state of registry-owned session handles.

    Reconnection is left to the SDK; the observers attached here only record and log what
    the SDK reports.
    """

    def __init__(self, registry: SessionRegistry, tokens: TokenCache) -> None:
        self._registry = registry
        self._tokens = tokens

    async def connect(self, session_id: str, role: Role | str) -> bool:
        """Connect to ``session_id`` and return ``True`` once the provider accepts."""

        token = await self._tokens.get_token(session_id, role)
        handle = self._registry.get_or_create_session(session_id)

        if handle.is_connected:
            logger.info("Session %s is already %s", session_id, handle.state.value)
            return True

        handle.state = ConnectionState.CONNECTING
        try:
            await handle.session.connect(token.value)
        except SdkError as exc:
            handle.state = ConnectionState.DISCONNECTED
            logger.warning("Error connecting to session %s: %s %s", session_id, exc.name, exc.message)
            raise SessionConnectionError(exc.name, exc.message) from exc

        handle.state = ConnectionState.CONNECTED
        self._attach_observers(handle)
        logger.info("Connected to session %s as %s", session_id, token.role.value)
        return True

    def disconnect(self, session_id: str) -> SessionHandle | None:
        """Disconnect ``session_id``; the handle stays in the registry."""

        handle = self._registry.get(session_id)
        if handle is None:
            logger.debug("Disconnect requested for unknown session %s", session_id)
            return None

        handle.session.disconnect()
        handle.state = ConnectionState.DISCONNECTED
        logger.info("Disconnected from session %s", session_id)
        return handle

    def _attach_observers(self, handle: SessionHandle) -> None:
        session_id = handle.session_id

        def on_reconnecting(_event) -> None:
            handle.state = ConnectionState.RECONNECTING
            logger.info("Session %s reconnecting", session_id)

        def on_reconnected(_event) -> None:
            handle.state = ConnectionState.CONNECTED
            logger.info("Session %s reconnected", session_id)

        def on_disconnected(_event) -> None:
            handle.state = ConnectionState.DISCONNECTED
            logger.info("Session %s disconnected", session_id)

        handle.observe("reconnecting", SESSION_RECONNECTING, on_reconnecting)
        handle.observe("reconnected", SESSION_RECONNECTED, on_reconnected)
        handle.observe("disconnected", SESSION_DISCONNECTED, on_disconnected)

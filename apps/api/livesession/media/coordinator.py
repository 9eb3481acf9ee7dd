"""Session coordinator façade handed to the UI layer."""
from __future__ import annotations

import logging
from typing import Any

from ..core.config import Settings
from .connection import ConnectionController
from .devices import DeviceEnumerator
from .errors import CoordinatorClosedError
from .provisioning import ProvisioningClient
from .publisher import PublisherController
from .registry import SessionRegistry
from .sdk import Device, RtcSdk
from .subscriber import ResolutionQuality, SubscriberController
from .tokens import Role, TokenCache, TokenIssuer

logger = logging.getLogger(__name__)


class SessionCoordinator:
    """Own every piece of session and media state for one application session.

    Build one per application session, pass it to whatever needs it and call :meth:`close`
    (or leave the ``async with`` block) to tear everything down.
    """

    def __init__(self, sdk: RtcSdk, issuer: TokenIssuer) -> None:
        self.sdk = sdk
        self.issuer = issuer
        self.registry = SessionRegistry(sdk)
        self.tokens = TokenCache(issuer)
        self.devices = DeviceEnumerator(sdk)
        self.connection = ConnectionController(self.registry, self.tokens)
        self.publisher = PublisherController(sdk, self.registry, self.devices)
        self.subscriber = SubscriberController(self.registry)
        self._closed = False

    async def __aenter__(self) -> "SessionCoordinator":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def closed(self) -> bool:
        return self._closed

    async def connect(self, session_id: str, role: Role | str) -> bool:
        """Connect to ``session_id``; a connect that completes after :meth:`close` is undone."""

        self._ensure_open()
        connected = await self.connection.connect(session_id, role)
        if self._closed:
            self.connection.disconnect(session_id)
            raise CoordinatorClosedError(f"Coordinator closed while connecting to {session_id}.")
        return connected

    def disconnect(self, session_id: str) -> None:
        """Disconnect and destroy the publisher; a live subscriber is left alone."""

        self.connection.disconnect(session_id)
        self.publisher.destroy()

    async def start_publish(self, session_id: str, target: Any = None) -> None:
        self._ensure_open()
        await self.publisher.start_publish(session_id, target)
        if self._closed:
            self.publisher.destroy()
            raise CoordinatorClosedError(f"Coordinator closed while publishing to {session_id}.")

    def stop_publish(self, session_id: str) -> None:
        self.publisher.stop_publish(session_id)

    def start_subscribe(self, session_id: str, target: Any = None) -> None:
        self._ensure_open()
        self.subscriber.start_subscribe(session_id, target)

    def stop_subscribe(self, session_id: str) -> None:
        self.subscriber.stop_subscribe(session_id)

    async def switch_audio_input(self) -> Device | None:
        self._ensure_open()
        return await self.publisher.switch_audio_input()

    async def switch_video_input(self) -> Device | None:
        self._ensure_open()
        return await self.publisher.switch_video_input()

    def set_resolution_quality(self, level: ResolutionQuality | str) -> None:
        self._ensure_open()
        self.subscriber.set_resolution_quality(level)

    def close(self) -> None:
        """Release media objects and disconnect every connected session."""

        if self._closed:
            return
        self._closed = True

        if self.subscriber.session_id is not None:
            self.subscriber.stop_subscribe(self.subscriber.session_id)
        for handle in self.registry:
            if handle.is_connected:
                self.connection.disconnect(handle.session_id)
        self.publisher.destroy()
        self.tokens.clear()
        logger.info("Session coordinator closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise CoordinatorClosedError("Session coordinator is closed.")

    async def aclose(self) -> None:
        """Close the coordinator and the token issuer's HTTP resources."""

        self.close()
        aclose = getattr(self.issuer, "aclose", None)
        if aclose is not None:
            await aclose()


def create_coordinator(sdk: RtcSdk, config: Settings | None = None) -> SessionCoordinator:
    """Build a coordinator that fetches tokens from the provisioning API."""

    return SessionCoordinator(sdk, ProvisioningClient(config=config))

"""Remote stream subscription."""
from __future__ import annotations

import enum
import logging
from typing import Any

from .registry import SessionRegistry
from .sdk import (
    SUBSCRIBER_CONNECTED,
    SUBSCRIBER_DESTROYED,
    SUBSCRIBER_DISCONNECTED,
    SdkError,
    SdkSubscriber,
    SubscriberOptions,
)
from .slots import OwnedSlot

logger = logging.getLogger(__name__)


class ResolutionQuality(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


RESOLUTION_PRESETS: dict[ResolutionQuality, tuple[int, int]] = {
    ResolutionQuality.HIGH: (1920, 1080),
    ResolutionQuality.MEDIUM: (960, 540),
    ResolutionQuality.LOW: (480, 270),
}

DEFAULT_SUBSCRIBER_OPTIONS = SubscriberOptions(fit_mode="contain", show_controls=False)


class SubscriberController:
    """Own the single remote subscriber."""

    def __init__(self, registry: SessionRegistry, options: SubscriberOptions = DEFAULT_SUBSCRIBER_OPTIONS) -> None:
        self._registry = registry
        self._options = options
        self._slot: OwnedSlot[SdkSubscriber] = OwnedSlot("subscriber")
        self.resolution: tuple[int, int] | None = options.preferred_resolution
        self.session_id: str | None = None

    @property
    def subscriber(self) -> SdkSubscriber | None:
        return self._slot.get()

    def start_subscribe(self, session_id: str, target: Any = None) -> SdkSubscriber | None:
        """Subscribe to the latest stream announced in ``session_id``.

        Does nothing when the session has not announced a stream yet.
        """

        handle = self._registry.get(session_id)
        stream = handle.latest_stream if handle is not None else None
        if stream is None:
            logger.debug("No stream observed in session %s; not subscribing", session_id)
            return None

        existing = self._slot.get()
        if existing is not None:
            logger.debug("Already subscribed; ignoring start_subscribe for session %s", session_id)
            return existing

        try:
            subscriber = handle.session.subscribe(stream, target, self._options)
        except SdkError as exc:
            logger.error("Subscribing to stream %s failed: %s %s", stream.stream_id, exc.name, exc.message)
            return None

        stream_id = stream.stream_id
        subscriber.on(SUBSCRIBER_CONNECTED, lambda _event: logger.info("Subscriber connected to %s", stream_id))
        subscriber.on(SUBSCRIBER_DISCONNECTED, lambda _event: logger.info("Subscriber disconnected from %s", stream_id))
        subscriber.on(SUBSCRIBER_DESTROYED, lambda _event: logger.info("Subscriber for %s destroyed", stream_id))

        self.resolution = self._options.preferred_resolution
        self.session_id = session_id
        logger.info("Subscribed to stream %s in session %s", stream_id, session_id)
        return self._slot.install(subscriber)

    def stop_subscribe(self, session_id: str) -> None:
        """Unsubscribe and drop the subscriber reference."""

        if self._slot.get() is None:
            logger.debug("Nothing to unsubscribe in session %s", session_id)
            return
        if session_id != self.session_id:
            logger.warning("Subscriber belongs to session %s, not %s; keeping it", self.session_id, session_id)
            return

        handle = self._registry.get(session_id)
        subscriber = self._slot.release()
        self.session_id = None
        if handle is None:
            return
        try:
            handle.session.unsubscribe(subscriber)
        except SdkError as exc:
            logger.error("Unsubscribing in session %s failed: %s %s", session_id, exc.name, exc.message)
            return
        logger.info("Stopped subscribing in session %s", session_id)

    def set_resolution_quality(self, level: ResolutionQuality | str) -> tuple[int, int] | None:
        """Ask the live subscriber for the preset resolution of ``level``."""

        width, height = RESOLUTION_PRESETS[ResolutionQuality(level)]
        subscriber = self._slot.get()
        if subscriber is None:
            logger.debug("No active subscriber; ignoring resolution change to %s", level)
            return None

        subscriber.set_preferred_resolution(width, height)
        self.resolution = (width, height)
        logger.info("Requested %sx%s from subscriber", width, height)
        return self.resolution

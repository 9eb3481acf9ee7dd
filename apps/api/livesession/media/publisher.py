"""Local capture publishing."""
from __future__ import annotations

import logging
from typing import Any

from .devices import DeviceEnumerator
from .registry import SessionRegistry
from .sdk import Device, DeviceKind, PublisherOptions, RtcSdk, SdkError, SdkPublisher
from .slots import OwnedSlot

logger = logging.getLogger(__name__)

# Raw studio capture: full HD at 30 fps, 48 kHz stereo, browser audio processing off.
DEFAULT_PUBLISHER_OPTIONS = PublisherOptions(
    width=1920,
    height=1080,
    frame_rate=30,
    audio_sample_rate=48000,
    stereo=True,
    echo_cancellation=False,
    auto_gain_control=False,
    noise_suppression=False,
)


class PublisherController:
    """Own the single local publisher and route device switches to it."""

    def __init__(
        self,
        sdk: RtcSdk,
        registry: SessionRegistry,
        devices: DeviceEnumerator,
        options: PublisherOptions = DEFAULT_PUBLISHER_OPTIONS,
    ) -> None:
        self._sdk = sdk
        self._registry = registry
        self._devices = devices
        self._options = options
        self._slot: OwnedSlot[SdkPublisher] = OwnedSlot("publisher")
        self.audio_device_id: str | None = options.audio_source
        self.video_device_id: str | None = options.video_source

    @property
    def publisher(self) -> SdkPublisher | None:
        return self._slot.get()

    async def start_publish(self, session_id: str, target: Any = None) -> SdkPublisher | None:
        """Publish the local capture into ``session_id``.

        Provider errors are logged and ``None`` is returned; nothing is raised.
        """

        handle = self._registry.get_or_create_session(session_id)
        publisher = await self._ensure_publisher(target)
        if publisher is None:
            return None

        try:
            await handle.session.publish(publisher)
        except SdkError as exc:
            logger.error("Publishing to session %s failed: %s %s", session_id, exc.name, exc.message)
            return None

        logger.info("Publishing to session %s", session_id)
        return publisher

    def stop_publish(self, session_id: str) -> None:
        """Unpublish from ``session_id``; the publisher itself stays alive."""

        publisher = self._slot.get()
        handle = self._registry.get(session_id)
        if publisher is None or handle is None:
            logger.debug("Nothing to unpublish in session %s", session_id)
            return

        try:
            handle.session.unpublish(publisher)
        except SdkError as exc:
            logger.error("Unpublishing from session %s failed: %s %s", session_id, exc.name, exc.message)
            return
        logger.info("Stopped publishing to session %s", session_id)

    def destroy(self) -> bool:
        """Destroy the live publisher, if any."""

        publisher = self._slot.release()
        if publisher is None:
            return False

        publisher.destroy()
        self.audio_device_id = self._options.audio_source
        self.video_device_id = self._options.video_source
        logger.info("Destroyed publisher")
        return True

    async def switch_audio_input(self) -> Device | None:
        return await self._switch(DeviceKind.AUDIO_INPUT)

    async def switch_video_input(self) -> Device | None:
        return await self._switch(DeviceKind.VIDEO_INPUT)

    async def _switch(self, kind: DeviceKind) -> Device | None:
        publisher = self._slot.get()
        if publisher is None:
            logger.debug("No active publisher; ignoring %s switch", kind.value)
            return None

        device = await self._devices.next_device(kind)
        try:
            if kind is DeviceKind.AUDIO_INPUT:
                await publisher.set_audio_source(device.device_id)
                self.audio_device_id = device.device_id
            else:
                await publisher.set_video_source(device.device_id)
                self.video_device_id = device.device_id
        except SdkError as exc:
            logger.error("Switching %s to %s failed: %s %s", kind.value, device.device_id, exc.name, exc.message)
            return None

        logger.info("Switched %s to %s", kind.value, device.label or device.device_id)
        return device

    async def _ensure_publisher(self, target: Any) -> SdkPublisher | None:
        existing = self._slot.get()
        if existing is not None:
            return existing

        try:
            publisher = await self._sdk.init_publisher(target, self._options)
        except SdkError as exc:
            logger.error("Creating publisher failed: %s %s", exc.name, exc.message)
            return None

        # Another start_publish may have filled the slot while we were suspended.
        existing = self._slot.get()
        if existing is not None:
            publisher.destroy()
            return existing
        return self._slot.install(publisher)

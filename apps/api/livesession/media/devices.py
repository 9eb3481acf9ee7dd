"""Input device enumeration and rotation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

from .errors import CapabilityError, NoDeviceError
from .sdk import Device, DeviceKind, RtcSdk, SdkError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RotationCursor:
    """Position of the active device within the last enumerated list."""

    index: int = 0


class DeviceEnumerator:
    """Query the platform for input devices and step through them in order.

    The device list is fetched again on every call so hot-plugged devices are picked up. Cursor
    positions are not remapped when the list changes; the index is simply taken modulo the
    current length.
    """

    def __init__(self, sdk: RtcSdk) -> None:
        self._sdk = sdk
        self._cursors: Dict[DeviceKind, RotationCursor] = {kind: RotationCursor() for kind in DeviceKind}

    def cursor(self, kind: DeviceKind) -> RotationCursor:
        return self._cursors[kind]

    async def list_input_devices(self, kind: DeviceKind) -> list[Device]:
        """Return the live input devices of ``kind``."""

        try:
            devices = await self._sdk.enumerate_devices()
        except SdkError as exc:
            raise CapabilityError(f"Device enumeration failed: {exc.name} {exc.message}") from exc

        if not devices:
            raise CapabilityError("The platform reported no input devices.")

        return [device for device in devices if device.kind is kind]

    async def next_device(self, kind: DeviceKind, cursor: RotationCursor | None = None) -> Device:
        """Advance ``cursor`` (the enumerator's own one by default) and return that device."""

        cursor = cursor if cursor is not None else self._cursors[kind]
        devices = await self.list_input_devices(kind)
        if not devices:
            raise NoDeviceError(f"No {kind.value} devices available.")

        cursor.index = (cursor.index + 1) % len(devices)
        device = devices[cursor.index]
        logger.debug("Rotated %s to %s (%s/%s)", kind.value, device.device_id, cursor.index + 1, len(devices))
        return device

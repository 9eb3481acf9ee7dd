"""Capability contract of the real-time communication SDK.

The coordinator never talks to a concrete transport; it drives whatever object satisfies
:class:`RtcSdk`. Provider completions are awaitables and provider failures surface as
:class:`SdkError`, so callers never deal with nested callbacks.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Protocol

EventHandler = Callable[[Any], None]

STREAM_CREATED = "streamCreated"
SESSION_RECONNECTING = "sessionReconnecting"
SESSION_RECONNECTED = "sessionReconnected"
SESSION_DISCONNECTED = "sessionDisconnected"

SUBSCRIBER_CONNECTED = "connected"
SUBSCRIBER_DISCONNECTED = "disconnected"
SUBSCRIBER_DESTROYED = "destroyed"


class SdkError(Exception):
    """Error reported by the SDK through a completion."""

    def __init__(self, name: str, message: str = "") -> None:
        super().__init__(f"{name}: {message}" if message else name)
        self.name = name
        self.message = message


class DeviceKind(str, enum.Enum):
    AUDIO_INPUT = "audioInput"
    VIDEO_INPUT = "videoInput"


@dataclass(frozen=True, slots=True)
class Device:
    device_id: str
    kind: DeviceKind
    label: str = ""


@dataclass(frozen=True, slots=True)
class Stream:
    stream_id: str
    has_audio: bool = True
    has_video: bool = True
    name: str = ""


@dataclass(frozen=True, slots=True)
class StreamEvent:
    """Payload of a ``streamCreated`` event."""

    stream: Stream


@dataclass(frozen=True, slots=True)
class PublisherOptions:
    """Capture parameters for a local publisher."""

    width: int = 1920
    height: int = 1080
    frame_rate: int = 30
    audio_sample_rate: int = 48000
    stereo: bool = True
    echo_cancellation: bool = False
    auto_gain_control: bool = False
    noise_suppression: bool = False
    audio_source: str | None = None
    video_source: str | None = None

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True, slots=True)
class SubscriberOptions:
    """Rendering parameters for a remote subscription."""

    fit_mode: str = "contain"
    show_controls: bool = False
    preferred_resolution: tuple[int, int] | None = None


class SdkPublisher(Protocol):
    async def set_audio_source(self, device_id: str) -> None:
        ...

    async def set_video_source(self, device_id: str) -> None:
        ...

    def destroy(self) -> None:
        ...


class SdkSubscriber(Protocol):
    def on(self, event: str, handler: EventHandler) -> None:
        ...

    def set_preferred_resolution(self, width: int, height: int) -> None:
        ...


class SdkSession(Protocol):
    @property
    def session_id(self) -> str:
        ...

    def on(self, event: str, handler: EventHandler) -> None:
        ...

    async def connect(self, token: str) -> None:
        ...

    def disconnect(self) -> None:
        ...

    async def publish(self, publisher: SdkPublisher) -> None:
        ...

    def unpublish(self, publisher: SdkPublisher) -> None:
        ...

    def subscribe(self, stream: Stream, target: Any, options: SubscriberOptions) -> SdkSubscriber:
        ...

    def unsubscribe(self, subscriber: SdkSubscriber) -> None:
        ...


class RtcSdk(Protocol):
    """Entry points of the SDK used by the coordinator."""

    def check_capability(self) -> bool:
        ...

    def init_session(self, session_id: str) -> SdkSession:
        ...

    async def init_publisher(self, target: Any, options: PublisherOptions) -> SdkPublisher:
        ...

    async def enumerate_devices(self) -> list[Device]:
        ...

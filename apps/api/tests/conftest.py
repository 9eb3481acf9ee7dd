"""Shared in-process fakes for the RTC SDK and token issuer."""
from __future__ import annotations

import asyncio
from typing import Any

import pytest

from livesession.media import Device, DeviceKind, PublisherOptions, SdkError, SessionCoordinator, Stream, StreamEvent
from livesession.media.sdk import SubscriberOptions
from livesession.media.tokens import Role


class FakePublisher:
    def __init__(self, target: Any, options: PublisherOptions) -> None:
        self.target = target
        self.options = options
        self.audio_source = options.audio_source
        self.video_source = options.video_source
        self.destroyed = False
        self.source_error: SdkError | None = None

    async def set_audio_source(self, device_id: str) -> None:
        if self.source_error:
            raise self.source_error
        self.audio_source = device_id

    async def set_video_source(self, device_id: str) -> None:
        if self.source_error:
            raise self.source_error
        self.video_source = device_id

    def destroy(self) -> None:
        self.destroyed = True


class FakeSubscriber:
    def __init__(self, stream: Stream, target: Any, options: SubscriberOptions) -> None:
        self.stream = stream
        self.target = target
        self.options = options
        self.handlers: dict[str, list] = {}
        self.resolutions: list[tuple[int, int]] = []

    def on(self, event: str, handler) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def set_preferred_resolution(self, width: int, height: int) -> None:
        self.resolutions.append((width, height))


class FakeSession:
    def __init__(self, session_id: str) -> None:
        self._session_id = session_id
        self.handlers: dict[str, list] = {}
        self.tokens: list[str] = []
        self.disconnects = 0
        self.published: list[FakePublisher] = []
        self.unpublished: list[FakePublisher] = []
        self.subscribers: list[FakeSubscriber] = []
        self.unsubscribed: list[FakeSubscriber] = []
        self.connect_error: SdkError | None = None
        self.publish_error: SdkError | None = None
        self.subscribe_error: SdkError | None = None
        self.connect_gate: asyncio.Event | None = None

    @property
    def session_id(self) -> str:
        return self._session_id

    def on(self, event: str, handler) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        for handler in list(self.handlers.get(event, [])):
            handler(payload)

    def announce_stream(self, stream_id: str) -> Stream:
        stream = Stream(stream_id=stream_id)
        self.emit("streamCreated", StreamEvent(stream=stream))
        return stream

    async def connect(self, token: str) -> None:
        self.tokens.append(token)
        await asyncio.sleep(0)
        if self.connect_gate is not None:
            await self.connect_gate.wait()
        if self.connect_error:
            raise self.connect_error

    def disconnect(self) -> None:
        self.disconnects += 1

    async def publish(self, publisher: FakePublisher) -> None:
        await asyncio.sleep(0)
        if self.publish_error:
            raise self.publish_error
        self.published.append(publisher)

    def unpublish(self, publisher: FakePublisher) -> None:
        self.unpublished.append(publisher)

    def subscribe(self, stream: Stream, target: Any, options: SubscriberOptions) -> FakeSubscriber:
        if self.subscribe_error:
            raise self.subscribe_error
        subscriber = FakeSubscriber(stream, target, options)
        self.subscribers.append(subscriber)
        return subscriber

    def unsubscribe(self, subscriber: FakeSubscriber) -> None:
        self.unsubscribed.append(subscriber)


class FakeSdk:
    def __init__(self, devices: list[Device] | None = None) -> None:
        self.capable = True
        self.devices = list(devices or [])
        self.sessions: dict[str, FakeSession] = {}
        self.publishers: list[FakePublisher] = []
        self.enumerations = 0
        self.publisher_error: SdkError | None = None
        self.enumerate_error: SdkError | None = None

    def check_capability(self) -> bool:
        return self.capable

    def init_session(self, session_id: str) -> FakeSession:
        session = FakeSession(session_id)
        self.sessions[session_id] = session
        return session

    async def init_publisher(self, target: Any, options: PublisherOptions) -> FakePublisher:
        await asyncio.sleep(0)
        if self.publisher_error:
            raise self.publisher_error
        publisher = FakePublisher(target, options)
        self.publishers.append(publisher)
        return publisher

    async def enumerate_devices(self) -> list[Device]:
        self.enumerations += 1
        await asyncio.sleep(0)
        if self.enumerate_error:
            raise self.enumerate_error
        return list(self.devices)


class FakeIssuer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Role]] = []
        self.error: Exception | None = None
        self.value: str | None = None

    async def issue_token(self, session_id: str, role: Role) -> str:
        self.calls.append((session_id, role))
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        if self.value is not None:
            return self.value
        return f"token-{session_id}-{role.value}-{len(self.calls)}"


def make_devices() -> list[Device]:
    return [
        Device("mic-0", DeviceKind.AUDIO_INPUT, "Built-in Microphone"),
        Device("cam-0", DeviceKind.VIDEO_INPUT, "FaceTime HD Camera"),
        Device("mic-1", DeviceKind.AUDIO_INPUT, "USB Microphone"),
        Device("cam-1", DeviceKind.VIDEO_INPUT, "USB Camera"),
    ]


@pytest.fixture
def sdk() -> FakeSdk:
    return FakeSdk(devices=make_devices())


@pytest.fixture
def issuer() -> FakeIssuer:
    return FakeIssuer()


@pytest.fixture
def coordinator(sdk: FakeSdk, issuer: FakeIssuer) -> SessionCoordinator:
    return SessionCoordinator(sdk, issuer)

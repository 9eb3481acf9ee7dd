"""Client-side session and media lifecycle coordination."""
from .coordinator import SessionCoordinator, create_coordinator
from .devices import DeviceEnumerator, RotationCursor
from .errors import (
    CapabilityError,
    CoordinatorClosedError,
    NoDeviceError,
    RtcError,
    SessionConnectionError,
    SessionProvisioningError,
    SlotOccupiedError,
    TokenIssuanceError,
    UnsupportedClientError,
)
from .provisioning import ProvisioningClient
from .registry import ConnectionState, SessionHandle, SessionRegistry
from .sdk import Device, DeviceKind, PublisherOptions, RtcSdk, SdkError, Stream, StreamEvent, SubscriberOptions
from .subscriber import RESOLUTION_PRESETS, ResolutionQuality
from .tokens import Role, Token, TokenCache

__all__ = [
    "CapabilityError",
    "CoordinatorClosedError",
    "ConnectionState",
    "Device",
    "DeviceEnumerator",
    "DeviceKind",
    "NoDeviceError",
    "ProvisioningClient",
    "PublisherOptions",
    "RESOLUTION_PRESETS",
    "ResolutionQuality",
    "Role",
    "RotationCursor",
    "RtcError",
    "RtcSdk",
    "SdkError",
    "SessionConnectionError",
    "SessionCoordinator",
    "SessionHandle",
    "SessionProvisioningError",
    "SessionRegistry",
    "SlotOccupiedError",
    "Stream",
    "StreamEvent",
    "SubscriberOptions",
    "Token",
    "TokenCache",
    "TokenIssuanceError",
    "UnsupportedClientError",
    "create_coordinator",
]

"""Exceptions raised by the session coordinator."""
from __future__ import annotations


class RtcError(Exception):
    """Base exception for session coordinator errors."""


class UnsupportedClientError(RtcError):
    """Raised when the RTC SDK reports the platform cannot support its transport."""


class TokenIssuanceError(RtcError):
    """Raised when an access token could not be obtained from the issuer."""


class SessionProvisioningError(RtcError):
    """Raised when the provisioning endpoint fails to create a session."""


class SessionConnectionError(RtcError):
    """Raised when the provider rejects a connect request."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name
        self.message = message


class CapabilityError(RtcError):
    """Raised when the platform denies device enumeration or reports no devices."""


class NoDeviceError(CapabilityError):
    """Raised when no input device of the requested kind is available."""


class SlotOccupiedError(RtcError):
    """Raised when a media object is installed over a live one."""


class CoordinatorClosedError(RtcError):
    """Raised when an operation is started on a closed coordinator."""

"""Session provisioning and token signing.

Sessions are created in routed media mode with archiving enabled, and tokens are HS256 JWTs
carrying the session id and role, valid for one day by default.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from secrets import token_urlsafe

import jwt

from ..core.config import settings
from .session_store import ProvisionedSession, SessionStore, session_store

VALID_ROLES = ("publisher", "subscriber")


class ProvisioningError(RuntimeError):
    """Raised when a session or token cannot be provisioned."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


@dataclass(slots=True)
class SessionToken:
    token: str
    expires_in: int


async def create_session(store: SessionStore = session_store) -> ProvisionedSession:
    """Provision a new routed session."""

    session = ProvisionedSession(session_id=f"1_{token_urlsafe(24)}", media_mode="routed", archive_mode="always")
    store.save(session)
    return session


def generate_token(
    session_id: str,
    role: str,
    *,
    store: SessionStore = session_store,
    now: float | None = None,
) -> SessionToken:
    """Sign an access token for ``session_id`` in ``role``."""

    if role not in VALID_ROLES:
        raise ProvisioningError(f"{role} is not a valid role.", status_code=400)
    if not settings.ot_api_secret:
        raise ProvisioningError("Provider API secret missing")
    if store.get(session_id) is None:
        raise ProvisioningError(f"Session {session_id} does not exist.", status_code=404)

    issued_at = int(now if now is not None else time.time())
    expires_in = settings.token_ttl_seconds
    claims = {
        "iss": settings.ot_api_key,
        "sid": session_id,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + expires_in,
        "nonce": token_urlsafe(8),
    }
    token = jwt.encode(claims, settings.ot_api_secret, algorithm=settings.token_algorithm)
    return SessionToken(token=token, expires_in=expires_in)


def decode_token(token: str) -> dict:
    """Verify ``token`` and return its claims."""

    try:
        return jwt.decode(token, settings.ot_api_secret, algorithms=[settings.token_algorithm])
    except jwt.PyJWTError as exc:
        raise ProvisioningError(f"Invalid token: {exc}", status_code=401) from exc

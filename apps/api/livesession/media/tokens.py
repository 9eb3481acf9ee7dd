"""Per-session access token cache."""
from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Dict, Protocol

from .errors import TokenIssuanceError

logger = logging.getLogger(__name__)


class Role(str, enum.Enum):
    PUBLISHER = "publisher"
    SUBSCRIBER = "subscriber"


@dataclass(frozen=True, slots=True)
class Token:
    value: str
    session_id: str
    role: Role


class TokenIssuer(Protocol):
    async def issue_token(self, session_id: str, role: Role) -> str:
        ...


class TokenCache:
    """Fetch a token once per session identifier and reuse it afterwards.

    Tokens are keyed by session id alone: a later request with another role gets the token
    that was issued for the first role. Concurrent first requests for the same session share a
    single issuer call.
    """

    def __init__(self, issuer: TokenIssuer) -> None:
        self._issuer = issuer
        self._tokens: Dict[str, Token] = {}
        self._pending: Dict[str, asyncio.Task[Token]] = {}

    def cached(self, session_id: str) -> Token | None:
        return self._tokens.get(session_id)

    async def get_token(self, session_id: str, role: Role | str) -> Token:
        """Return the cached token for ``session_id`` or request one from the issuer."""

        try:
            role = Role(role)
        except ValueError as exc:
            raise TokenIssuanceError(f"{role} is not a valid role.") from exc

        cached = self._tokens.get(session_id)
        if cached is not None:
            if cached.role is not role:
                logger.debug(
                    "Reusing %s token for session %s requested as %s", cached.role.value, session_id, role.value
                )
            return cached

        pending = self._pending.get(session_id)
        if pending is None:
            pending = asyncio.create_task(self._fetch(session_id, role))
            self._pending[session_id] = pending
        try:
            return await asyncio.shield(pending)
        except asyncio.CancelledError:
            # The shared fetch was cancelled by clear(), not the caller.
            if pending.cancelled():
                raise TokenIssuanceError(f"Token request for session {session_id} was abandoned.") from None
            raise

    def clear(self) -> None:
        for task in self._pending.values():
            task.cancel()
        self._pending.clear()
        self._tokens.clear()

    async def _fetch(self, session_id: str, role: Role) -> Token:
        try:
            try:
                value = await self._issuer.issue_token(session_id, role)
            except TokenIssuanceError:
                raise
            except Exception as exc:  # noqa: BLE001
                raise TokenIssuanceError(f"Token request for session {session_id} failed: {exc}") from exc

            if not isinstance(value, str) or not value:
                raise TokenIssuanceError(f"Token issuer returned no token for session {session_id}.")

            token = Token(value=value, session_id=session_id, role=role)
            self._tokens[session_id] = token
            logger.info("Issued %s token for session %s", role.value, session_id)
            return token
        finally:
            self._pending.pop(session_id, None)

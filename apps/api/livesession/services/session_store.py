"""Provisioned sessions kept in process memory."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..core.config import settings


@dataclass(slots=True)
class ProvisionedSession:
    session_id: str
    media_mode: str = "routed"
    archive_mode: str = "always"
    last_used_at: float = field(default_factory=time.time)

    def expired(self, ttl_seconds: int, now: float) -> bool:
        return now - self.last_used_at > ttl_seconds


class SessionStore:
    """Provisioned sessions, forgotten once unused for longer than the TTL."""

    def __init__(self, ttl_seconds: int | None = None) -> None:
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.session_ttl_seconds
        self._sessions: Dict[str, ProvisionedSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str, *, now: float | None = None) -> Optional[ProvisionedSession]:
        """Return a live session and mark it as used."""

        now = time.time() if now is None else now
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.expired(self._ttl, now):
            del self._sessions[session_id]
            return None
        session.last_used_at = now
        return session

    def save(self, session: ProvisionedSession) -> None:
        now = time.time()
        self._sessions = {key: item for key, item in self._sessions.items() if not item.expired(self._ttl, now)}
        self._sessions[session.session_id] = session


session_store = SessionStore()

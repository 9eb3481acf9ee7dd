"""HTTP client for the session provisioning API."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.config import Settings, settings as default_settings
from .errors import SessionProvisioningError, TokenIssuanceError
from .tokens import Role

logger = logging.getLogger(__name__)


class ProvisioningClient:
    """Create sessions and fetch access tokens from the provisioning API.

    Implements the token issuer used by :class:`~livesession.media.tokens.TokenCache`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        config: Settings | None = None,
    ) -> None:
        self._config = config or default_settings
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient(
            base_url=base_url or self._config.api_base_url,
            timeout=httpx.Timeout(self._config.http_timeout_seconds),
        )

    async def __aenter__(self) -> "ProvisioningClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def create_session(self) -> str:
        """Ask the API for a new session id."""

        try:
            payload = await self._post(self._config.create_session_path, None)
        except (httpx.HTTPError, ValueError) as exc:
            raise SessionProvisioningError(f"Session request failed: {exc}") from exc

        session_id = payload.get("sessionId")
        if not isinstance(session_id, str) or not session_id:
            raise SessionProvisioningError(_error_message(payload, f"invalid sessionId {session_id}"))
        logger.info("Provisioned session %s", session_id)
        return session_id

    async def issue_token(self, session_id: str, role: Role) -> str:
        """Request a token for ``session_id`` in ``role``."""

        body = {"sessionId": session_id, "role": Role(role).value}
        try:
            payload = await self._post(self._config.generate_token_path, body)
        except (httpx.HTTPError, ValueError) as exc:
            raise TokenIssuanceError(f"Token request for session {session_id} failed: {exc}") from exc

        token = payload.get("token")
        if not isinstance(token, str) or not token:
            raise TokenIssuanceError(_error_message(payload, "token missing from response"))
        return token

    async def _post(self, path: str, body: dict[str, Any] | None) -> dict[str, Any]:
        response = await self._http.post(path, json=body)
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"unexpected payload from {path}")
        if response.is_error:
            logger.warning("Provisioning API %s answered %s", path, response.status_code)
        return payload


def _error_message(payload: dict[str, Any], fallback: str) -> str:
    error = payload.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return fallback

"""Tests for the session provisioning endpoints."""
from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from livesession.main import app
from livesession.services import provider


@pytest.fixture
def api_secret(monkeypatch):
    monkeypatch.setattr(provider.settings, "ot_api_key", "test-key")
    monkeypatch.setattr(provider.settings, "ot_api_secret", "test-secret")
    return "test-secret"


async def _create_session(client: AsyncClient) -> str:
    response = await client.post("/api/create-session")
    assert response.status_code == 200
    return response.json()["sessionId"]


@pytest.mark.asyncio
async def test_create_session_returns_session_id() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        session_id = await _create_session(client)

    assert isinstance(session_id, str) and session_id
    stored = provider.session_store.get(session_id)
    assert stored.media_mode == "routed"
    assert stored.archive_mode == "always"


@pytest.mark.asyncio
async def test_generate_token_signs_session_and_role(api_secret) -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        session_id = await _create_session(client)
        response = await client.post("/api/generate-token", json={"sessionId": session_id, "role": "publisher"})

    assert response.status_code == 200
    claims = provider.decode_token(response.json()["token"])
    assert claims["sid"] == session_id
    assert claims["role"] == "publisher"
    assert claims["iss"] == "test-key"
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


@pytest.mark.asyncio
async def test_generate_token_rejects_invalid_role(api_secret) -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        session_id = await _create_session(client)
        response = await client.post("/api/generate-token", json={"sessionId": session_id, "role": "admin"})

    assert response.status_code == 400
    assert response.json() == {"error": {"message": "admin is not a valid role."}}


@pytest.mark.asyncio
async def test_generate_token_rejects_non_string_session_id(api_secret) -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post("/api/generate-token", json={"sessionId": 123, "role": "publisher"})

    assert response.status_code == 400
    assert response.json() == {"error": {"message": "123 is not a string type."}}


@pytest.mark.asyncio
async def test_generate_token_for_unknown_session(api_secret) -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post("/api/generate-token", json={"sessionId": "missing", "role": "subscriber"})

    assert response.status_code == 404
    assert "missing" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_generate_token_without_secret(monkeypatch) -> None:
    monkeypatch.setattr(provider.settings, "ot_api_secret", "")
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        session_id = await _create_session(client)
        response = await client.post("/api/generate-token", json={"sessionId": session_id, "role": "publisher"})

    assert response.status_code == 500
    assert response.json()["error"]["message"] == "Provider API secret missing"


def test_session_store_forgets_idle_sessions() -> None:
    store = provider.SessionStore(ttl_seconds=60)
    session = provider.ProvisionedSession(session_id="s1", last_used_at=1_000.0)
    store.save(session)

    assert store.get("s1", now=1_050.0) is session
    assert session.last_used_at == 1_050.0
    assert store.get("s1", now=1_200.0) is None
    assert len(store) == 0


def test_generate_token_for_expired_session(api_secret) -> None:
    store = provider.SessionStore(ttl_seconds=60)
    store.save(provider.ProvisionedSession(session_id="stale", last_used_at=0.0))

    with pytest.raises(provider.ProvisioningError) as exc:
        provider.generate_token("stale", "publisher", store=store)

    assert exc.value.status_code == 404


def test_decode_token_rejects_tampered_token(api_secret) -> None:
    session = provider.ProvisionedSession(session_id="s1")
    provider.session_store.save(session)
    token = provider.generate_token("s1", "subscriber").token

    with pytest.raises(provider.ProvisioningError) as exc:
        provider.decode_token(token + "x")

    assert exc.value.status_code == 401

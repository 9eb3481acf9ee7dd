"""Session creation and token issuance endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter

from ..schemas.ot import CreateSessionResponse, ErrorResponse, GenerateTokenRequest, GenerateTokenResponse
from ..services import provider as provider_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/create-session",
    response_model=CreateSessionResponse,
    responses={500: {"model": ErrorResponse}},
)
async def create_session() -> CreateSessionResponse:
    """Provision a new session."""

    session = await provider_service.create_session()
    logger.info("Created session %s", session.session_id)
    return CreateSessionResponse(session_id=session.session_id)


@router.post(
    "/generate-token",
    response_model=GenerateTokenResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_token(payload: GenerateTokenRequest) -> GenerateTokenResponse:
    """Return an access token for the requested session and role."""

    token = provider_service.generate_token(payload.session_id, payload.role)
    return GenerateTokenResponse(token=token.token)

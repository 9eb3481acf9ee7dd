"""Data contracts for session provisioning endpoints."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateSessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", description="Provider session identifier")


class GenerateTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", description="Session to join")
    role: str = Field(..., description="Either publisher or subscriber")


class GenerateTokenResponse(BaseModel):
    token: str = Field(..., description="Signed access token for the session")


class APIError(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: APIError

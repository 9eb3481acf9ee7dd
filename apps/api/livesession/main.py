"""FastAPI application serving session provisioning for live sessions."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .core.config import settings
from .routers import ot as ot_router
from .services.provider import ProvisioningError

logger = logging.getLogger(__name__)

app = FastAPI(title="Live Session Provisioning API", version="0.1.0")

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(ot_router.router, prefix="/api", tags=["sessions"])


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"message": message}})


@app.exception_handler(ProvisioningError)
async def provisioning_error_handler(request: Request, exc: ProvisioningError) -> JSONResponse:
    """Render provisioning failures as ``{"error": {"message": ...}}``."""

    if exc.status_code >= 500:
        logger.error("Provisioning failed for %s: %s", request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid field in the same error envelope."""

    errors = exc.errors()
    if not errors:
        return _error_response(400, "Invalid request.")

    first = errors[0]
    location = first.get("loc") or ("body",)
    if first.get("type") == "string_type":
        message = f"{first.get('input')} is not a string type."
    else:
        message = f"{location[-1]}: {first.get('msg')}"
    return _error_response(400, message)


@app.get("/api/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Simple liveness check."""

    return {"status": "ok"}


@app.head("/api/health", tags=["meta"])
async def health_head() -> Response:
    """Allow HEAD for uptime monitors that only need the status code."""

    return Response(status_code=200)

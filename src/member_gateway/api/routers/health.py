"""
member_gateway.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness check (`/healthz`).
- Provide readiness check (`/readyz`): backend clients are open.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> dict[str, str]:
    # The gateway has no storage of its own; readiness means its clients are open.
    if getattr(request.app.state, "clients", None) is None:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Clients not ready")
    return {"status": "ready"}

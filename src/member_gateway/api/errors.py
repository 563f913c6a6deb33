"""
member_gateway.api.errors

Exception handlers translating gateway errors into HTTP responses.

Responsibilities:
- OwnershipViolation -> 403, UnknownUpdateStatus, VirtualSegmentWrite and InvalidDeviceQuery
  -> 400.
- FilterInUse -> 409.
- RemoteServiceFailure -> the backend's status when known, 502 otherwise.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_409_CONFLICT,
    HTTP_502_BAD_GATEWAY,
)

from member_gateway.errors import (
    FilterInUse,
    InvalidDeviceQuery,
    OwnershipViolation,
    RemoteServiceFailure,
    UnknownUpdateStatus,
    VirtualSegmentWrite,
)
from member_gateway.observability.logging import get_logger

log = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(OwnershipViolation)
    async def _ownership(_: Request, exc: OwnershipViolation) -> JSONResponse:
        return JSONResponse(status_code=HTTP_403_FORBIDDEN, content={"detail": str(exc)})

    @app.exception_handler(UnknownUpdateStatus)
    async def _unknown_status(_: Request, exc: UnknownUpdateStatus) -> JSONResponse:
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(VirtualSegmentWrite)
    async def _virtual_segment(_: Request, exc: VirtualSegmentWrite) -> JSONResponse:
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(InvalidDeviceQuery)
    async def _invalid_query(_: Request, exc: InvalidDeviceQuery) -> JSONResponse:
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(FilterInUse)
    async def _filter_in_use(_: Request, exc: FilterInUse) -> JSONResponse:
        return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(RemoteServiceFailure)
    async def _remote(_: Request, exc: RemoteServiceFailure) -> JSONResponse:
        status_code = exc.status_code or HTTP_502_BAD_GATEWAY
        log.warning(
            "remote_failure_surfaced",
            service=exc.service,
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.detail or str(exc), "service": exc.service},
        )

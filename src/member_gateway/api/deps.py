"""
member_gateway.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Resolve the calling user id set by the authenticating edge.
- Build request-scoped services on top of the shared backend clients (app.state).
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED

from member_gateway.observability.middleware import USER_ID_HEADER
from member_gateway.service_clients.registry import ServiceClients
from member_gateway.services.detail import DetailedUpdateAggregator
from member_gateway.services.devices import DeviceService
from member_gateway.services.filters import FilterService
from member_gateway.services.ownership import OwnershipValidator
from member_gateway.services.segments import SegmentService
from member_gateway.services.stats import SegmentStatsService
from member_gateway.services.updates import UpdateService
from member_gateway.services.versions import VersionService, VersionStatusClassifier
from member_gateway.settings import Settings


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def clients_from_app(request: Request) -> ServiceClients:
    # Opened once in the app lifespan (see `member_gateway.api.app.create_app`).
    return request.app.state.clients  # type: ignore[attr-defined]


def current_user_id(user_id: str | None = Header(default=None, alias=USER_ID_HEADER)) -> str:
    # Credentials are checked upstream; the gateway only receives the resolved user id.
    if not user_id:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing user id")
    return user_id


def ownership_validator(clients: ServiceClients = Depends(clients_from_app)) -> OwnershipValidator:
    return OwnershipValidator(
        devices=clients.devices, packages=clients.packages, updates=clients.updates
    )


def segment_service(
    clients: ServiceClients = Depends(clients_from_app),
    ownership: OwnershipValidator = Depends(ownership_validator),
) -> SegmentService:
    return SegmentService(devices=clients.devices, ownership=ownership)


def detail_aggregator(
    clients: ServiceClients = Depends(clients_from_app),
    segments: SegmentService = Depends(segment_service),
    settings: Settings = Depends(settings_from_app),
) -> DetailedUpdateAggregator:
    return DetailedUpdateAggregator(
        updates=clients.updates,
        packages=clients.packages,
        segments=segments,
        fanout_limit=settings.detail_fanout_limit,
    )


def update_service(
    clients: ServiceClients = Depends(clients_from_app),
    ownership: OwnershipValidator = Depends(ownership_validator),
    segments: SegmentService = Depends(segment_service),
    detail: DetailedUpdateAggregator = Depends(detail_aggregator),
) -> UpdateService:
    return UpdateService(
        updates=clients.updates, ownership=ownership, segments=segments, detail=detail
    )


def version_service(clients: ServiceClients = Depends(clients_from_app)) -> VersionService:
    classifier = VersionStatusClassifier(deployments=clients.deployments)
    return VersionService(components=clients.components, classifier=classifier)


def stats_service(
    clients: ServiceClients = Depends(clients_from_app),
    segments: SegmentService = Depends(segment_service),
) -> SegmentStatsService:
    return SegmentStatsService(
        segments=segments,
        updates=clients.updates,
        packages=clients.packages,
        devices=clients.devices,
    )


def filter_service(clients: ServiceClients = Depends(clients_from_app)) -> FilterService:
    return FilterService(devices=clients.devices, deployments=clients.deployments)


def device_service(clients: ServiceClients = Depends(clients_from_app)) -> DeviceService:
    return DeviceService(devices=clients.devices)


# --- Module Notes -----------------------------------------------------------
# Services are rebuilt per request; they hold only references to the shared clients.

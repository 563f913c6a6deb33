"""
member_gateway.api.routers.updates

Rollout update endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Query
from starlette.status import HTTP_201_CREATED

from member_gateway.api.deps import current_user_id, update_service
from member_gateway.api.pagination import page_payload, page_request
from member_gateway.models.page import PageRequest
from member_gateway.models.update import (
    DetailedUpdate,
    Update,
    UpdateStatus,
    UpdateStatusCompatibility,
)
from member_gateway.services.updates import UpdateService

router = APIRouter(prefix="/updates", tags=["updates"])


@router.get("")
async def list_updates(
    status: list[str] = Query(default=[]),
    page: PageRequest = Depends(page_request),
    user_id: str = Depends(current_user_id),
    svc: UpdateService = Depends(update_service),
) -> dict[str, Any]:
    # Both `status=a&status=b` and `status=a,b` are accepted.
    statuses = [
        UpdateStatus.from_name(name.strip())
        for raw in status
        for name in raw.split(",")
        if name.strip()
    ]
    result = await svc.list_updates(page=page, user_id=user_id, statuses=statuses)
    return page_payload(result)


@router.post("", status_code=HTTP_201_CREATED)
async def create_update(
    body: Update,
    user_id: str = Depends(current_user_id),
    svc: UpdateService = Depends(update_service),
) -> DetailedUpdate:
    return await svc.create(body.model_copy(update={"user_id": user_id}))


# Declared before `/{uuid}` so "status" is never read as an update id.
@router.get("/status")
async def get_status_compatibilities(
    svc: UpdateService = Depends(update_service),
) -> list[UpdateStatusCompatibility]:
    return await svc.status_compatibilities()


@router.get("/status/{status_name}")
async def get_status_compatibility(
    status_name: str,
    svc: UpdateService = Depends(update_service),
) -> UpdateStatusCompatibility:
    return await svc.status_compatibility(UpdateStatus.from_name(status_name))


@router.get("/{uuid}")
async def get_update(
    uuid: str,
    user_id: str = Depends(current_user_id),
    svc: UpdateService = Depends(update_service),
) -> DetailedUpdate:
    return await svc.get(uuid=uuid, user_id=user_id)


@router.put("/{uuid}")
async def edit_update(
    uuid: str,
    body: Update,
    user_id: str = Depends(current_user_id),
    svc: UpdateService = Depends(update_service),
) -> DetailedUpdate:
    return await svc.edit(body.model_copy(update={"user_id": user_id, "uuid": uuid}))


@router.put("/{uuid}/status/scheduled")
async def schedule_update(
    uuid: str,
    time: datetime = Query(...),
    user_id: str = Depends(current_user_id),
    svc: UpdateService = Depends(update_service),
) -> dict[str, str]:
    await svc.schedule_publication(uuid=uuid, scheduled_time=time, user_id=user_id)
    return {"status": UpdateStatus.scheduled.value}


@router.put("/{uuid}/status/{status_name}")
async def change_update_status(
    uuid: str,
    status_name: str,
    user_id: str = Depends(current_user_id),
    svc: UpdateService = Depends(update_service),
) -> dict[str, str]:
    status = UpdateStatus.from_name(status_name)
    await svc.change_status(uuid=uuid, status=status, user_id=user_id)
    return {"status": status.value}

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from member_gateway.api.deps import current_user_id, device_service
from member_gateway.api.pagination import page_payload, page_request
from member_gateway.models.page import PageRequest
from member_gateway.services.devices import DeviceService, parse_query

router = APIRouter(prefix="/devices", tags=["devices"])


@router.get("")
async def list_devices(
    query: str | None = Query(default=None),
    page: PageRequest = Depends(page_request),
    user_id: str = Depends(current_user_id),
    svc: DeviceService = Depends(device_service),
) -> dict[str, Any]:
    result = await svc.list_devices(user_id=user_id, page=page, query=parse_query(query))
    return page_payload(result)


@router.get("/{unit_id}")
async def get_device(
    unit_id: str,
    user_id: str = Depends(current_user_id),
    svc: DeviceService = Depends(device_service),
) -> dict[str, Any]:
    return await svc.get_device(user_id=user_id, unit_id=unit_id)

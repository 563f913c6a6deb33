"""
member_gateway.api.routers.segments

Segment endpoints, including the reserved `other` id.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from member_gateway.api.deps import current_user_id, segment_service, update_service
from member_gateway.api.pagination import page_payload, page_request
from member_gateway.models.page import PageRequest
from member_gateway.models.segment import Segment, SegmentsOrder
from member_gateway.services.segments import SegmentService
from member_gateway.services.updates import UpdateService

router = APIRouter(prefix="/segments", tags=["segments"])


@router.post("")
async def create_segment(
    body: Segment,
    user_id: str = Depends(current_user_id),
    svc: SegmentService = Depends(segment_service),
) -> Segment:
    return await svc.create_segment(user_id=user_id, segment=body)


@router.get("")
async def list_segments(
    page: PageRequest = Depends(page_request),
    user_id: str = Depends(current_user_id),
    svc: SegmentService = Depends(segment_service),
) -> dict[str, Any]:
    return page_payload(await svc.list_segments(user_id=user_id, page=page))


@router.get("/order")
async def get_ordered_segments(
    user_id: str = Depends(current_user_id),
    svc: SegmentService = Depends(segment_service),
) -> SegmentsOrder:
    return await svc.ordered_segments(user_id)


@router.post("/order")
async def update_segments_order(
    order: list[str] = Body(...),
    user_id: str = Depends(current_user_id),
    svc: SegmentService = Depends(segment_service),
) -> list[str]:
    return await svc.update_order(user_id=user_id, order=order)


@router.get("/{segment_id}")
async def get_segment(
    segment_id: str,
    user_id: str = Depends(current_user_id),
    svc: SegmentService = Depends(segment_service),
) -> Segment:
    return await svc.get_segment(user_id=user_id, segment_id=segment_id)


@router.put("/{segment_id}")
async def update_segment(
    segment_id: str,
    body: Segment,
    user_id: str = Depends(current_user_id),
    svc: SegmentService = Depends(segment_service),
) -> Segment:
    return await svc.update_segment(user_id=user_id, segment_id=segment_id, segment=body)


@router.get("/{segment_id}/devices")
async def get_segment_devices(
    segment_id: str,
    page: PageRequest = Depends(page_request),
    user_id: str = Depends(current_user_id),
    svc: SegmentService = Depends(segment_service),
) -> dict[str, Any]:
    result = await svc.devices_for_segment(user_id=user_id, segment_id=segment_id, page=page)
    return page_payload(result)


@router.get("/{segment_id}/updates")
async def get_segment_updates(
    segment_id: str,
    page: PageRequest = Depends(page_request),
    user_id: str = Depends(current_user_id),
    svc: UpdateService = Depends(update_service),
) -> dict[str, Any]:
    result = await svc.list_updates(page=page, user_id=user_id, segment_ids=[segment_id])
    return page_payload(result)

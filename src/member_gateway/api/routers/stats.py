from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from member_gateway.api.deps import current_user_id, stats_service
from member_gateway.models.stats import DataSet
from member_gateway.services.stats import SegmentStatsService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/devices/perSegmentId")
async def devices_per_segment(
    updated: bool = Query(default=False),
    user_id: str = Depends(current_user_id),
    svc: SegmentStatsService = Depends(stats_service),
) -> DataSet:
    # `updated=true` counts only devices already running their segment's latest update.
    if updated:
        return await svc.updated_devices_per_segment(user_id)
    return await svc.devices_per_segment(user_id)

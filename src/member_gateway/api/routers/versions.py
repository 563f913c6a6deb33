from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from member_gateway.api.deps import current_user_id, version_service
from member_gateway.api.pagination import page_payload, page_request
from member_gateway.models.page import PageRequest
from member_gateway.models.version import Version
from member_gateway.services.versions import VersionService

router = APIRouter(prefix="/packages/{package_ref}/versions", tags=["versions"])


@router.get("")
async def list_versions(
    package_ref: str,
    page: PageRequest = Depends(page_request),
    user_id: str = Depends(current_user_id),
    svc: VersionService = Depends(version_service),
) -> dict[str, Any]:
    result = await svc.get_versions(user_id=user_id, package_ref=package_ref, page=page)
    return page_payload(result)


@router.get("/{version_id}")
async def get_version(
    package_ref: str,
    version_id: str,
    user_id: str = Depends(current_user_id),
    svc: VersionService = Depends(version_service),
) -> Version:
    return await svc.get_version(user_id=user_id, package_ref=package_ref, version_id=version_id)

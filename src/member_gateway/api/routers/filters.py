"""
member_gateway.api.routers.filters

Named device filter endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from member_gateway.api.deps import current_user_id, filter_service
from member_gateway.api.pagination import page_payload, page_request
from member_gateway.models.filter import Filter
from member_gateway.models.page import PageRequest
from member_gateway.services.filters import FilterService

router = APIRouter(prefix="/filters", tags=["filters"])


@router.post("", status_code=HTTP_201_CREATED)
async def create_filter(
    body: Filter,
    user_id: str = Depends(current_user_id),
    svc: FilterService = Depends(filter_service),
) -> Filter:
    return await svc.create(user_id=user_id, filter_=body)


@router.get("")
async def list_filters(
    page: PageRequest = Depends(page_request),
    user_id: str = Depends(current_user_id),
    svc: FilterService = Depends(filter_service),
) -> dict[str, Any]:
    return page_payload(await svc.list_filters(user_id=user_id, page=page))


@router.get("/{name}")
async def get_filter(
    name: str,
    user_id: str = Depends(current_user_id),
    svc: FilterService = Depends(filter_service),
) -> Filter:
    return await svc.get(user_id=user_id, name=name)


@router.post("/{name}")
async def update_filter(
    name: str,
    query: dict[str, Any] = Body(...),
    user_id: str = Depends(current_user_id),
    svc: FilterService = Depends(filter_service),
) -> Filter:
    return await svc.update(user_id=user_id, name=name, query=query)


@router.delete("/{name}", status_code=HTTP_204_NO_CONTENT)
async def delete_filter(
    name: str,
    user_id: str = Depends(current_user_id),
    svc: FilterService = Depends(filter_service),
) -> Response:
    await svc.delete(user_id=user_id, name=name)
    return Response(status_code=HTTP_204_NO_CONTENT)

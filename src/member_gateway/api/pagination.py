"""
member_gateway.api.pagination

Page request binding and page rendering shared by the list endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Query
from pydantic import BaseModel
from starlette.status import HTTP_400_BAD_REQUEST

from member_gateway.api.deps import settings_from_app
from member_gateway.models.page import Page, PageRequest
from member_gateway.settings import Settings


def page_request(
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
    sort: list[str] = Query(default=[]),
    settings: Settings = Depends(settings_from_app),
) -> PageRequest:
    resolved_size = size if size is not None else settings.default_page_size
    if resolved_size > settings.max_page_size:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail=f"size must be <= {settings.max_page_size}",
        )
    return PageRequest(page=page, size=resolved_size, sort=tuple(sort))


def _dump(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump(mode="json", by_alias=True)
    return item


def page_payload(page: Page[Any]) -> dict[str, Any]:
    return {
        "content": [_dump(item) for item in page.content],
        "page": {
            "size": page.size,
            "number": page.number,
            "totalElements": page.total_elements,
            "totalPages": page.total_pages,
        },
    }

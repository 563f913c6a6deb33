"""
member_gateway.service_clients._http

Shared request plumbing for the backend clients.

Responsibilities:
- Issue single-attempt requests and raise `RemoteServiceFailure` on any failure.
- Parse HAL paged responses (`_embedded` + `page`) into `Page` values.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from member_gateway.errors import RemoteServiceFailure
from member_gateway.models.page import Page
from member_gateway.observability.logging import get_logger

T = TypeVar("T")

log = get_logger(__name__)

Params = list[tuple[str, Any]] | dict[str, Any] | None


class ServiceClient:
    """
    Base class for backend clients. No retries: a call either returns or raises.
    """

    service_name = "remote"

    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        json: Any = None,
    ) -> httpx.Response:
        try:
            r = await self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            log.error("remote_unreachable", service=self.service_name, path=path, error=str(e))
            raise RemoteServiceFailure(
                service=self.service_name, status_code=None, detail=str(e)
            ) from e
        if r.is_error:
            log.warning(
                "remote_error",
                service=self.service_name,
                path=path,
                status_code=r.status_code,
            )
            raise RemoteServiceFailure(
                service=self.service_name, status_code=r.status_code, detail=r.text
            )
        return r

    async def _json(
        self,
        method: str,
        path: str,
        *,
        params: Params = None,
        json: Any = None,
    ) -> Any:
        r = await self._request(method, path, params=params, json=json)
        return r.json()


def parse_page(body: dict[str, Any], rel: str, item: Callable[[Any], T]) -> Page[T]:
    # An empty HAL page omits `_embedded` altogether.
    raw_items = (body.get("_embedded") or {}).get(rel, [])
    meta = body.get("page") or {}
    return Page(
        content=[item(raw) for raw in raw_items],
        size=int(meta.get("size", len(raw_items))),
        number=int(meta.get("number", 0)),
        total_elements=int(meta.get("totalElements", len(raw_items))),
    )


def build_http_client(*, base_url: str, timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        headers={"Accept": "application/json"},
    )

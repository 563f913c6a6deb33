"""
member_gateway.service_clients.device_service

Client for the device service, which stores devices and the user-defined segments over them.

Responsibilities:
- Segment CRUD, listing by ordering status, and ordering updates.
- Device pages per segment, optionally narrowed to devices running a given version.
- Device listing by query, and the named filters over devices.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from member_gateway.models.filter import Filter
from member_gateway.models.page import Page, PageRequest
from member_gateway.models.segment import Segment, SegmentStatus
from member_gateway.service_clients._http import ServiceClient, parse_page

# Devices are passed through untouched; the gateway never interprets them.
Device = dict[str, Any]


def _device(raw: Any) -> Device:
    return dict(raw)


class DeviceServiceClient(ServiceClient):
    service_name = "device-service"

    async def get_segment(self, segment_id: str) -> Segment:
        body = await self._json("GET", f"/segments/{segment_id}")
        return Segment.model_validate(body)

    async def create_segment(self, segment: Segment) -> Segment:
        body = await self._json("POST", "/segments", json=segment.to_wire(exclude_none=True))
        return Segment.model_validate(body)

    async def update_segment(self, segment_id: str, segment: Segment) -> Segment:
        body = await self._json(
            "PUT", f"/segments/{segment_id}", json=segment.to_wire(exclude_none=True)
        )
        return Segment.model_validate(body)

    async def get_segments_by_status(
        self, *, user_id: str, status: SegmentStatus
    ) -> list[Segment]:
        body = await self._json("GET", f"/owners/{user_id}/segments/{status.value}")
        return [Segment.model_validate(item) for item in body or []]

    async def get_segments_page(self, *, user_id: str, page: PageRequest) -> Page[Segment]:
        body = await self._json(
            "GET", f"/owners/{user_id}/segments", params=page.to_params()
        )
        return parse_page(body, "segments", Segment.model_validate)

    async def update_segments_order(self, *, user_id: str, order: Sequence[str]) -> list[str]:
        body = await self._json(
            "PUT", f"/owners/{user_id}/segments/order", json=list(order)
        )
        return [str(segment_id) for segment_id in body or []]

    async def get_devices_by_segment_page(
        self, *, user_id: str, segment_id: str, page: PageRequest
    ) -> Page[Device]:
        body = await self._json(
            "GET",
            f"/owners/{user_id}/segments/{segment_id}/devices",
            params=page.to_params(),
        )
        return parse_page(body, "devices", _device)

    async def get_devices_by_segment_and_version_page(
        self, *, user_id: str, segment_id: str, version_id: str, page: PageRequest
    ) -> Page[Device]:
        body = await self._json(
            "GET",
            f"/owners/{user_id}/segments/{segment_id}/devices",
            params=[("versionId", version_id), *page.to_params()],
        )
        return parse_page(body, "devices", _device)

    async def get_devices_page(
        self, *, user_id: str, page: PageRequest, query: dict[str, Any] | None = None
    ) -> Page[Device]:
        params: list[tuple[str, str]] = []
        # The device service takes the query document as a JSON string parameter.
        if query:
            params.append(("query", json.dumps(query, separators=(",", ":"))))
        params.extend(page.to_params())
        body = await self._json("GET", f"/owners/{user_id}/devices", params=params)
        return parse_page(body, "devices", _device)

    async def get_device(self, *, user_id: str, unit_id: str) -> Device:
        return _device(await self._json("GET", f"/owners/{user_id}/devices/{unit_id}"))

    async def create_filter(self, *, user_id: str, filter_: Filter) -> Filter:
        body = await self._json(
            "POST",
            f"/owners/{user_id}/filters",
            json=filter_.to_wire(include={"name", "query"}),
        )
        return Filter.model_validate(body)

    async def get_filters_page(self, *, user_id: str, page: PageRequest) -> Page[Filter]:
        body = await self._json("GET", f"/owners/{user_id}/filters", params=page.to_params())
        return parse_page(body, "filters", Filter.model_validate)

    async def get_filter(self, *, user_id: str, name: str) -> Filter:
        body = await self._json("GET", f"/owners/{user_id}/filters/{name}")
        return Filter.model_validate(body)

    async def update_filter(self, *, user_id: str, name: str, query: dict[str, Any]) -> Filter:
        # Only the query is replaceable; the name is the filter's identity.
        body = await self._json("POST", f"/owners/{user_id}/filters/{name}", json=query)
        return Filter.model_validate(body)

    async def delete_filter(self, *, user_id: str, name: str) -> None:
        await self._request("DELETE", f"/owners/{user_id}/filters/{name}")

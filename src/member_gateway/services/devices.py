"""
member_gateway.services.devices

Device reads on behalf of a user, optionally narrowed by a query document.
"""

from __future__ import annotations

import json
from typing import Any

from member_gateway.errors import InvalidDeviceQuery
from member_gateway.models.page import Page, PageRequest
from member_gateway.service_clients.device_service import Device, DeviceServiceClient


def parse_query(raw: str | None) -> dict[str, Any] | None:
    # An absent or blank query matches every device.
    if raw is None or not raw.strip():
        return None
    try:
        query = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidDeviceQuery(raw) from e
    if not isinstance(query, dict):
        raise InvalidDeviceQuery(raw)
    return query


class DeviceService:
    def __init__(self, *, devices: DeviceServiceClient) -> None:
        self._devices = devices

    async def list_devices(
        self, *, user_id: str, page: PageRequest, query: dict[str, Any] | None = None
    ) -> Page[Device]:
        return await self._devices.get_devices_page(user_id=user_id, page=page, query=query)

    async def get_device(self, *, user_id: str, unit_id: str) -> Device:
        return await self._devices.get_device(user_id=user_id, unit_id=unit_id)

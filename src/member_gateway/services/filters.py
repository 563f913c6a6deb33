"""
member_gateway.services.filters

Named device filters with their usage counts.

Responsibilities:
- Decorate filters with `deviceCount` (devices matching the query) and `deploymentCount`
  (deployment plans targeting the filter).
- Refuse to delete a filter that a deployment plan still references.
"""

from __future__ import annotations

from typing import Any

from member_gateway.errors import FilterInUse
from member_gateway.models.filter import Filter
from member_gateway.models.page import Page, PageRequest
from member_gateway.observability.logging import get_logger
from member_gateway.service_clients.deployment_service import DeploymentServiceClient
from member_gateway.service_clients.device_service import DeviceServiceClient
from member_gateway.services.segments import COUNT_PAGE

log = get_logger(__name__)


class FilterService:
    def __init__(
        self, *, devices: DeviceServiceClient, deployments: DeploymentServiceClient
    ) -> None:
        self._devices = devices
        self._deployments = deployments

    async def with_counts(self, *, user_id: str, filter_: Filter) -> Filter:
        plans = await self._deployments.get_plans_by_filter_page(
            user_id=user_id, filter_name=filter_.name, page=COUNT_PAGE
        )
        devices = await self._devices.get_devices_page(
            user_id=user_id, page=COUNT_PAGE, query=filter_.query
        )
        return filter_.model_copy(
            update={
                "deployment_count": plans.total_elements,
                "device_count": devices.total_elements,
            }
        )

    async def create(self, *, user_id: str, filter_: Filter) -> Filter:
        created = await self._devices.create_filter(user_id=user_id, filter_=filter_)
        log.info("filter_created", name=created.name)
        return await self.with_counts(user_id=user_id, filter_=created)

    async def get(self, *, user_id: str, name: str) -> Filter:
        filter_ = await self._devices.get_filter(user_id=user_id, name=name)
        return await self.with_counts(user_id=user_id, filter_=filter_)

    async def list_filters(self, *, user_id: str, page: PageRequest) -> Page[Filter]:
        raw = await self._devices.get_filters_page(user_id=user_id, page=page)
        return raw.with_content(
            [await self.with_counts(user_id=user_id, filter_=f) for f in raw.content]
        )

    async def update(self, *, user_id: str, name: str, query: dict[str, Any]) -> Filter:
        updated = await self._devices.update_filter(user_id=user_id, name=name, query=query)
        return await self.with_counts(user_id=user_id, filter_=updated)

    async def delete(self, *, user_id: str, name: str) -> None:
        plans = await self._deployments.get_plans_by_filter_page(
            user_id=user_id, filter_name=name, page=COUNT_PAGE
        )
        if plans.content or plans.total_elements:
            log.warning("filter_in_use", name=name, plans=plans.total_elements)
            raise FilterInUse(name)
        await self._devices.delete_filter(user_id=user_id, name=name)
        log.info("filter_deleted", name=name)

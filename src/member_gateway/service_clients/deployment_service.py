from __future__ import annotations

from typing import Any

from member_gateway.models.page import Page, PageRequest
from member_gateway.service_clients._http import ServiceClient, parse_page


class DeploymentServiceClient(ServiceClient):
    service_name = "deployment-service"

    async def get_deployed_version_ids(
        self, *, user_id: str, package_ref: str, only_active: bool
    ) -> list[str]:
        # `only_active=False` returns every version ever referenced by a plan, active or not.
        body = await self._json(
            "GET",
            f"/owners/{user_id}/plans/{package_ref}/versions",
            params={"onlyActive": only_active},
        )
        return [str(v) for v in body or []]

    async def get_plans_by_filter_page(
        self, *, user_id: str, filter_name: str, page: PageRequest
    ) -> Page[dict[str, Any]]:
        # Plans are opaque to the gateway; only their count matters.
        body = await self._json(
            "GET",
            f"/owners/{user_id}/plans",
            params=[("filter", filter_name), *page.to_params()],
        )
        return parse_page(body, "plans", dict)

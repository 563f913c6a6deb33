from __future__ import annotations

from member_gateway.models.page import Page, PageRequest
from member_gateway.models.version import Version
from member_gateway.service_clients._http import ServiceClient, parse_page


class ComponentServiceClient(ServiceClient):
    service_name = "component-service"

    async def get_versions(
        self, *, user_id: str, package_ref: str, page: PageRequest
    ) -> Page[Version]:
        body = await self._json(
            "GET",
            f"/owners/{user_id}/packages/{package_ref}/versions",
            params=page.to_params(),
        )
        return parse_page(body, "versions", Version.model_validate)

    async def get_version(self, *, user_id: str, package_ref: str, version_id: str) -> Version:
        body = await self._json(
            "GET", f"/owners/{user_id}/packages/{package_ref}/versions/{version_id}"
        )
        return Version.model_validate(body)

from __future__ import annotations

from member_gateway.models.package import PackageInfo
from member_gateway.service_clients._http import ServiceClient


class PackageServiceClient(ServiceClient):
    service_name = "package-service"

    async def get_package_info(self, package_id: str) -> PackageInfo:
        body = await self._json("GET", f"/packages/{package_id}")
        return PackageInfo.model_validate(body)

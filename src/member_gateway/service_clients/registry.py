"""
member_gateway.service_clients.registry

Process-wide set of backend clients.

Responsibilities:
- Open one pooled httpx client per backend from settings.
- Close them all on shutdown.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from member_gateway.service_clients._http import build_http_client
from member_gateway.service_clients.component_service import ComponentServiceClient
from member_gateway.service_clients.deployment_service import DeploymentServiceClient
from member_gateway.service_clients.device_service import DeviceServiceClient
from member_gateway.service_clients.package_service import PackageServiceClient
from member_gateway.service_clients.update_service import UpdateServiceClient
from member_gateway.settings import Settings


@dataclass(frozen=True, slots=True)
class ServiceClients:
    packages: PackageServiceClient
    updates: UpdateServiceClient
    devices: DeviceServiceClient
    deployments: DeploymentServiceClient
    components: ComponentServiceClient
    _transports: tuple[httpx.AsyncClient, ...] = ()

    async def aclose(self) -> None:
        for http in self._transports:
            await http.aclose()


def open_service_clients(settings: Settings) -> ServiceClients:
    timeout = settings.http_timeout_seconds
    package_http = build_http_client(base_url=settings.package_service_url, timeout=timeout)
    update_http = build_http_client(base_url=settings.update_service_url, timeout=timeout)
    device_http = build_http_client(base_url=settings.device_service_url, timeout=timeout)
    deployment_http = build_http_client(
        base_url=settings.deployment_service_url, timeout=timeout
    )
    component_http = build_http_client(base_url=settings.component_service_url, timeout=timeout)
    return ServiceClients(
        packages=PackageServiceClient(http=package_http),
        updates=UpdateServiceClient(http=update_http),
        devices=DeviceServiceClient(http=device_http),
        deployments=DeploymentServiceClient(http=deployment_http),
        components=ComponentServiceClient(http=component_http),
        _transports=(package_http, update_http, device_http, deployment_http, component_http),
    )

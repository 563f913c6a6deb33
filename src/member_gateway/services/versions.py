"""
member_gateway.services.versions

Package versions with their derived deployment status.

Responsibilities:
- Classify a version as in use, previously used or never used by deployment plans.
- Attach that status to versions read from the component service.
"""

from __future__ import annotations

from member_gateway.models.page import Page, PageRequest
from member_gateway.models.version import Version, VersionStatus
from member_gateway.service_clients.component_service import ComponentServiceClient
from member_gateway.service_clients.deployment_service import DeploymentServiceClient


class VersionStatusClassifier:
    def __init__(self, *, deployments: DeploymentServiceClient) -> None:
        self._deployments = deployments

    async def classify(self, *, user_id: str, package_ref: str, version_id: str) -> VersionStatus:
        # First match wins: active plans are checked before the full plan history.
        active = await self._deployments.get_deployed_version_ids(
            user_id=user_id, package_ref=package_ref, only_active=True
        )
        if version_id in active:
            return VersionStatus.in_use
        ever = await self._deployments.get_deployed_version_ids(
            user_id=user_id, package_ref=package_ref, only_active=False
        )
        if version_id in ever:
            return VersionStatus.was_used
        return VersionStatus.never_used


class VersionService:
    def __init__(
        self, *, components: ComponentServiceClient, classifier: VersionStatusClassifier
    ) -> None:
        self._components = components
        self._classifier = classifier

    async def get_versions(
        self, *, user_id: str, package_ref: str, page: PageRequest
    ) -> Page[Version]:
        versions = await self._components.get_versions(
            user_id=user_id, package_ref=package_ref, page=page
        )
        classified = [
            await self._with_status(user_id=user_id, package_ref=package_ref, version=v)
            for v in versions.content
        ]
        return versions.with_content(classified)

    async def get_version(self, *, user_id: str, package_ref: str, version_id: str) -> Version:
        version = await self._components.get_version(
            user_id=user_id, package_ref=package_ref, version_id=version_id
        )
        return await self._with_status(user_id=user_id, package_ref=package_ref, version=version)

    async def _with_status(self, *, user_id: str, package_ref: str, version: Version) -> Version:
        status = await self._classifier.classify(
            user_id=user_id, package_ref=package_ref, version_id=version.id
        )
        return version.model_copy(update={"status": status})

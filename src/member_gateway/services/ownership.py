"""
member_gateway.services.ownership

Ownership checks across backend services.

Responsibilities:
- Confirm that a fetched segment, package or update belongs to the expected user.
- Raise `OwnershipViolation` otherwise; remote failures propagate unchanged.
"""

from __future__ import annotations

from typing import NoReturn

from member_gateway.errors import OwnershipViolation
from member_gateway.models.package import PackageInfo
from member_gateway.models.segment import OtherSegmentRef, Segment, segment_ref
from member_gateway.models.update import Update
from member_gateway.observability.logging import get_logger
from member_gateway.service_clients.device_service import DeviceServiceClient
from member_gateway.service_clients.package_service import PackageServiceClient
from member_gateway.service_clients.update_service import UpdateServiceClient

log = get_logger(__name__)


class OwnershipValidator:
    def __init__(
        self,
        *,
        devices: DeviceServiceClient,
        packages: PackageServiceClient,
        updates: UpdateServiceClient,
    ) -> None:
        self._devices = devices
        self._packages = packages
        self._updates = updates

    async def assert_segment_ownership(self, *, user_id: str, segment_id: str) -> Segment:
        """
        Fetch a segment and check it belongs to `user_id`.

        The virtual "other" segment has no stored owner: it is returned bare (no `active`,
        no `deviceCount`) without any remote call.
        """

        if isinstance(segment_ref(segment_id), OtherSegmentRef):
            return Segment.virtual_other(user_id)
        segment = await self._devices.get_segment(segment_id)
        if segment.user_id != user_id:
            _reject("segment", segment_id, user_id)
        return segment

    async def assert_package_ownership(self, update: Update) -> PackageInfo:
        # The package must belong to the owner of the update referencing it.
        package_info = await self._packages.get_package_info(update.package_id)
        if package_info.user_id != update.user_id:
            _reject("package", update.package_id, update.user_id)
        return package_info

    async def assert_update_ownership(self, *, uuid: str, user_id: str) -> Update:
        existing = await self._updates.get_by_uuid_and_user(uuid=uuid, user_id=user_id)
        if existing.user_id != user_id:
            _reject("update", uuid, user_id)
        return existing


def _reject(entity: str, entity_id: str | None, user_id: str | None) -> NoReturn:
    log.warning("ownership_violation", entity=entity, entity_id=entity_id, acting_user=user_id)
    raise OwnershipViolation(entity=entity, entity_id=entity_id, user_id=user_id)

"""
member_gateway.services.updates

Rollout update lifecycle.

Responsibilities:
- Normalize updates before any write (the "other" segment is never submitted as a reference).
- Create and edit updates after checking the package and segment ownership chain.
- Record status changes and scheduled publications.
- Read single updates and pages of updates as detailed views.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from member_gateway.models.page import Page, PageRequest
from member_gateway.models.segment import OtherSegmentRef
from member_gateway.models.update import (
    DetailedUpdate,
    Update,
    UpdateStatus,
    UpdateStatusCompatibility,
)
from member_gateway.observability.logging import get_logger
from member_gateway.service_clients.update_service import UpdateServiceClient
from member_gateway.services.detail import DetailedUpdateAggregator
from member_gateway.services.ownership import OwnershipValidator
from member_gateway.services.segments import SegmentService

log = get_logger(__name__)


def normalize(update: Update) -> Update:
    """
    Clear a reference to the virtual segment: "other" must never reach the update service as a
    foreign key. Any other segment id is left untouched.
    """

    if update.has_segment and isinstance(update.segment_ref, OtherSegmentRef):
        return update.model_copy(update={"segment_id": None})
    return update


class UpdateService:
    """
    Transition legality is owned by the update service's compatibility table; this class only
    records the requested status (and scheduled time) and submits it.
    """

    def __init__(
        self,
        *,
        updates: UpdateServiceClient,
        ownership: OwnershipValidator,
        segments: SegmentService,
        detail: DetailedUpdateAggregator,
    ) -> None:
        self._updates = updates
        self._ownership = ownership
        self._segments = segments
        self._detail = detail

    async def create(self, update: Update) -> DetailedUpdate:
        update = normalize(update)
        package_info = await self._ownership.assert_package_ownership(update)
        segment = await self._segments.segment_for_update(update)
        created = await self._updates.create(update)
        log.info("update_created", uuid=created.uuid, package_id=update.package_id)
        return DetailedUpdate.of(created, package_info, segment)

    async def edit(self, update: Update) -> DetailedUpdate:
        update = normalize(update)
        await self._ownership.assert_update_ownership(uuid=update.uuid, user_id=update.user_id)
        package_info = await self._ownership.assert_package_ownership(update)
        segment = await self._segments.segment_for_update(update)
        edited = await self._updates.edit(update)
        log.info("update_edited", uuid=edited.uuid, revision_id=edited.revision_id)
        return DetailedUpdate.of(edited, package_info, segment)

    async def change_status(
        self,
        *,
        uuid: str,
        status: UpdateStatus,
        user_id: str,
        scheduled_time: datetime | None = None,
    ) -> None:
        existing = await self._ownership.assert_update_ownership(uuid=uuid, user_id=user_id)
        changes: dict[str, object] = {"status": status}
        # Without a new time the stored scheduled date is kept as-is.
        if scheduled_time is not None:
            changes["scheduled_date"] = scheduled_time
        await self._updates.edit(existing.model_copy(update=changes))
        log.info("update_status_changed", uuid=uuid, status=status.value)

    async def schedule_publication(
        self, *, uuid: str, scheduled_time: datetime, user_id: str
    ) -> None:
        await self.change_status(
            uuid=uuid,
            status=UpdateStatus.scheduled,
            user_id=user_id,
            scheduled_time=scheduled_time,
        )

    async def get(self, *, uuid: str, user_id: str) -> DetailedUpdate:
        update = await self._updates.get_by_uuid_and_user(uuid=uuid, user_id=user_id)
        return await self._detail.detail_one(update)

    async def list_updates(
        self,
        *,
        page: PageRequest,
        user_id: str,
        statuses: Sequence[UpdateStatus] = (),
        segment_ids: Sequence[str] = (),
    ) -> Page[DetailedUpdate]:
        return await self._detail.detailed_page(
            page=page, user_id=user_id, statuses=statuses, segment_ids=segment_ids
        )

    async def status_compatibilities(self) -> list[UpdateStatusCompatibility]:
        return await self._updates.get_all_status_compatibilities()

    async def status_compatibility(self, status: UpdateStatus) -> UpdateStatusCompatibility:
        return await self._updates.get_status_compatibilities(status)

"""
member_gateway.services.segments

Segment enrichment and the virtual "other" segment.

Responsibilities:
- Decorate stored segments with the derived `active` flag and `deviceCount`.
- Synthesize the "other" segment on every read.
- Segment CRUD, listing and ordering on behalf of a user, ownership-checked.
"""

from __future__ import annotations

from collections.abc import Sequence

from member_gateway.errors import VirtualSegmentWrite
from member_gateway.models.page import Page, PageRequest
from member_gateway.models.segment import (
    OTHER_SEGMENT_ID,
    OtherSegmentRef,
    Segment,
    SegmentsOrder,
    SegmentStatus,
    segment_ref,
)
from member_gateway.models.update import Update
from member_gateway.observability.logging import get_logger
from member_gateway.service_clients.device_service import Device, DeviceServiceClient
from member_gateway.services.ownership import OwnershipValidator

log = get_logger(__name__)

# Counting reads the page metadata of a one-device page, never the device list itself.
COUNT_PAGE = PageRequest(page=0, size=1)


class SegmentService:
    def __init__(self, *, devices: DeviceServiceClient, ownership: OwnershipValidator) -> None:
        self._devices = devices
        self._ownership = ownership

    async def device_count(self, *, user_id: str, segment_id: str) -> int:
        page = await self._devices.get_devices_by_segment_page(
            user_id=user_id, segment_id=segment_id, page=COUNT_PAGE
        )
        return page.total_elements

    async def enrich(self, segments: Sequence[Segment]) -> list[Segment]:
        """
        Set `active` and `deviceCount` on every segment.

        All segments are assumed to share one owner. One remote call fetches the active ids,
        then one count call is issued per segment, sequentially. An empty input makes no
        remote call at all.
        """

        if not segments:
            return []
        owner = segments[0].user_id
        active = await self._devices.get_segments_by_status(
            user_id=owner, status=SegmentStatus.active
        )
        active_ids = {s.id for s in active}

        enriched: list[Segment] = []
        for segment in segments:
            count = await self.device_count(user_id=segment.user_id, segment_id=segment.id)
            enriched.append(
                segment.model_copy(
                    update={"active": segment.id in active_ids, "device_count": count}
                )
            )
        return enriched

    async def enrich_one(self, segment: Segment) -> Segment:
        return (await self.enrich([segment]))[0]

    async def other(self, user_id: str) -> Segment:
        # Always active, whatever its device count.
        count = await self.device_count(user_id=user_id, segment_id=OTHER_SEGMENT_ID)
        return Segment.virtual_other(user_id).model_copy(
            update={"active": True, "device_count": count}
        )

    async def ordered_segments(self, user_id: str) -> SegmentsOrder:
        active = await self.enrich(
            await self._devices.get_segments_by_status(
                user_id=user_id, status=SegmentStatus.active
            )
        )
        inactive = await self.enrich(
            await self._devices.get_segments_by_status(
                user_id=user_id, status=SegmentStatus.inactive
            )
        )
        return SegmentsOrder(active=active, inactive=inactive, other=await self.other(user_id))

    async def get_segment(self, *, user_id: str, segment_id: str) -> Segment:
        if isinstance(segment_ref(segment_id), OtherSegmentRef):
            return await self.other(user_id)
        segment = await self._ownership.assert_segment_ownership(
            user_id=user_id, segment_id=segment_id
        )
        return await self.enrich_one(segment)

    async def segment_for_update(self, update: Update) -> Segment:
        # An update without a segment targets "other".
        if isinstance(update.segment_ref, OtherSegmentRef):
            return await self.other(update.user_id)
        return await self.get_segment(user_id=update.user_id, segment_id=update.segment_id)

    async def create_segment(self, *, user_id: str, segment: Segment) -> Segment:
        to_create = Segment(user_id=user_id, name=segment.name, query=segment.query)
        created = await self._devices.create_segment(to_create)
        log.info("segment_created", segment_id=created.id)
        return await self.enrich_one(created)

    async def update_segment(self, *, user_id: str, segment_id: str, segment: Segment) -> Segment:
        if isinstance(segment_ref(segment_id), OtherSegmentRef):
            raise VirtualSegmentWrite("segment update")
        await self._ownership.assert_segment_ownership(user_id=user_id, segment_id=segment_id)
        changes = Segment(user_id=user_id, name=segment.name, query=segment.query)
        updated = await self._devices.update_segment(segment_id, changes)
        return await self.enrich_one(updated)

    async def list_segments(self, *, user_id: str, page: PageRequest) -> Page[Segment]:
        raw = await self._devices.get_segments_page(user_id=user_id, page=page)
        return raw.with_content(await self.enrich(raw.content))

    async def devices_for_segment(
        self, *, user_id: str, segment_id: str, page: PageRequest
    ) -> Page[Device]:
        await self._ownership.assert_segment_ownership(user_id=user_id, segment_id=segment_id)
        return await self._devices.get_devices_by_segment_page(
            user_id=user_id, segment_id=segment_id, page=page
        )

    async def update_order(self, *, user_id: str, order: Sequence[str]) -> list[str]:
        # "other" always closes the ordering; it is never part of the stored order.
        if any(isinstance(segment_ref(segment_id), OtherSegmentRef) for segment_id in order):
            raise VirtualSegmentWrite("segment ordering")
        for segment_id in order:
            await self._ownership.assert_segment_ownership(user_id=user_id, segment_id=segment_id)
        return await self._devices.update_segments_order(user_id=user_id, order=order)


# --- Module Notes -----------------------------------------------------------
# Nothing is cached: active ids and counts are re-read on every call, so two reads within one
# request may observe slightly different backend states.

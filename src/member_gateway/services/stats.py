"""
member_gateway.services.stats

Per-segment device statistics.

Responsibilities:
- Count devices per active segment (plus "other").
- Count, per segment, the devices already running the segment's latest update.
"""

from __future__ import annotations

from member_gateway.models.segment import OtherSegmentRef, Segment
from member_gateway.models.stats import DataSet
from member_gateway.service_clients.device_service import DeviceServiceClient
from member_gateway.service_clients.package_service import PackageServiceClient
from member_gateway.service_clients.update_service import UpdateServiceClient
from member_gateway.services.segments import COUNT_PAGE, SegmentService


class SegmentStatsService:
    def __init__(
        self,
        *,
        segments: SegmentService,
        updates: UpdateServiceClient,
        packages: PackageServiceClient,
        devices: DeviceServiceClient,
    ) -> None:
        self._segments = segments
        self._updates = updates
        self._packages = packages
        self._devices = devices

    async def devices_per_segment(self, user_id: str) -> DataSet:
        order = await self._segments.ordered_segments(user_id)
        values = {s.name: s.device_count or 0 for s in order.active}
        values[order.other.name] = order.other.device_count or 0
        return DataSet.of(values)

    async def updated_devices_per_segment(self, user_id: str) -> DataSet:
        order = await self._segments.ordered_segments(user_id)
        values: dict[str, int] = {}
        for segment in [*order.active, order.other]:
            values[segment.name] = await self._updated_device_count(user_id, segment)
        return DataSet.of(values)

    async def _updated_device_count(self, user_id: str, segment: Segment) -> int:
        """
        Devices of `segment` running the package version of the segment's latest update.

        Falls back to the segment's whole device count when no update targets it yet.
        """

        # The update service stores "other" as an absent segment id.
        lookup_id = None if isinstance(segment.ref, OtherSegmentRef) else segment.id
        latest = await self._updates.get_latest_for_segment(user_id=user_id, segment_id=lookup_id)
        if latest is None:
            return segment.device_count or 0
        package_info = await self._packages.get_package_info(latest.package_id)
        page = await self._devices.get_devices_by_segment_and_version_page(
            user_id=user_id,
            segment_id=segment.id,
            version_id=package_info.version_id,
            page=COUNT_PAGE,
        )
        return page.total_elements

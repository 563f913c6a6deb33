"""
member_gateway.services.detail

Detailed update views.

Responsibilities:
- Fetch a page of updates and resolve each item's package and segment concurrently.
- Preserve input order and page metadata; abort the whole page on the first failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from member_gateway.models.page import Page, PageRequest
from member_gateway.models.update import DetailedUpdate, Update, UpdateStatus
from member_gateway.observability.logging import get_logger
from member_gateway.service_clients.package_service import PackageServiceClient
from member_gateway.service_clients.update_service import UpdateServiceClient
from member_gateway.services.segments import SegmentService

log = get_logger(__name__)


class DetailedUpdateAggregator:
    def __init__(
        self,
        *,
        updates: UpdateServiceClient,
        packages: PackageServiceClient,
        segments: SegmentService,
        fanout_limit: int,
    ) -> None:
        self._updates = updates
        self._packages = packages
        self._segments = segments
        self._fanout_limit = fanout_limit

    async def detailed_page(
        self,
        *,
        page: PageRequest,
        user_id: str,
        statuses: Sequence[UpdateStatus] = (),
        segment_ids: Sequence[str] = (),
    ) -> Page[DetailedUpdate]:
        updates = await self._updates.list_by_statuses_and_segments(
            page=page, user_id=user_id, statuses=statuses, segment_ids=segment_ids
        )
        return await self.detail(updates, user_id=user_id)

    async def detail(self, page: Page[Update], *, user_id: str) -> Page[DetailedUpdate]:
        """
        Resolve package and segment for every update of `page`, one task per item.

        Concurrency is bounded by `min(len(page), fanout_limit)`. Results come back in input
        order. If any item fails, the remaining tasks are cancelled and that failure is raised
        as-is: no partial page is ever returned.
        """

        items = page.content
        if not items:
            return page.with_content([])

        gate = asyncio.Semaphore(min(len(items), self._fanout_limit))

        async def _bounded(update: Update) -> DetailedUpdate:
            async with gate:
                return await self.detail_one(update)

        log.debug("detail_fanout", user_id=user_id, items=len(items))
        tasks = [asyncio.create_task(_bounded(update)) for update in items]
        try:
            detailed = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Drain so no sibling failure is left unretrieved.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return page.with_content(detailed)

    async def detail_one(self, update: Update) -> DetailedUpdate:
        # Plain fetch: the owning update is already trusted.
        package_info = await self._packages.get_package_info(update.package_id)
        segment = await self._segments.segment_for_update(update)
        return DetailedUpdate.of(update, package_info, segment)

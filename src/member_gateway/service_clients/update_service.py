"""
member_gateway.service_clients.update_service

Client for the update service, the system of record for rollout updates.

Responsibilities:
- Read, list, create and edit updates.
- Look up the latest update targeting a segment (204 means "none").
- Expose the status compatibility table unmodified.
"""

from __future__ import annotations

from collections.abc import Sequence

import httpx

from member_gateway.models.page import Page, PageRequest
from member_gateway.models.update import Update, UpdateStatus, UpdateStatusCompatibility
from member_gateway.service_clients._http import ServiceClient, parse_page


class UpdateServiceClient(ServiceClient):
    service_name = "update-service"

    async def get_by_uuid_and_user(self, *, uuid: str, user_id: str) -> Update:
        body = await self._json("GET", f"/updates/{uuid}", params={"userId": user_id})
        return Update.model_validate(body)

    async def list_by_statuses_and_segments(
        self,
        *,
        page: PageRequest,
        user_id: str,
        statuses: Sequence[UpdateStatus],
        segment_ids: Sequence[str],
    ) -> Page[Update]:
        params: list[tuple[str, str]] = [("userId", user_id)]
        # Empty filters are omitted rather than sent blank.
        if statuses:
            params.append(("status", ",".join(s.value for s in statuses)))
        if segment_ids:
            params.append(("segmentId", ",".join(segment_ids)))
        params.extend(page.to_params())
        body = await self._json("GET", "/updates", params=params)
        return parse_page(body, "updates", Update.model_validate)

    async def create(self, update: Update) -> Update:
        body = await self._json("POST", "/updates", json=update.to_wire())
        return Update.model_validate(body)

    async def edit(self, update: Update) -> Update:
        body = await self._json(
            "PUT",
            f"/updates/{update.uuid}",
            params={"userId": update.user_id},
            json=update.to_wire(),
        )
        return Update.model_validate(body)

    async def get_latest_for_segment(
        self, *, user_id: str, segment_id: str | None
    ) -> Update | None:
        # The only read where "nothing there" is an answer rather than a failure.
        params = {"userId": user_id}
        # "other" is stored as an absent segment id.
        if segment_id is not None:
            params["segmentId"] = segment_id
        r = await self._request("GET", "/updates/latest", params=params)
        if r.status_code == httpx.codes.NO_CONTENT or not r.content:
            return None
        return Update.model_validate(r.json())

    async def get_all_status_compatibilities(self) -> list[UpdateStatusCompatibility]:
        body = await self._json("GET", "/status")
        return [UpdateStatusCompatibility.model_validate(item) for item in body or []]

    async def get_status_compatibilities(
        self, status: UpdateStatus
    ) -> UpdateStatusCompatibility:
        body = await self._json("GET", f"/status/{status.value}")
        return UpdateStatusCompatibility.model_validate(body)


# --- Module Notes -----------------------------------------------------------
# Transition legality lives entirely in the update service; `edit` submits whatever status the
# caller chose and lets the backend reject it.

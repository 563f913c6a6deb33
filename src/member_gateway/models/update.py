"""
member_gateway.models.update

Rollout updates and their composite "detailed" view.

Responsibilities:
- Define the `Update` record as stored by the update service.
- Define `DetailedUpdate`, the read-only join of an update with its package and segment.
- Parse lifecycle status names and the status compatibility table.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from pydantic import Field

from member_gateway.errors import UnknownUpdateStatus
from member_gateway.models._base import WireModel
from member_gateway.models.package import PackageInfo
from member_gateway.models.segment import Segment, SegmentRef, segment_ref


class UpdateStatus(enum.StrEnum):
    # Wire names used by the update service and in URLs.
    draft = "draft"
    published = "published"
    scheduled = "scheduled"
    archived = "archived"

    @classmethod
    def from_name(cls, name: str) -> UpdateStatus:
        try:
            return cls(name)
        except ValueError as e:
            raise UnknownUpdateStatus(name) from e


class Update(WireModel):
    uuid: str | None = None
    user_id: str | None = None
    revision_id: int | None = None
    name: str | None = None
    description: str | None = None
    package_id: str | None = None
    # None means the update targets the "other" segment.
    segment_id: str | None = None
    status: UpdateStatus | None = None
    creation_date: datetime | None = None
    scheduled_date: datetime | None = None
    # Free-form, insertion-ordered; values may be scalars, lists or nested maps.
    additional_properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_segment(self) -> bool:
        return self.segment_id is not None

    @property
    def segment_ref(self) -> SegmentRef:
        return segment_ref(self.segment_id)


class DetailedUpdate(WireModel):
    uuid: str | None = None
    user_id: str | None = None
    revision_id: int | None = None
    name: str | None = None
    description: str | None = None
    package_info: PackageInfo
    segment: Segment
    status: UpdateStatus | None = None
    creation_date: datetime | None = None
    scheduled_date: datetime | None = None
    additional_properties: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def of(cls, update: Update, package_info: PackageInfo, segment: Segment) -> DetailedUpdate:
        return cls(
            uuid=update.uuid,
            user_id=update.user_id,
            revision_id=update.revision_id,
            name=update.name,
            description=update.description,
            package_info=package_info,
            segment=segment,
            status=update.status,
            creation_date=update.creation_date,
            scheduled_date=update.scheduled_date,
            additional_properties=dict(update.additional_properties),
        )


class UpdateStatusCompatibility(WireModel):
    """Status transition row, passed through from the update service as-is."""

    status: UpdateStatus = Field(alias="name")
    compatible_statuses: list[UpdateStatus] = Field(
        default_factory=list, alias="compatibleStatus"
    )

"""
member_gateway.models.segment

Device segments and the reserved "other" segment.

Responsibilities:
- Define the `Segment` entity, including its derived `active`/`deviceCount` fields.
- Model segment references as a tagged variant: a stored segment (`RealSegmentRef`) or the
  virtual segment holding every device no user-defined segment matches (`OtherSegmentRef`).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import Field

from member_gateway.models._base import WireModel

OTHER_SEGMENT_ID = "other"


class SegmentStatus(enum.StrEnum):
    # Whether a stored segment takes part in the user's active ordering.
    active = "active"
    inactive = "inactive"


@dataclass(frozen=True, slots=True)
class RealSegmentRef:
    id: str


@dataclass(frozen=True, slots=True)
class OtherSegmentRef:
    # Never stored by the device service; the device service understands the id as
    # "devices matching no defined segment".
    id: ClassVar[str] = OTHER_SEGMENT_ID


OTHER_SEGMENT = OtherSegmentRef()

SegmentRef = RealSegmentRef | OtherSegmentRef


def segment_ref(raw: str | None) -> SegmentRef:
    """
    Parse a raw segment id coming from a request or a stored update.

    An absent id and the reserved literal both denote the virtual segment.
    """

    if raw is None or raw == OTHER_SEGMENT_ID:
        return OTHER_SEGMENT
    return RealSegmentRef(raw)


class Segment(WireModel):
    id: str | None = None
    user_id: str | None = None
    name: str | None = None
    # Opaque filter document, interpreted only by the device service.
    query: dict[str, Any] | None = None

    # Derived on read, never persisted.
    active: bool | None = None
    device_count: int | None = None

    @property
    def ref(self) -> SegmentRef:
        return segment_ref(self.id)

    @classmethod
    def virtual_other(cls, user_id: str) -> Segment:
        # Owned implicitly by whoever asks for it.
        return cls(id=OTHER_SEGMENT_ID, user_id=user_id, name=OTHER_SEGMENT_ID.capitalize())


class SegmentsOrder(WireModel):
    active: list[Segment] = Field(default_factory=list)
    inactive: list[Segment] = Field(default_factory=list)
    other: Segment

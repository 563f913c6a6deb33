"""
member_gateway.models

Domain entities exchanged with the backend services and returned to API callers.

Responsibilities:
- Pydantic models with camelCase wire aliases for every remote entity.
- Plain dataclasses for request-scoped values (page requests, pages, segment references).
"""

from member_gateway.models.filter import Filter
from member_gateway.models.package import PackageInfo
from member_gateway.models.page import Page, PageRequest
from member_gateway.models.segment import (
    OTHER_SEGMENT,
    OTHER_SEGMENT_ID,
    OtherSegmentRef,
    RealSegmentRef,
    Segment,
    SegmentRef,
    SegmentsOrder,
    SegmentStatus,
    segment_ref,
)
from member_gateway.models.stats import DataSet
from member_gateway.models.update import (
    DetailedUpdate,
    Update,
    UpdateStatus,
    UpdateStatusCompatibility,
)
from member_gateway.models.version import Version, VersionStatus

__all__ = [
    "OTHER_SEGMENT",
    "OTHER_SEGMENT_ID",
    "DataSet",
    "DetailedUpdate",
    "Filter",
    "OtherSegmentRef",
    "PackageInfo",
    "Page",
    "PageRequest",
    "RealSegmentRef",
    "Segment",
    "SegmentRef",
    "SegmentStatus",
    "SegmentsOrder",
    "Update",
    "UpdateStatus",
    "UpdateStatusCompatibility",
    "Version",
    "VersionStatus",
    "segment_ref",
]

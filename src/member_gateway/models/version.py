from __future__ import annotations

import enum
from typing import Any

from pydantic import Field

from member_gateway.models._base import WireModel


class VersionStatus(enum.StrEnum):
    # Derived relative to a package's deployment plans; never persisted.
    in_use = "inUse"
    was_used = "wasUsed"
    never_used = "neverUsed"


class Version(WireModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    filename: str | None = None
    length: int = 0
    md5: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    status: VersionStatus | None = None

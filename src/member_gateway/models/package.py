from __future__ import annotations

from member_gateway.models._base import WireModel


class PackageInfo(WireModel):
    """Uploaded package as stored by the package service. Read-only for the gateway."""

    id: str | None = None
    user_id: str | None = None
    version_id: str | None = None
    file_name: str | None = None
    md5: str | None = None
    size: int = 0

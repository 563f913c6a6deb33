from __future__ import annotations

from typing import Any

from member_gateway.models._base import WireModel


class Filter(WireModel):
    """
    Named device query stored by the device service.

    `deviceCount` and `deploymentCount` are derived on read and never submitted.
    """

    user_id: str | None = None
    name: str | None = None
    query: dict[str, Any] | None = None

    device_count: int | None = None
    deployment_count: int | None = None

from __future__ import annotations

import pytest

from conftest import make_segment, make_update
from member_gateway.models.package import PackageInfo
from member_gateway.models.segment import SegmentStatus


def _seed(devices) -> None:
    devices.add_segment(make_segment("eu", name="Europe"), status=SegmentStatus.active)
    devices.add_segment(make_segment("us", name="America"), status=SegmentStatus.active)
    devices.add_segment(make_segment("apac", name="Asia"), status=SegmentStatus.inactive)
    devices.counts.update({"eu": 10, "us": 5, "apac": 8, "other": 2})


@pytest.mark.asyncio
async def test_devices_per_segment_counts_active_and_other(stats_service, devices) -> None:
    _seed(devices)

    data = await stats_service.devices_per_segment("alice")

    assert data.values == {"Europe": 10, "America": 5, "Other": 2}
    assert data.total == 17


@pytest.mark.asyncio
async def test_updated_devices_per_segment(stats_service, devices, updates, packages) -> None:
    _seed(devices)
    packages.add(PackageInfo(id="pkg-1", user_id="alice", version_id="v1"))
    packages.add(PackageInfo(id="pkg-2", user_id="alice", version_id="v2"))
    updates.latest["eu"] = make_update("upd-1", package_id="pkg-1", segment_id="eu")
    updates.latest[None] = make_update("upd-2", package_id="pkg-2", segment_id=None)
    devices.version_counts.update({("eu", "v1"): 6, ("other", "v2"): 1})

    data = await stats_service.updated_devices_per_segment("alice")

    # "America" has no update yet, so all of its devices count.
    assert data.values == {"Europe": 6, "America": 5, "Other": 1}
    assert data.total == 12
    assert ("get_latest_for_segment", None) in updates.calls

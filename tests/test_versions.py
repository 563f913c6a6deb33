from __future__ import annotations

import pytest

from member_gateway.models.page import PageRequest
from member_gateway.models.version import Version, VersionStatus
from member_gateway.services.versions import VersionStatusClassifier


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("active", "ever", "expected"),
    [
        (["v1"], ["v1"], VersionStatus.in_use),
        ([], ["v1"], VersionStatus.was_used),
        (["v2"], ["v2", "v3"], VersionStatus.never_used),
    ],
)
async def test_classify(deployments, active, ever, expected) -> None:
    deployments.active = active
    deployments.ever = ever
    classifier = VersionStatusClassifier(deployments=deployments)

    status = await classifier.classify(user_id="alice", package_ref="fw", version_id="v1")

    assert status is expected
    # Active plans are always consulted first.
    assert deployments.calls[0] == ("get_deployed_version_ids", True)


@pytest.mark.asyncio
async def test_in_use_stops_at_active_plans(deployments) -> None:
    deployments.active = ["v1"]
    classifier = VersionStatusClassifier(deployments=deployments)

    await classifier.classify(user_id="alice", package_ref="fw", version_id="v1")

    assert deployments.calls == [("get_deployed_version_ids", True)]


@pytest.mark.asyncio
async def test_versions_page_carries_status(version_service, components, deployments) -> None:
    components.versions = {
        "v1": Version(id="v1", name="1.0.0"),
        "v2": Version(id="v2", name="1.1.0"),
        "v3": Version(id="v3", name="2.0.0"),
    }
    deployments.active = ["v3"]
    deployments.ever = ["v1", "v3"]

    page = await version_service.get_versions(
        user_id="alice", package_ref="fw", page=PageRequest(size=3)
    )

    assert [v.status for v in page.content] == [
        VersionStatus.was_used,
        VersionStatus.never_used,
        VersionStatus.in_use,
    ]
    assert page.total_elements == 9
    assert page.content[2].to_wire()["status"] == "inUse"


@pytest.mark.asyncio
async def test_single_version_carries_status(version_service, components, deployments) -> None:
    components.versions = {"v1": Version(id="v1", name="1.0.0", md5="abc")}

    version = await version_service.get_version(user_id="alice", package_ref="fw", version_id="v1")

    assert version.status is VersionStatus.never_used
    assert version.md5 == "abc"

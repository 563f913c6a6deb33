"""
tests.conftest

In-memory fakes for the backend clients, plus fixtures wiring them into the services.

Every fake records `(operation, args)` in `calls` so tests can assert exactly which remote
calls an operation made, and in which order.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

import pytest

from member_gateway.errors import RemoteServiceFailure
from member_gateway.models.filter import Filter
from member_gateway.models.package import PackageInfo
from member_gateway.models.page import Page, PageRequest
from member_gateway.models.segment import Segment, SegmentStatus
from member_gateway.models.update import Update, UpdateStatus, UpdateStatusCompatibility
from member_gateway.models.version import Version
from member_gateway.service_clients.registry import ServiceClients
from member_gateway.services.detail import DetailedUpdateAggregator
from member_gateway.services.devices import DeviceService
from member_gateway.services.filters import FilterService
from member_gateway.services.ownership import OwnershipValidator
from member_gateway.services.segments import SegmentService
from member_gateway.services.stats import SegmentStatsService
from member_gateway.services.updates import UpdateService
from member_gateway.services.versions import VersionService, VersionStatusClassifier


class FakeDeviceService:
    service_name = "device-service"

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.segments: dict[str, Segment] = {}
        self.by_status: dict[SegmentStatus, list[str]] = {
            SegmentStatus.active: [],
            SegmentStatus.inactive: [],
        }
        self.counts: dict[str, int] = {}
        self.version_counts: dict[tuple[str, str], int] = {}
        self.order: list[str] = []
        self.filters: dict[str, Filter] = {}
        self.devices: dict[str, dict[str, Any]] = {}
        # (query, total) pairs; a query matches by equality, `None` meaning every device.
        self.query_counts: list[tuple[dict[str, Any] | None, int]] = []

    def add_segment(self, segment: Segment, *, status: SegmentStatus | None = None) -> None:
        self.segments[segment.id] = segment
        if status is not None:
            self.by_status[status].append(segment.id)

    async def get_segment(self, segment_id: str) -> Segment:
        self.calls.append(("get_segment", segment_id))
        if segment_id not in self.segments:
            raise RemoteServiceFailure(service=self.service_name, status_code=404, detail="")
        return self.segments[segment_id]

    async def create_segment(self, segment: Segment) -> Segment:
        self.calls.append(("create_segment", segment))
        created = segment.model_copy(update={"id": f"seg-{len(self.segments) + 1}"})
        self.segments[created.id] = created
        return created

    async def update_segment(self, segment_id: str, segment: Segment) -> Segment:
        self.calls.append(("update_segment", segment_id))
        updated = segment.model_copy(update={"id": segment_id})
        self.segments[segment_id] = updated
        return updated

    async def get_segments_by_status(
        self, *, user_id: str, status: SegmentStatus
    ) -> list[Segment]:
        self.calls.append(("get_segments_by_status", (user_id, status)))
        return [
            self.segments[sid]
            for sid in self.by_status[status]
            if self.segments[sid].user_id == user_id
        ]

    async def get_segments_page(self, *, user_id: str, page: PageRequest) -> Page[Segment]:
        self.calls.append(("get_segments_page", (user_id, page)))
        owned = [s for s in self.segments.values() if s.user_id == user_id]
        return Page(content=owned, size=page.size, number=page.page, total_elements=42)

    async def update_segments_order(self, *, user_id: str, order: list[str]) -> list[str]:
        self.calls.append(("update_segments_order", list(order)))
        self.order = list(order)
        return list(order)

    async def get_devices_by_segment_page(
        self, *, user_id: str, segment_id: str, page: PageRequest
    ) -> Page[dict[str, Any]]:
        self.calls.append(("get_devices_by_segment_page", (segment_id, page)))
        total = self.counts.get(segment_id, 0)
        content = [{"unitId": f"{segment_id}-{i}"} for i in range(min(total, page.size))]
        return Page(content=content, size=page.size, number=page.page, total_elements=total)

    async def get_devices_by_segment_and_version_page(
        self, *, user_id: str, segment_id: str, version_id: str, page: PageRequest
    ) -> Page[dict[str, Any]]:
        self.calls.append(("get_devices_by_segment_and_version_page", (segment_id, version_id)))
        total = self.version_counts.get((segment_id, version_id), 0)
        return Page(content=[], size=page.size, number=page.page, total_elements=total)

    async def get_devices_page(
        self, *, user_id: str, page: PageRequest, query: dict[str, Any] | None = None
    ) -> Page[dict[str, Any]]:
        self.calls.append(("get_devices_page", (query, page)))
        total = next((n for q, n in self.query_counts if q == query), 0)
        content = list(self.devices.values())[: page.size]
        return Page(content=content, size=page.size, number=page.page, total_elements=total)

    async def get_device(self, *, user_id: str, unit_id: str) -> dict[str, Any]:
        self.calls.append(("get_device", unit_id))
        if unit_id not in self.devices:
            raise RemoteServiceFailure(service=self.service_name, status_code=404, detail="")
        return self.devices[unit_id]

    async def create_filter(self, *, user_id: str, filter_: Filter) -> Filter:
        self.calls.append(("create_filter", filter_.name))
        created = Filter(user_id=user_id, name=filter_.name, query=filter_.query)
        self.filters[created.name] = created
        return created

    async def get_filters_page(self, *, user_id: str, page: PageRequest) -> Page[Filter]:
        self.calls.append(("get_filters_page", page))
        content = list(self.filters.values())
        return Page(content=content, size=page.size, number=page.page, total_elements=len(content))

    async def get_filter(self, *, user_id: str, name: str) -> Filter:
        self.calls.append(("get_filter", name))
        if name not in self.filters:
            raise RemoteServiceFailure(service=self.service_name, status_code=404, detail="")
        return self.filters[name]

    async def update_filter(self, *, user_id: str, name: str, query: dict[str, Any]) -> Filter:
        self.calls.append(("update_filter", name))
        updated = self.filters[name].model_copy(update={"query": query})
        self.filters[name] = updated
        return updated

    async def delete_filter(self, *, user_id: str, name: str) -> None:
        self.calls.append(("delete_filter", name))
        self.filters.pop(name, None)

    def count_calls(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)


class FakePackageService:
    service_name = "package-service"

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.packages: dict[str, PackageInfo] = {}
        self.delays: dict[str, float] = {}
        self.failing: set[str] = set()
        self.in_flight = 0
        self.max_in_flight = 0

    def add(self, package: PackageInfo) -> None:
        self.packages[package.id] = package

    async def get_package_info(self, package_id: str) -> PackageInfo:
        self.calls.append(("get_package_info", package_id))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(package_id, 0))
            if package_id in self.failing or package_id not in self.packages:
                raise RemoteServiceFailure(
                    service=self.service_name, status_code=404, detail="no such package"
                )
            return self.packages[package_id]
        finally:
            self.in_flight -= 1


class FakeUpdateService:
    service_name = "update-service"

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.updates: dict[str, Update] = {}
        self.latest: dict[str | None, Update] = {}
        self.compatibilities = [
            UpdateStatusCompatibility(
                status=UpdateStatus.draft,
                compatible_statuses=[UpdateStatus.published, UpdateStatus.scheduled],
            ),
            UpdateStatusCompatibility(
                status=UpdateStatus.published, compatible_statuses=[UpdateStatus.archived]
            ),
        ]
        self.list_total: int | None = None
        self.list_number = 0

    def add(self, update: Update) -> None:
        self.updates[update.uuid] = update

    @property
    def writes(self) -> list[tuple[str, Any]]:
        return [c for c in self.calls if c[0] in ("create", "edit")]

    async def get_by_uuid_and_user(self, *, uuid: str, user_id: str) -> Update:
        # Deliberately lenient about the user so the gateway's own check is exercised.
        self.calls.append(("get_by_uuid_and_user", (uuid, user_id)))
        if uuid not in self.updates:
            raise RemoteServiceFailure(service=self.service_name, status_code=404, detail="")
        return self.updates[uuid]

    async def list_by_statuses_and_segments(
        self, *, page: PageRequest, user_id: str, statuses: Any, segment_ids: Any
    ) -> Page[Update]:
        self.calls.append(("list", (user_id, list(statuses), list(segment_ids))))
        content = [u for u in self.updates.values() if u.user_id == user_id]
        total = self.list_total if self.list_total is not None else len(content)
        return Page(content=content, size=page.size, number=self.list_number, total_elements=total)

    async def create(self, update: Update) -> Update:
        self.calls.append(("create", update))
        created = update.model_copy(
            update={
                "uuid": f"upd-{len(self.updates) + 1}",
                "revision_id": 1,
                "status": update.status or UpdateStatus.draft,
                "creation_date": datetime(2024, 1, 1, tzinfo=UTC),
            }
        )
        self.updates[created.uuid] = created
        return created

    async def edit(self, update: Update) -> Update:
        self.calls.append(("edit", update))
        edited = update.model_copy(update={"revision_id": (update.revision_id or 0) + 1})
        self.updates[edited.uuid] = edited
        return edited

    async def get_latest_for_segment(
        self, *, user_id: str, segment_id: str | None
    ) -> Update | None:
        self.calls.append(("get_latest_for_segment", segment_id))
        return self.latest.get(segment_id)

    async def get_all_status_compatibilities(self) -> list[UpdateStatusCompatibility]:
        self.calls.append(("get_all_status_compatibilities", None))
        return list(self.compatibilities)

    async def get_status_compatibilities(
        self, status: UpdateStatus
    ) -> UpdateStatusCompatibility:
        self.calls.append(("get_status_compatibilities", status))
        return next(c for c in self.compatibilities if c.status == status)


class FakeDeploymentService:
    service_name = "deployment-service"

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.active: list[str] = []
        self.ever: list[str] = []
        self.plans_by_filter: dict[str, int] = {}

    async def get_deployed_version_ids(
        self, *, user_id: str, package_ref: str, only_active: bool
    ) -> list[str]:
        self.calls.append(("get_deployed_version_ids", only_active))
        return list(self.active if only_active else self.ever)

    async def get_plans_by_filter_page(
        self, *, user_id: str, filter_name: str, page: PageRequest
    ) -> Page[dict[str, Any]]:
        self.calls.append(("get_plans_by_filter_page", filter_name))
        total = self.plans_by_filter.get(filter_name, 0)
        content = [{"name": f"plan-{i}"} for i in range(min(total, page.size))]
        return Page(content=content, size=page.size, number=page.page, total_elements=total)


class FakeComponentService:
    service_name = "component-service"

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.versions: dict[str, Version] = {}

    async def get_versions(
        self, *, user_id: str, package_ref: str, page: PageRequest
    ) -> Page[Version]:
        self.calls.append(("get_versions", package_ref))
        content = list(self.versions.values())
        return Page(content=content, size=page.size, number=page.page, total_elements=9)

    async def get_version(self, *, user_id: str, package_ref: str, version_id: str) -> Version:
        self.calls.append(("get_version", version_id))
        return self.versions[version_id]


def make_segment(segment_id: str, user_id: str = "alice", name: str | None = None) -> Segment:
    return Segment(
        id=segment_id,
        user_id=user_id,
        name=name or segment_id.title(),
        query={"eq": {"customClientData.region": segment_id}},
    )


def make_update(
    uuid: str | None = "upd-1",
    *,
    user_id: str = "alice",
    package_id: str = "pkg-1",
    segment_id: str | None = None,
    status: UpdateStatus | None = UpdateStatus.draft,
) -> Update:
    return Update(
        uuid=uuid,
        user_id=user_id,
        name=f"Update {uuid}",
        package_id=package_id,
        segment_id=segment_id,
        status=status,
        additional_properties={"channel": "beta", "tags": ["a", "b"], "limits": {"rate": 5}},
    )


@pytest.fixture
def devices() -> FakeDeviceService:
    return FakeDeviceService()


@pytest.fixture
def packages() -> FakePackageService:
    return FakePackageService()


@pytest.fixture
def updates() -> FakeUpdateService:
    return FakeUpdateService()


@pytest.fixture
def deployments() -> FakeDeploymentService:
    return FakeDeploymentService()


@pytest.fixture
def components() -> FakeComponentService:
    return FakeComponentService()


@pytest.fixture
def ownership(devices, packages, updates) -> OwnershipValidator:
    return OwnershipValidator(devices=devices, packages=packages, updates=updates)


@pytest.fixture
def segment_service(devices, ownership) -> SegmentService:
    return SegmentService(devices=devices, ownership=ownership)


@pytest.fixture
def aggregator(updates, packages, segment_service) -> DetailedUpdateAggregator:
    return DetailedUpdateAggregator(
        updates=updates, packages=packages, segments=segment_service, fanout_limit=16
    )


@pytest.fixture
def update_service(updates, ownership, segment_service, aggregator) -> UpdateService:
    return UpdateService(
        updates=updates, ownership=ownership, segments=segment_service, detail=aggregator
    )


@pytest.fixture
def version_service(components, deployments) -> VersionService:
    return VersionService(
        components=components,
        classifier=VersionStatusClassifier(deployments=deployments),
    )


@pytest.fixture
def stats_service(segment_service, updates, packages, devices) -> SegmentStatsService:
    return SegmentStatsService(
        segments=segment_service, updates=updates, packages=packages, devices=devices
    )


@pytest.fixture
def fake_clients(devices, packages, updates, deployments, components) -> ServiceClients:
    return ServiceClients(
        packages=packages,
        updates=updates,
        devices=devices,
        deployments=deployments,
        components=components,
    )


@pytest.fixture
def filter_service(devices, deployments) -> FilterService:
    return FilterService(devices=devices, deployments=deployments)


@pytest.fixture
def device_service(devices) -> DeviceService:
    return DeviceService(devices=devices)

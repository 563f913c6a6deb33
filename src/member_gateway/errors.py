"""
member_gateway.errors

Failure taxonomy shared by the clients, the services and the API layer.

Responsibilities:
- `OwnershipViolation`: the acting user does not own a referenced entity.
- `RemoteServiceFailure`: any failed call to a backend service, status preserved when known.
- `UnknownUpdateStatus`: a status name that is not part of the update lifecycle.
- `VirtualSegmentWrite`: a write addressed to the virtual "other" segment.
- `FilterInUse`: a filter still referenced by a deployment plan cannot be deleted.
- `InvalidDeviceQuery`: a device query parameter that is not a JSON object.
"""

from __future__ import annotations

from dataclasses import dataclass


class GatewayError(Exception):
    """Base class for errors raised by the gateway itself."""


@dataclass(eq=False)
class OwnershipViolation(GatewayError):
    """
    Raised when an entity's owner differs from the acting user (or from the owner of the
    entity referencing it). Surfaced to clients as 403 and never retried.
    """

    entity: str
    entity_id: str | None
    user_id: str | None

    def __str__(self) -> str:
        return f"{self.entity} owner differs from user"


@dataclass(eq=False)
class RemoteServiceFailure(GatewayError):
    """
    Raised for every non-successful backend call. `status_code` is None when the request never
    produced a response (connect error, timeout).
    """

    service: str
    status_code: int | None
    detail: str = ""

    def __str__(self) -> str:
        status = self.status_code if self.status_code is not None else "unreachable"
        return f"{self.service} call failed ({status}): {self.detail}"


@dataclass(eq=False)
class VirtualSegmentWrite(GatewayError):
    """
    Raised before any backend write addressed to the virtual "other" segment, which the device
    service does not store.
    """

    operation: str

    def __str__(self) -> str:
        return f"The 'other' segment cannot be used in {self.operation}"


@dataclass(eq=False)
class FilterInUse(GatewayError):
    name: str

    def __str__(self) -> str:
        return f"Filter '{self.name}' cannot be deleted because it's used by a deployment plan"


@dataclass(eq=False)
class InvalidDeviceQuery(GatewayError):
    query: str

    def __str__(self) -> str:
        return f"Device query is not a JSON object: {self.query}"


@dataclass(eq=False)
class UnknownUpdateStatus(GatewayError):
    name: str

    def __str__(self) -> str:
        return f"Unknown update status '{self.name}'"


# --- Module Notes -----------------------------------------------------------
# Handlers in `member_gateway.api.errors` map these to HTTP responses; nothing below the API
# layer catches them.

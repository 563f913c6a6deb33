"""
member_gateway.models.page

Paging primitives shared by the clients, services and routers.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class PageRequest:
    # Zero-based page number, as the backends expect.
    page: int = 0
    size: int = 20
    # Each entry is `property,direction` (e.g. `creationDate,desc`).
    sort: tuple[str, ...] = ()

    def to_params(self) -> list[tuple[str, str]]:
        params = [("page", str(self.page)), ("size", str(self.size))]
        params.extend(("sort", s) for s in self.sort)
        return params


@dataclass(frozen=True)
class Page(Generic[T]):
    content: list[T] = field(default_factory=list)
    size: int = 0
    number: int = 0
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        if self.total_elements <= 0 or self.size <= 0:
            return 0
        return ((self.total_elements - 1) // self.size) + 1

    def with_content(self, content: Sequence[U]) -> Page[U]:
        # Content replaces one-for-one; metadata is the backend's, untouched.
        return Page(
            content=list(content),
            size=self.size,
            number=self.number,
            total_elements=self.total_elements,
        )

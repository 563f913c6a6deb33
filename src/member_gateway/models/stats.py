from __future__ import annotations

from pydantic import Field

from member_gateway.models._base import WireModel


class DataSet(WireModel):
    values: dict[str, int] = Field(default_factory=dict)
    total: int = 0

    @classmethod
    def of(cls, values: dict[str, int]) -> DataSet:
        return cls(values=values, total=sum(values.values()))

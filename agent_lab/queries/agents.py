"""Query projection and filters for agents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from agent_lab.queries.builder import Builder
from agent_lab.queries.projection import Projection
from agent_lab.queries.sort import SortField

projection = (
    Projection("public", "agents", "a")
    .project("id", "ID")
    .project("name", "Name")
    .project("config", "Config")
    .project("created_at", "CreatedAt")
    .project("updated_at", "UpdatedAt")
)

default_sort = SortField("Name")

search_fields = ("Name",)


@dataclass(frozen=True)
class AgentFilters:
    name: str | None = None

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> AgentFilters:
        return cls(name=params.get("name") or None)

    def apply(self, builder: Builder) -> Builder:
        return builder.where_contains("Name", self.name)

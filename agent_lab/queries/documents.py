"""Query projection and filters for uploaded documents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from agent_lab.queries.builder import Builder
from agent_lab.queries.projection import Projection
from agent_lab.queries.sort import SortField

projection = (
    Projection("public", "documents", "d")
    .project("id", "ID")
    .project("name", "Name")
    .project("filename", "Filename")
    .project("content_type", "ContentType")
    .project("size_bytes", "SizeBytes")
    .project("page_count", "PageCount")
    .project("storage_key", "StorageKey")
    .project("created_at", "CreatedAt")
    .project("updated_at", "UpdatedAt")
)

# Newest uploads first.
default_sort = SortField("CreatedAt", descending=True)

search_fields = ("Name", "Filename")


@dataclass(frozen=True)
class DocumentFilters:
    name: str | None = None
    content_type: str | None = None

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> DocumentFilters:
        return cls(
            name=params.get("name") or None,
            content_type=params.get("content_type") or None,
        )

    def apply(self, builder: Builder) -> Builder:
        return builder.where_contains("Name", self.name).where_contains(
            "ContentType", self.content_type
        )

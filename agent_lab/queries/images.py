"""Query projection and filters for rendered page images."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from uuid import UUID

from agent_lab.queries.builder import Builder
from agent_lab.queries.projection import Projection
from agent_lab.queries.sort import SortField
from agent_lab.services.common import optional_int, optional_uuid


class ImageFormat(enum.Enum):
    png = "png"
    jpg = "jpg"

    @classmethod
    def parse(cls, value: str | None) -> ImageFormat | None:
        """Return the format for ``value`` or None when it is not supported."""
        if not value:
            return None
        normalized = value.strip().lower()
        if normalized == "jpeg":
            normalized = "jpg"
        try:
            return cls(normalized)
        except ValueError:
            return None


projection = (
    Projection("public", "images", "i")
    .project("id", "ID")
    .project("document_id", "DocumentID")
    .project("page_number", "PageNumber")
    .project("format", "Format")
    .project("dpi", "DPI")
    .project("quality", "Quality")
    .project("brightness", "Brightness")
    .project("contrast", "Contrast")
    .project("saturation", "Saturation")
    .project("rotation", "Rotation")
    .project("background", "Background")
    .project("storage_key", "StorageKey")
    .project("size_bytes", "SizeBytes")
    .project("created_at", "CreatedAt")
)

default_sort = SortField("CreatedAt", descending=True)

search_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImageFilters:
    """Optional image criteria. Malformed query values are dropped."""

    document_id: UUID | None = None
    format: ImageFormat | None = None
    page_number: int | None = None

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> ImageFilters:
        return cls(
            document_id=optional_uuid(params.get("document_id")),
            format=ImageFormat.parse(params.get("format")),
            page_number=optional_int(params.get("page_number")),
        )

    def apply(self, builder: Builder) -> Builder:
        # UUIDs are bound as text.
        document_id = str(self.document_id) if self.document_id else None
        image_format = self.format.value if self.format else None
        return (
            builder.where_equals("DocumentID", document_id)
            .where_equals("Format", image_format)
            .where_equals("PageNumber", self.page_number)
        )

"""Read services for list and detail endpoints.

Each service binds a projection, default sort and search fields to the
shared list/get flow: normalize the page request, chain search, filters and
sort onto one builder, then run the count and page queries it emits.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, ClassVar, Protocol
from uuid import UUID

from agent_lab.config import settings
from agent_lab.queries import agents as agent_queries
from agent_lab.queries import documents as document_queries
from agent_lab.queries import images as image_queries
from agent_lab.queries import profiles as profile_queries
from agent_lab.queries import providers as provider_queries
from agent_lab.queries import workflows as workflow_queries
from agent_lab.queries.builder import Builder
from agent_lab.queries.projection import Projection
from agent_lab.queries.sort import SortField
from agent_lab.services.common import InvalidInputError, coerce_uuid
from agent_lab.services.pagination import PageRequest, PageResult, PaginationConfig
from agent_lab.services.repository import (
    NotFoundError,
    map_error,
    query_many,
    query_one,
    query_scalar,
    row_scanner,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class Filters(Protocol):
    def apply(self, builder: Builder) -> Builder: ...


class InvalidSortError(InvalidInputError):
    pass


class AgentNotFound(NotFoundError):
    default_message = "agent not found"


class ProviderNotFound(NotFoundError):
    default_message = "provider not found"


class DocumentNotFound(NotFoundError):
    default_message = "document not found"


class ImageNotFound(NotFoundError):
    default_message = "image not found"


class ProfileNotFound(NotFoundError):
    default_message = "profile not found"


class RunNotFound(NotFoundError):
    default_message = "run not found"


def _fold(name: str) -> str:
    return name.replace("_", "").lower()


def resolve_sort_fields(fields: Iterable[SortField], projection: Projection) -> list[SortField]:
    """Map caller sort names onto the logical names ``projection`` registers.

    Matching ignores case and underscores, so ``created_at``, ``createdAt``
    and ``CreatedAt`` all resolve to ``CreatedAt``.

    Raises:
        InvalidSortError: if any field is not registered.
    """
    lookup = {_fold(name): name for name in projection.names()}
    resolved: list[SortField] = []
    unknown: list[str] = []
    for sort_field in fields:
        name = lookup.get(_fold(sort_field.field))
        if name is None:
            unknown.append(sort_field.field)
        else:
            resolved.append(SortField(name, sort_field.descending))
    if unknown:
        allowed = ", ".join(projection.names())
        raise InvalidSortError(
            f"Unknown sort field(s): {', '.join(unknown)}. Allowed: {allowed}."
        )
    return resolved


def default_pagination() -> PaginationConfig:
    """Finalized page-size bounds from settings and the environment."""
    config = PaginationConfig()
    config.merge(settings.pagination)
    return config.finalize()


class ResourceService:
    """Shared list/get flow for one projected table.

    Subclasses set:
    1. ``projection`` and ``default_sort`` from the resource's query module
    2. ``search_fields`` for the free-text ``search`` parameter
    3. ``not_found`` raised when a lookup by id misses
    """

    name: ClassVar[str]
    projection: ClassVar[Projection]
    default_sort: ClassVar[tuple[SortField, ...]] = ()
    search_fields: ClassVar[tuple[str, ...]] = ()
    id_field: ClassVar[str] = "ID"
    not_found: ClassVar[type[NotFoundError]] = NotFoundError

    def __init__(self, pagination: PaginationConfig | None = None):
        self._pagination = pagination

    @property
    def pagination(self) -> PaginationConfig:
        if self._pagination is None:
            self._pagination = default_pagination()
        return self._pagination

    def builder(self, page: PageRequest, filters: Filters | None = None) -> Builder:
        """Chain search, filters and the requested sort onto a new builder."""
        builder = Builder(self.projection, *self.default_sort).where_search(
            page.search, *self.search_fields
        )
        if filters is not None:
            filters.apply(builder)
        if page.sort:
            builder.order_by_fields(page.sort)
        return builder

    def list(
        self, db: Session, page: PageRequest, filters: Filters | None = None
    ) -> PageResult[dict[str, Any]]:
        page = page.model_copy(deep=True).normalize(self.pagination)
        page.sort = resolve_sort_fields(page.sort, self.projection)
        builder = self.builder(page, filters)

        count_sql, count_args = builder.build_count()
        total = query_scalar(db, count_sql, count_args) or 0

        page_sql, page_args = builder.build_page(page.page, page.page_size)
        rows = query_many(db, page_sql, page_args, row_scanner(self.projection))

        logger.debug(
            "resource_list name=%s page=%s page_size=%s total=%s",
            self.name,
            page.page,
            page.page_size,
            total,
        )
        return PageResult.build(rows, total, page.page, page.page_size)

    def get(self, db: Session, id: UUID | str) -> dict[str, Any]:
        sql, args = Builder(self.projection).build_single(self.id_field, str(coerce_uuid(id)))
        try:
            return query_one(db, sql, args, row_scanner(self.projection))
        except NotFoundError as exc:
            raise map_error(exc, self.not_found) from exc


class Agents(ResourceService):
    name = "agents"
    projection = agent_queries.projection
    default_sort = (agent_queries.default_sort,)
    search_fields = agent_queries.search_fields
    not_found = AgentNotFound


class Providers(ResourceService):
    name = "providers"
    projection = provider_queries.projection
    default_sort = (provider_queries.default_sort,)
    search_fields = provider_queries.search_fields
    not_found = ProviderNotFound


class Documents(ResourceService):
    name = "documents"
    projection = document_queries.projection
    default_sort = (document_queries.default_sort,)
    search_fields = document_queries.search_fields
    not_found = DocumentNotFound


class Images(ResourceService):
    name = "images"
    projection = image_queries.projection
    default_sort = (image_queries.default_sort,)
    search_fields = image_queries.search_fields
    not_found = ImageNotFound


class Profiles(ResourceService):
    name = "profiles"
    projection = profile_queries.projection
    default_sort = (profile_queries.default_sort,)
    search_fields = profile_queries.search_fields
    not_found = ProfileNotFound

    def get(self, db: Session, id: UUID | str) -> dict[str, Any]:
        """Return the profile with its ``Stages`` ordered by stage name."""
        profile = super().get(db, id)
        sql, args = profile_queries.stages_query(profile["ID"]).build()
        profile["Stages"] = query_many(
            db, sql, args, row_scanner(profile_queries.stage_projection)
        )
        return profile


class Runs(ResourceService):
    name = "runs"
    projection = workflow_queries.run_projection
    default_sort = (workflow_queries.run_default_sort,)
    not_found = RunNotFound

    def stages(self, db: Session, run_id: UUID | str) -> list[dict[str, Any]]:
        run = self.get(db, run_id)
        sql, args = workflow_queries.stages_query(run["ID"]).build()
        return query_many(db, sql, args, row_scanner(workflow_queries.stage_projection))

    def decisions(self, db: Session, run_id: UUID | str) -> list[dict[str, Any]]:
        run = self.get(db, run_id)
        sql, args = workflow_queries.decisions_query(run["ID"]).build()
        return query_many(
            db, sql, args, row_scanner(workflow_queries.decision_projection)
        )


agents = Agents()
providers = Providers()
documents = Documents()
images = Images()
profiles = Profiles()
runs = Runs()

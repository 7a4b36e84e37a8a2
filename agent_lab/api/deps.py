from fastapi import Query

from agent_lab.db import get_db
from agent_lab.services.pagination import PageRequest
from agent_lab.services.resources import default_pagination

__all__ = ["get_db", "page_request"]


def page_request(
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None),
    search: str | None = Query(default=None),
    sort: str | None = Query(default=None, description="e.g. name,-created_at"),
) -> PageRequest:
    """Collect paging parameters from the query string.

    Numbers are taken as raw strings so unparseable values fall back to the
    defaults, and out-of-range values are clamped rather than rejected.
    """
    params = {"page": page, "page_size": page_size, "search": search, "sort": sort}
    return PageRequest.from_query(params, default_pagination())

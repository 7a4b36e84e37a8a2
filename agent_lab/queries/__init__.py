"""Query builders for database reads.

This package turns chained filter, search and sort calls into
parameterized PostgreSQL text plus an argument list. It never executes
SQL; see :mod:`agent_lab.services.repository` for that.

Usage:
    from agent_lab.queries import Builder, parse_sort_fields
    from agent_lab.queries import profiles

    builder = (
        Builder(profiles.projection, profiles.default_sort)
        .where_search(search, *profiles.search_fields)
        .order_by_fields(parse_sort_fields("-CreatedAt"))
    )
    profiles.ProfileFilters(workflow_name="summarize").apply(builder)

    count_sql, count_args = builder.build_count()
    page_sql, page_args = builder.build_page(page=2, page_size=10)
"""

from agent_lab.queries.builder import Builder
from agent_lab.queries.projection import Projection
from agent_lab.queries.sort import SortField, parse_sort_fields

__all__ = [
    "Builder",
    "Projection",
    "SortField",
    "parse_sort_fields",
]

"""Parameterized SQL builder.

Accumulates filter and sort intent against a :class:`Projection` and emits
PostgreSQL text with numbered placeholders plus the matching argument list.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Self

from agent_lab.queries.projection import Projection
from agent_lab.queries.sort import SortField


@dataclass(frozen=True)
class _Predicate:
    clause: str
    args: tuple[Any, ...]

    @property
    def placeholders(self) -> int:
        return len(self.args)


class Builder:
    """Fluent builder for count, page and single-row queries.

    Filter and sort methods mutate the builder and return it for chaining.
    Placeholders are numbered when a predicate is added, so every query
    emitted from the same state shares identical WHERE text and arguments.

    Usage:
        sql, args = (
            Builder(projection, SortField("Name"))
            .where_equals("WorkflowName", workflow_name)
            .where_search(search, "Name", "Description")
            .build_page(page, page_size)
        )
    """

    def __init__(self, projection: Projection, *default_sort: SortField):
        self.projection = projection
        self._default_sort: tuple[SortField, ...] = default_sort
        self._sort: tuple[SortField, ...] = ()
        self._predicates: list[_Predicate] = []
        self._next_param = 1

    def _add(self, clause: str, args: Sequence[Any]) -> Self:
        predicate = _Predicate(clause, tuple(args))
        self._predicates.append(predicate)
        self._next_param += predicate.placeholders
        return self

    def _placeholder(self, offset: int = 0) -> str:
        return f"${self._next_param + offset}"

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    def where_equals(self, field: str, value: Any) -> Self:
        """Add ``col = $N``. ``None`` is ignored."""
        if value is None:
            return self
        column = self.projection.column(field)
        return self._add(f"{column} = {self._placeholder()}", [value])

    def where_contains(self, field: str, text: str | None) -> Self:
        """Add a case-insensitive substring match. None or empty is ignored."""
        if not text:
            return self
        column = self.projection.column(field)
        return self._add(f"{column} ILIKE {self._placeholder()}", [f"%{text}%"])

    def where_in(self, field: str, values: Iterable[Any] | None) -> Self:
        """Add ``col IN (...)``. An empty collection adds nothing."""
        items = list(values or ())
        if not items:
            return self
        column = self.projection.column(field)
        placeholders = ", ".join(self._placeholder(i) for i in range(len(items)))
        return self._add(f"{column} IN ({placeholders})", items)

    def where_search(self, text: str | None, *fields: str) -> Self:
        """Match ``text`` against any of ``fields``, OR-ed together."""
        if not text or not fields:
            return self
        pattern = f"%{text}%"
        clauses = [
            f"{self.projection.column(field)} ILIKE {self._placeholder(i)}"
            for i, field in enumerate(fields)
        ]
        return self._add("(" + " OR ".join(clauses) + ")", [pattern] * len(fields))

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def order_by(self, field: str, descending: bool = False) -> Self:
        """Replace the explicit sort with one field. Empty clears it."""
        self._sort = (SortField(field, descending),) if field else ()
        return self

    def order_by_fields(self, fields: Iterable[SortField] | None) -> Self:
        """Replace the explicit sort. Empty or None falls back to the default."""
        self._sort = tuple(fields or ())
        return self

    @property
    def sort(self) -> tuple[SortField, ...]:
        """Effective sort: the explicit sort if set, else the default."""
        return self._sort or self._default_sort

    # -------------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------------

    def _where(self) -> tuple[str, list[Any]]:
        if not self._predicates:
            return "", []
        clause = " AND ".join(p.clause for p in self._predicates)
        args = [arg for p in self._predicates for arg in p.args]
        return f" WHERE {clause}", args

    def _order_by(self) -> str:
        fields = self.sort
        if not fields:
            return ""
        terms = ", ".join(
            f"{self.projection.column(f.field)} {'DESC' if f.descending else 'ASC'}"
            for f in fields
        )
        return f" ORDER BY {terms}"

    def build_count(self) -> tuple[str, list[Any]]:
        """Return a ``COUNT(*)`` query over the accumulated predicates."""
        where, args = self._where()
        return f"SELECT COUNT(*) FROM {self.projection.table}{where}", args

    def build_page(self, page: int, page_size: int) -> tuple[str, list[Any]]:
        """Return an ordered, windowed select. ``page`` is 1-indexed."""
        where, args = self._where()
        offset = (page - 1) * page_size
        sql = (
            f"SELECT {self.projection.columns()} FROM {self.projection.table}"
            f"{where}{self._order_by()} LIMIT {page_size} OFFSET {offset}"
        )
        return sql, args

    def build(self) -> tuple[str, list[Any]]:
        """Return an ordered select of every matching row, without a window."""
        where, args = self._where()
        sql = (
            f"SELECT {self.projection.columns()} FROM {self.projection.table}"
            f"{where}{self._order_by()}"
        )
        return sql, args

    def build_single(self, field: str, value: Any) -> tuple[str, list[Any]]:
        """Return an exact-match lookup on ``field``.

        Ignores any accumulated predicates.
        """
        sql = (
            f"SELECT {self.projection.columns()} FROM {self.projection.table} "
            f"WHERE {self.projection.column(field)} = $1"
        )
        return sql, [value]

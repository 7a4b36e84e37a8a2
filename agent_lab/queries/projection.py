"""Column projection for a single table.

A projection maps the logical field names used by filters, sorts and API
consumers onto the physical columns of one aliased table. Projections are
built once at import time and shared read-only by every request.
"""

from __future__ import annotations

from typing import Self


class Projection:
    """Immutable mapping of logical field names to qualified columns.

    Usage:
        profiles = (
            Projection("public", "profiles", "p")
            .project("id", "ID")
            .project("name", "Name")
        )
        profiles.column("Name")  # "p.name"
        profiles.table           # "public.profiles p"
    """

    __slots__ = ("_schema", "_table", "_alias", "_columns")

    def __init__(self, schema: str, table: str, alias: str):
        self._schema = schema
        self._table = table
        self._alias = alias
        self._columns: dict[str, str] = {}

    def _clone(self) -> Self:
        """Create a copy of this projection with its current mappings."""
        new = self.__class__.__new__(self.__class__)
        new._schema = self._schema
        new._table = self._table
        new._alias = self._alias
        new._columns = dict(self._columns)
        return new

    def project(self, column: str, name: str) -> Self:
        """Register ``column`` under the logical ``name``.

        Returns a new projection. Re-registering a name replaces its column
        but keeps its original position in the select list.
        """
        clone = self._clone()
        clone._columns[name] = column
        return clone

    @property
    def schema(self) -> str:
        return self._schema

    @property
    def alias(self) -> str:
        return self._alias

    @property
    def table(self) -> str:
        """Qualified table reference with alias, e.g. ``public.users u``."""
        return f"{self._schema}.{self._table} {self._alias}"

    def column(self, name: str) -> str:
        """Return the alias-qualified column for a logical name.

        Unregistered names are returned unchanged so callers can pass
        already-qualified expressions through.
        """
        column = self._columns.get(name)
        if column is None:
            return name
        return f"{self._alias}.{column}"

    def column_list(self) -> list[str]:
        return [f"{self._alias}.{column}" for column in self._columns.values()]

    def columns(self) -> str:
        """Comma-separated select list in registration order."""
        return ", ".join(self.column_list())

    def names(self) -> list[str]:
        """Logical names in registration order."""
        return list(self._columns)

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"Projection({self.table!r}, fields={self.names()!r})"

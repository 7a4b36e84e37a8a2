"""Execution of builder output through SQLAlchemy.

The query builders emit PostgreSQL numbered placeholders (``$1``); this
module rewrites them to SQLAlchemy named binds and runs the statements on a
:class:`~sqlalchemy.orm.Session`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.sql.elements import TextClause

if TYPE_CHECKING:
    from sqlalchemy.engine import Row
    from sqlalchemy.orm import Session

    from agent_lab.queries.projection import Projection

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNIQUE_VIOLATION = "23505"

_PLACEHOLDER = re.compile(r"\$(\d+)")


class RepositoryError(Exception):
    """Base class for data access failures raised by this package."""


class NotFoundError(RepositoryError):
    default_message = "record not found"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class DuplicateError(RepositoryError):
    default_message = "record already exists"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


def bind(sql: str, args: Sequence[Any]) -> tuple[TextClause, dict[str, Any]]:
    """Convert ``$N`` placeholders to ``:pN`` binds keyed by position."""
    params = {f"p{i}": value for i, value in enumerate(args, start=1)}
    return text(_PLACEHOLDER.sub(r":p\1", sql)), params


def _execute(db: Session, sql: str, args: Sequence[Any]):
    statement, params = bind(sql, args)
    logger.debug("sql_execute sql=%s args=%s", sql, list(args))
    return db.execute(statement, params)


def query_scalar(db: Session, sql: str, args: Sequence[Any]) -> Any:
    """Return the first column of the first row, e.g. a ``COUNT(*)``."""
    return _execute(db, sql, args).scalar()


def query_one(db: Session, sql: str, args: Sequence[Any], scan: Callable[[Row], T]) -> T:
    """Return the first row mapped by ``scan``.

    Raises:
        NotFoundError: if the query returns no rows.
    """
    row = _execute(db, sql, args).first()
    if row is None:
        raise NotFoundError()
    return scan(row)


def query_many(db: Session, sql: str, args: Sequence[Any], scan: Callable[[Row], T]) -> list[T]:
    return [scan(row) for row in _execute(db, sql, args)]


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    # psycopg 3 exposes ``sqlstate``, psycopg2 exposes ``pgcode``.
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def map_error(
    exc: BaseException | None,
    not_found: type[Exception],
    duplicate: type[Exception] | None = None,
) -> BaseException | None:
    """Translate driver-level failures into domain exceptions.

    Missing rows become ``not_found`` and unique violations become
    ``duplicate`` when one is given. Anything else is returned unchanged.
    """
    if exc is None:
        return None
    if isinstance(exc, (NotFoundError, NoResultFound)):
        return not_found()
    if duplicate is not None and isinstance(exc, IntegrityError):
        if _sqlstate(exc) == UNIQUE_VIOLATION:
            return duplicate(str(exc.orig))
    return exc


def row_scanner(projection: Projection) -> Callable[[Row], dict[str, Any]]:
    """Map rows selected with ``projection.columns()`` to dicts keyed by logical name."""
    names = projection.names()

    def scan(row: Row) -> dict[str, Any]:
        return dict(zip(names, row, strict=True))

    return scan

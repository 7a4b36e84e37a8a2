"""Page request normalization and paged result envelopes."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, Field, field_validator

from agent_lab.queries.sort import SortField, parse_sort_fields

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PaginationEnv:
    """Environment variable names consulted by :meth:`PaginationConfig.finalize`."""

    default_page_size: str = "PAGINATION_DEFAULT_PAGE_SIZE"
    max_page_size: str = "PAGINATION_MAX_PAGE_SIZE"


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass
class PaginationConfig:
    default_page_size: int = 0
    max_page_size: int = 0

    def finalize(self, env: PaginationEnv | None = None) -> Self:
        """Apply defaults, then environment overrides, then validate.

        Raises:
            ValueError: if either size is not positive or the default
                exceeds the maximum.
        """
        if self.default_page_size <= 0:
            self.default_page_size = DEFAULT_PAGE_SIZE
        if self.max_page_size <= 0:
            self.max_page_size = MAX_PAGE_SIZE

        env = env or PaginationEnv()
        default_override = _env_int(env.default_page_size)
        if default_override is not None:
            self.default_page_size = default_override
        max_override = _env_int(env.max_page_size)
        if max_override is not None:
            self.max_page_size = max_override

        if self.default_page_size < 1:
            raise ValueError("default_page_size must be positive")
        if self.max_page_size < 1:
            raise ValueError("max_page_size must be positive")
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        return self

    def merge(self, overlay: PaginationConfig) -> None:
        """Copy non-zero values from ``overlay`` onto this config."""
        if overlay.default_page_size:
            self.default_page_size = overlay.default_page_size
        if overlay.max_page_size:
            self.max_page_size = overlay.max_page_size


def _parse_int(value: str | None, fallback: int) -> int:
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


class PageRequest(BaseModel):
    """A client's request for one page of a listing."""

    page: int = 1
    page_size: int = 0
    search: str | None = None
    sort: list[SortField] = Field(default_factory=list)

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return parse_sort_fields(value)
        if isinstance(value, list):
            return value
        raise ValueError("sort must be a sort string or a list of sort fields")

    @field_validator("search", mode="before")
    @classmethod
    def _blank_search(cls, value: Any) -> Any:
        if isinstance(value, str) and not value:
            return None
        return value

    def normalize(self, config: PaginationConfig) -> Self:
        """Clamp page and page size into the configured bounds."""
        if self.page < 1:
            self.page = 1
        if self.page_size < 1:
            self.page_size = config.default_page_size
        if self.page_size > config.max_page_size:
            self.page_size = config.max_page_size
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @classmethod
    def from_query(cls, params: Mapping[str, str], config: PaginationConfig) -> PageRequest:
        """Build a normalized request from query-string values.

        Unparseable numbers fall back to the defaults instead of failing.
        """
        request = cls(
            page=_parse_int(params.get("page"), 1),
            page_size=_parse_int(params.get("page_size"), config.default_page_size),
            search=params.get("search"),
            sort=params.get("sort"),
        )
        return request.normalize(config)


class PageResult(BaseModel, Generic[T]):
    data: list[T] = Field(default_factory=list)
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, data: list[T] | None, total: int, page: int, page_size: int) -> PageResult[T]:
        total_pages = max(1, math.ceil(total / page_size)) if page_size > 0 else 1
        return cls(
            data=list(data or []),
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
        )

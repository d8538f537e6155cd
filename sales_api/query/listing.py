"""
Generic list-query pipeline.

A ``ListSpec`` declares, once per entity type, which filters a listing
accepts and which columns it may be sorted by. ``fetch_page`` turns a
``PageRequest`` plus raw filter values into one bounded, ordered page and
the pagination totals, loading no more than ``limit`` rows.

Filter values arrive as raw query strings and are parsed leniently: a value
that cannot be read as the column's type is skipped, never rejected.
"""

import enum
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy.sql.elements import ColumnElement

from sales_api.query.enums import parse_or_ignore

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


def parse_int(raw: Any) -> Optional[int]:
    """Read an integer filter value, or None if there isn't one"""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def parse_datetime(raw: Any) -> Optional[datetime]:
    """Read an ISO-8601 timestamp filter value, or None if there isn't one"""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class PageRequest:
    """Page, size and ordering requested by the client"""
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: Optional[str] = None
    sort_direction: Optional[str] = None

    @classmethod
    def build(
        cls,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> "PageRequest":
        """Clamp out-of-range page/limit values to their defaults"""
        if page is None or page < 1:
            page = DEFAULT_PAGE
        if limit is None or limit < 1:
            limit = DEFAULT_LIMIT
        return cls(page=page, limit=limit, sort_by=sort_by, sort_direction=sort_direction)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Filter:
    """Turns one raw filter value into a WHERE clause, or None to skip it"""

    def clause(self, raw: Any) -> Optional[ColumnElement]:
        raise NotImplementedError


@dataclass(frozen=True)
class ContainsFilter(Filter):
    """Substring match on a text column; blank values are skipped"""
    column: Any

    def clause(self, raw: Any) -> Optional[ColumnElement]:
        if raw is None:
            return None
        text = str(raw)
        if not text.strip():
            return None
        return self.column.contains(text, autoescape=True)


@dataclass(frozen=True)
class EqualsFilter(Filter):
    """Exact match on a scalar column after lenient parsing"""
    column: Any
    parser: Callable[[Any], Any] = parse_int

    def clause(self, raw: Any) -> Optional[ColumnElement]:
        value = self.parser(raw)
        if value is None:
            return None
        return self.column == value


@dataclass(frozen=True)
class EnumFilter(Filter):
    """Exact match on an enum column; unknown member names are skipped"""
    column: Any
    enum_cls: Type[enum.Enum]

    def clause(self, raw: Any) -> Optional[ColumnElement]:
        member = parse_or_ignore(self.enum_cls, raw)
        if member is None:
            return None
        return self.column == member


@dataclass(frozen=True)
class ListSpec:
    """Filters and sort-key whitelist for listing one entity type"""
    model: Any
    filters: Mapping[str, Filter]
    sort_keys: Mapping[str, Any]
    default_sort: str
    default_direction: str = "asc"

    def where(self, raw_filters: Mapping[str, Any]) -> List[ColumnElement]:
        clauses = []
        for name, spec_filter in self.filters.items():
            clause = spec_filter.clause(raw_filters.get(name))
            if clause is not None:
                clauses.append(clause)
        return clauses

    def sort_column(self, sort_by: Optional[str]):
        """Resolve a sort key case-insensitively, falling back to the default"""
        lookup = {key.lower(): column for key, column in self.sort_keys.items()}
        default = lookup[self.default_sort.lower()]
        if not sort_by:
            return default
        return lookup.get(sort_by.lower(), default)

    def is_ascending(self, sort_direction: Optional[str]) -> bool:
        direction = self.default_direction if sort_direction is None else sort_direction
        return direction.lower() == "asc"

    def order_by(self, request: PageRequest) -> List[Any]:
        column = self.sort_column(request.sort_by)
        if self.is_ascending(request.sort_direction):
            return [column.asc(), self.model.id.asc()]
        return [column.desc(), self.model.id.desc()]


@dataclass
class Page(Generic[T]):
    """One page of entities plus pagination totals"""
    items: Sequence[T]
    page: int
    limit: int
    total: int
    total_pages: int = field(default=0)


async def fetch_page(repo, spec: ListSpec, request: PageRequest, raw_filters: Mapping[str, Any]) -> Page:
    """Count the filtered set, then load the requested slice of it"""
    clauses = spec.where(raw_filters)

    total = await repo.count(clauses)
    total_pages = math.ceil(total / request.limit)

    items = await repo.fetch(
        clauses,
        order_by=spec.order_by(request),
        offset=request.offset,
        limit=request.limit,
    )

    return Page(
        items=items,
        page=request.page,
        limit=request.limit,
        total=total,
        total_pages=total_pages,
    )

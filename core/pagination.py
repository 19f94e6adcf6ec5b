"""
Page requests and paged query execution.

A page request carries a zero-based page index, a page size and an optional
sort expression of the form ``field`` or ``field,asc|desc``. Sort fields are
the camelCase names used on the wire; each resource passes the mapping of the
fields it allows to the columns they sort by.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Query
from sqlalchemy.orm import Query as SAQuery
from sqlalchemy.sql.elements import ColumnElement

from core.config import settings
from core.db import MAX_DB_INT
from core.errors import InvalidArgumentError


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 10
    sort: Optional[str] = None

    def __post_init__(self):
        if self.page < 0:
            raise InvalidArgumentError("Page index must not be less than zero")
        if self.size < 1:
            raise InvalidArgumentError("Page size must not be less than one")
        if self.size > settings.MAX_PAGE_SIZE:
            raise InvalidArgumentError(f"Page size must not be greater than {settings.MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return self.page * self.size


def page_request(
    page: int = Query(0, description="Zero-based page index"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, description="Page size"),
    sort: Optional[str] = Query(None, description="Sort as field or field,asc|desc", examples=["createdAt,desc"]),
) -> PageRequest:
    """FastAPI dependency building a PageRequest from query parameters."""
    return PageRequest(page=page, size=size, sort=sort)


def parse_sort(sort: Optional[str], sortable: Dict[str, ColumnElement]) -> list:
    if not sort:
        return []
    field, _, direction = sort.partition(",")
    field = field.strip()
    direction = direction.strip().lower() or "asc"
    if field not in sortable:
        allowed = ", ".join(sorted(sortable))
        raise InvalidArgumentError(f"Cannot sort by '{field}', expected one of: {allowed}")
    if direction not in ("asc", "desc"):
        raise InvalidArgumentError(f"Sort direction must be 'asc' or 'desc', got '{direction}'")
    column = sortable[field]
    return [column.desc() if direction == "desc" else column.asc()]


LIKE_ESCAPE = "\\"


def like_pattern(term: str) -> str:
    """Substring pattern for ``ilike(..., escape=LIKE_ESCAPE)``, wildcards in ``term`` taken literally."""
    term = term.strip()
    if not term:
        raise InvalidArgumentError("Search query must not be blank")
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return f"%{term}%"


def paginate(query: SAQuery, request: PageRequest, sortable: Dict[str, ColumnElement], tiebreak: ColumnElement) -> Dict[str, Any]:
    """Run ``query`` for one page.

    The count and the slice use the same filtered query inside the caller's
    session. ``tiebreak`` (normally the primary key) is always appended to the
    ordering so that pages never overlap.
    """
    order_by = parse_sort(request.sort, sortable)
    total = query.order_by(None).count()
    if request.offset >= total or request.offset > MAX_DB_INT:
        # Past the last row; huge offsets would not even bind as an integer
        items = []
    else:
        items = (
            query.order_by(*order_by, tiebreak.asc())
            .offset(request.offset)
            .limit(request.size)
            .all()
        )
    return {
        "content": items,
        "page": request.page,
        "size": request.size,
        "total_elements": total,
        "total_pages": math.ceil(total / request.size) if total else 0,
    }

# backend/projectmanager/services/pagination.py
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import Query, Request
from sqlalchemy import asc, desc
from sqlalchemy.orm import Query as SAQuery

from .exceptions import NotFoundError

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# keeps page * page_size inside a signed 64-bit OFFSET
MAX_PAGE = 10 ** 12


def _coerce_positive(value: Optional[str], default: int, maximum: int) -> int:
    """Parse a textual query value, falling back to the default and clamping to 1..maximum"""
    try:
        number = int(value) if value is not None else default
    except (TypeError, ValueError):
        number = default
    return min(max(1, number), maximum)


@dataclass
class PageParams:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    paginate: bool = True
    sort: Optional[str] = None

    @classmethod
    def parse(cls, page: Optional[str] = None, per_page: Optional[str] = None,
              paginate: Optional[str] = None, sort: Optional[str] = None,
              default_page_size: Optional[int] = None,
              max_page_size: Optional[int] = None) -> "PageParams":
        max_page_size = max_page_size or MAX_PAGE_SIZE
        return cls(
            page=_coerce_positive(page, 1, MAX_PAGE),
            page_size=_coerce_positive(
                per_page, min(default_page_size or DEFAULT_PAGE_SIZE, max_page_size), max_page_size
            ),
            paginate=paginate.strip().lower() == "true" if paginate is not None else True,
            sort=sort or None,
        )


def page_params(
        request: Request,
        page: Optional[str] = Query(None),
        per_page: Optional[str] = Query(None, alias="perPage"),
        paginate: Optional[str] = Query(None),
        sort: Optional[str] = Query(None),
) -> PageParams:
    """FastAPI dependency reading the pagination query string"""
    app_settings = request.app.state.settings
    return PageParams.parse(page, per_page, paginate, sort,
                            default_page_size=app_settings.DEFAULT_PAGE_SIZE,
                            max_page_size=app_settings.MAX_PAGE_SIZE)


@dataclass
class Page:
    items: List[Any]
    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        if self.total_count == 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    def to_dict(self, serialize=None) -> Dict[str, Any]:
        items = [serialize(item) for item in self.items] if serialize else list(self.items)
        return {
            "items": items,
            "page": self.page,
            "pageSize": self.page_size,
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
        }


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def apply_filters(query: SAQuery, filters: Dict[Any, Optional[str]]) -> SAQuery:
    """Case-insensitive substring match for every filter with a value"""
    for column, value in filters.items():
        if value is None or value == "":
            continue
        query = query.filter(column.ilike(f"%{escape_like(value)}%", escape="\\"))
    return query


def apply_sort(query: SAQuery, sort: Optional[str], sortable: Dict[str, Any], default) -> SAQuery:
    """Order by a whitelisted field; a leading '-' sorts descending"""
    if sort:
        descending = sort.startswith("-")
        column = sortable.get(sort.lstrip("-"))
        if column is not None:
            return query.order_by(desc(column) if descending else asc(column), asc(default))
    return query.order_by(asc(default))


def paginate(query: SAQuery, params: PageParams, resource: str = "records") -> Page:
    """Slice a filtered, sorted query into one page.

    With ``paginate`` off the whole result set is returned as page 1. An empty
    page raises NotFoundError so callers answer 404 rather than an empty list.
    """
    total = query.order_by(None).count()

    if params.paginate:
        items = query.offset((params.page - 1) * params.page_size).limit(params.page_size).all()
        result = Page(items=items, page=params.page, page_size=params.page_size, total_count=total)
    else:
        items = query.all()
        result = Page(items=items, page=1, page_size=max(1, total), total_count=total)

    if not result.items:
        raise NotFoundError(f"No {resource} found.")
    return result

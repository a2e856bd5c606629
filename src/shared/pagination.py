"""Offset pagination for list queries."""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

T = TypeVar("T")

DEFAULT_LIMIT = 10


@dataclass
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def normalize(page: int | None, limit: int | None) -> tuple[int, int]:
    """Clamp page/limit to sane values: page >= 1, limit >= 1."""
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else DEFAULT_LIMIT
    return page, limit


def paginate(session: Session, stmt: Select, page: int | None, limit: int | None) -> Page:
    page, limit = normalize(page, limit)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = session.scalar(count_stmt) or 0

    items = session.scalars(stmt.limit(limit).offset((page - 1) * limit)).unique().all()
    return Page(items=list(items), total=total, page=page, limit=limit)

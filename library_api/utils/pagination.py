from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from flask import current_app

from library_api.errors import InvalidArgument

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """0-based page index plus page size."""
    page: int = 0
    size: int = 10

    def __post_init__(self):
        if self.page < 0:
            raise InvalidArgument("page must not be negative")
        if self.size < 1:
            raise InvalidArgument("size must be positive")

    @property
    def offset(self) -> int:
        return self.page * self.size

    @classmethod
    def from_args(cls, args) -> "PageRequest":
        """Build from request query args, clamping size to MAX_PAGE_SIZE."""
        default_size = current_app.config.get("DEFAULT_PAGE_SIZE", 10)
        max_size = current_app.config.get("MAX_PAGE_SIZE", 100)
        try:
            page = int(args.get("page", 0))
            size = int(args.get("size", default_size))
        except (TypeError, ValueError):
            raise InvalidArgument("page and size must be integers")
        return cls(page=page, size=min(size, max_size))


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    page: int = 0
    size: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @classmethod
    def from_pagination(cls, pagination, page_request: PageRequest) -> "Page":
        # Flask-SQLAlchemy paginates 1-based
        return cls(
            items=list(pagination.items),
            page=page_request.page,
            size=page_request.size,
            total=pagination.total or 0,
        )

"""Page-number pagination shared by listing use cases."""

from math import ceil

from pydantic import BaseModel


class PageInfo(BaseModel):
    """Pagination metadata returned alongside a page of results."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PageInfo":
        """Describe page ``page`` of ``total`` items split into pages of ``limit``.

        >>> PageInfo.build(page=2, limit=10, total=25).total_pages
        3
        >>> PageInfo.build(page=3, limit=10, total=25).has_next
        False
        """
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=ceil(total / limit) if limit else 0,
            has_next=page * limit < total,
            has_prev=page > 1,
        )


def offset_for(page: int, limit: int) -> int:
    """Number of items preceding ``page``."""
    return (page - 1) * limit

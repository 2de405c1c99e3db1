import math
from typing import Any, Optional

from fastapi import Query
from pydantic import BaseModel

from .config import DEFAULT_MESSAGE_PAGE_SIZE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .errors import ValidationError


class PageParams(BaseModel):
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    totalPages: int
    hasNextPage: bool
    hasPrevPage: bool

    @classmethod
    def build(cls, total: int, params: PageParams) -> "Pagination":
        total_pages = math.ceil(total / params.limit)
        return cls(
            total=total,
            page=params.page,
            limit=params.limit,
            totalPages=total_pages,
            hasNextPage=params.page < total_pages,
            hasPrevPage=params.page > 1,
        )


def _pagination_dependency(default_limit: int):
    def dependency(
        page: int = Query(1, description="1-based page number"),
        limit: int = Query(default_limit, description=f"Page size (max {MAX_PAGE_SIZE})"),
    ) -> PageParams:
        errors = []
        if page < 1:
            errors.append({"field": "page", "message": "Page must be a positive integer"})
        if not 1 <= limit <= MAX_PAGE_SIZE:
            errors.append({"field": "limit", "message": f"Limit must be between 1 and {MAX_PAGE_SIZE}"})
        if errors:
            raise ValidationError(errors)
        return PageParams(page=page, limit=limit)

    return dependency


get_page_params = _pagination_dependency(DEFAULT_PAGE_SIZE)
get_message_page_params = _pagination_dependency(DEFAULT_MESSAGE_PAGE_SIZE)


def success(data: Optional[dict[str, Any]] = None, message: Optional[str] = None) -> dict[str, Any]:
    """Wrap a payload in the standard success envelope."""
    body: dict[str, Any] = {"status": "success"}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body

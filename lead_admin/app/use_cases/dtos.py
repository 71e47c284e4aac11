"""
Shared DTOs (Data Transfer Objects)

Base model and response envelopes used by every use case package.
JSON field names are camelCase; Python attributes stay snake_case.
"""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for DTOs serialized to the admin frontend"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class Envelope(BaseModel, Generic[T]):
    """{success, data} response wrapper"""

    success: bool = True
    data: T


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


class PaginatedEnvelope(BaseModel, Generic[T]):
    """{success, data, pagination} response wrapper"""

    success: bool = True
    data: List[T]
    pagination: Pagination

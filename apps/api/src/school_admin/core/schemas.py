"""
Shared Schemas

Base Pydantic model with camelCase aliases and the response envelope every
endpoint returns.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    """Pagination block returned with list responses."""

    current_page: int
    total_pages: int
    total_count: int
    page_size: int


class ApiResponse(CamelModel, Generic[DataT]):
    """
    Standard response envelope.

    Success:  {"status": "success", "message": "...", "data": ..., "pagination": {...}}
    Failure:  {"status": "failure", "message": "...", "data": ...}

    The pagination block is only present on list responses.
    """

    status: Literal["success", "failure"] = "success"
    message: str
    data: DataT | None = None
    pagination: Pagination | None = None

    @model_serializer(mode="wrap")
    def drop_empty_pagination(self, handler):
        body = handler(self)
        if self.pagination is None:
            body.pop("pagination", None)
        return body

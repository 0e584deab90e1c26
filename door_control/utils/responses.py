"""Generic response models for consistent API responses."""

from datetime import datetime, timezone
from math import ceil
from typing import Generic, List, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Standard error response structure."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "success": False,
                "statusCode": 400,
                "error": "Validation Error",
                "message": ["clientId Field required"],
                "timestamp": "2025-11-03T15:58:36Z",
            }
        },
    )

    success: bool = Field(default=False)
    status_code: int
    error: str
    message: Union[str, List[str]]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results plus the totals needed to page through the rest."""

    data: List[T]
    total: int = Field(ge=0, description="Total number of items")
    page: int = Field(ge=1, description="Current page number (1-based)")
    pages: int = Field(ge=0, description="Total number of pages")

    model_config = {
        "json_schema_extra": {
            "example": {
                "data": [],
                "total": 120,
                "page": 1,
                "pages": 3,
            }
        }
    }


def page_count(total: int, limit: int) -> int:
    return ceil(total / limit) if limit > 0 else 0


def error_response(
    status_code: int,
    error: str,
    message: Union[str, List[str]],
) -> ErrorResponse:
    """Create an error response."""
    return ErrorResponse(status_code=status_code, error=error, message=message)


def paginated_response(
    data: List[T],
    page: int,
    limit: int,
    total: int,
) -> PaginatedResponse[T]:
    """Create a paginated response."""
    return PaginatedResponse(
        data=data,
        total=total,
        page=page,
        pages=page_count(total, limit),
    )

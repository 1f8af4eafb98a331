"""
Pydantic response models used to document the API.

Handlers build plain dicts; these models describe them in OpenAPI.
"""

from typing import Any

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class FieldErrorItem(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """The uniform error envelope."""

    success: bool = False
    message: str
    stack: str | None = None


class ValidationErrorResponse(BaseModel):
    """Rejected input, one entry per invalid field."""

    success: bool = False
    message: str
    errors: list[FieldErrorItem]


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class RecordResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: dict[str, Any]


class RecordListResponse(BaseModel):
    success: bool = True
    data: list[dict[str, Any]]
    pagination: PaginationInfo


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ValidationErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

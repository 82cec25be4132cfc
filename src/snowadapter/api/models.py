"""Pydantic models for REST API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class ChangeRequestResponse(BaseModel):
    """Response model for a normalized change request."""

    model_config = ConfigDict(from_attributes=True)

    change_ticket_number: Any = None
    change_ticket_key: Any = None
    active: Any = None
    priority: Any = None
    description: Any = None
    work_start: Any = None
    work_end: Any = None


def change_request_to_response(record: Any) -> ChangeRequestResponse:
    """Convert a ChangeRequest to ChangeRequestResponse."""
    return ChangeRequestResponse.model_validate(record)


class HealthResponse(BaseModel):
    """Response model for a healthcheck."""

    id: str
    status: str

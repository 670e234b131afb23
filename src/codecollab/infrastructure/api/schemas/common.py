"""Response envelopes shared by all endpoints."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for response bodies: camelCase on the wire, built from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(BaseModel, Generic[DataT]):
    """Envelope for successful responses."""

    success: bool = True
    message: str
    data: DataT


class EmptyData(BaseModel):
    """Payload of responses that carry no data."""


class ErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Envelope for every error response."""

    success: bool = False
    error: str = Field(..., description="Human-readable error message")
    details: Optional[list[ErrorDetail]] = None

"""
Base Schemas.

Response envelopes and the base model shared by every API schema.

API field names are camelCase (``coverImages``, ``createdAt``); model
attributes stay snake_case. Request bodies accept either spelling.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class ApiModel(BaseModel):
    """Base for request and response schemas."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class SuccessResponse(BaseModel, Generic[DataT]):
    """
    Success envelope.

    ``data`` is omitted from the body when an endpoint has nothing to return.
    """

    status: int
    message: str
    data: DataT | None = None


class ErrorResponse(BaseModel):
    """Error envelope. ``extra`` describes the cause outside production."""

    status: int
    level: str
    message: str
    extra: Any = ""

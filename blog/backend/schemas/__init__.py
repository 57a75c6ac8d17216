# Pydantic schemas package
from blog.backend.schemas.base import (
    ApiModel,
    ErrorResponse,
    SuccessResponse,
)

__all__ = [
    "ApiModel",
    "ErrorResponse",
    "SuccessResponse",
]

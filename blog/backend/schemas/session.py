"""
Session Schemas.

Pydantic schemas for login and logout.
"""

from pydantic import Field

from blog.backend.schemas.base import ApiModel


class LoginRequest(ApiModel):
    """Schema for logging in."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Administrator username",
        examples=["admin"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=1024,
        description="Administrator password",
    )


class TokenResponse(ApiModel):
    """Session token handed to the client after login."""

    token: str = Field(description="Value for the session token header")

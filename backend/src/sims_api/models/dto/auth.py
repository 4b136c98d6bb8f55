"""Authentication DTOs."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    """Login request.

    Fields are plain strings with empty defaults, and scalar values are
    coerced to strings, so malformed input ends in the same "Invalid
    credentials" answer as a wrong password.
    """

    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=128)

    @field_validator("email", "password", mode="before")
    @classmethod
    def coerce_scalar(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value


class TokenResponse(BaseModel):
    """Token response DTO."""

    token: str

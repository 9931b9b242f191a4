"""Pydantic models for user API requests and responses.

JSON field names are camelCase (userName, phoneNumber, ...); snake_case
names are accepted on input as well.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from identity.application.value_objects import IdentityResult
from identity.domain.aggregates import User


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateUserRequest(CamelModel):
    """Request model for creating a user."""

    user_name: str = Field(..., description="Login name", min_length=1, max_length=256)
    email: str = Field(..., description="Email address", min_length=1, max_length=256)
    phone_number: str | None = Field(
        default=None, description="Phone number", max_length=64
    )
    password: str = Field(..., description="Plaintext password", min_length=1)


class EditUserRequest(CamelModel):
    """Request model for editing a user. id must match the path."""

    id: str = Field(..., description="User ID", min_length=1)
    user_name: str = Field(..., description="Login name", min_length=1, max_length=256)
    email: str = Field(..., description="Email address", min_length=1, max_length=256)
    phone_number: str | None = Field(
        default=None, description="Phone number", max_length=64
    )


class UserResponse(CamelModel):
    """Response model for a user. Credentials and stamps are never included."""

    id: str = Field(..., description="User ID (ULID format)")
    user_name: str | None = Field(None, description="Login name")
    normalized_user_name: str | None = None
    email: str | None = Field(None, description="Email address")
    normalized_email: str | None = None
    email_confirmed: bool = False
    phone_number: str | None = Field(None, description="Phone number")
    phone_number_confirmed: bool = False
    two_factor_enabled: bool = False
    lockout_end: datetime | None = None
    lockout_enabled: bool = True
    access_failed_count: int = 0

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response.

        Args:
            user: User domain aggregate

        Returns:
            UserResponse
        """
        return cls(
            id=user.id.value,
            user_name=user.user_name,
            normalized_user_name=user.normalized_user_name,
            email=user.email,
            normalized_email=user.normalized_email,
            email_confirmed=user.email_confirmed,
            phone_number=user.phone_number,
            phone_number_confirmed=user.phone_number_confirmed,
            two_factor_enabled=user.two_factor_enabled,
            lockout_end=user.lockout_end,
            lockout_enabled=user.lockout_enabled,
            access_failed_count=user.access_failed_count,
        )


class ErrorDetail(BaseModel):
    """One entry of a 400 response. field is empty for store errors."""

    field: str = Field("", description="Offending request field, if any")
    message: str = Field(..., description="Human-readable description")

    @classmethod
    def from_result(cls, result: IdentityResult) -> list[ErrorDetail]:
        """Convert every error of a failed result, preserving order."""
        return [cls(field="", message=error.description) for error in result.errors]


class ErrorResponse(BaseModel):
    """Body of every 400 response."""

    detail: list[ErrorDetail]

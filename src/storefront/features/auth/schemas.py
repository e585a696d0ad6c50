"""Pydantic schemas for authentication, defining the structure for request and response data."""

from pydantic import BaseModel, ConfigDict, Field, EmailStr, field_validator
from typing import Optional
import datetime

from .models import Role


class UserBase(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    name: str = Field(..., min_length=1, max_length=50, description="Display name")


class UserCreate(UserBase):
    password: str = Field(..., min_length=8, description="User password")
    role: Role = Field(Role.EMPLOYEE, description="User role (admin or employee)")

    @field_validator("password")
    @classmethod
    def password_has_letters_and_digits(cls, value: str) -> str:
        if not any(c.isalpha() for c in value) or not any(c.isdigit() for c in value):
            raise ValueError("Password must contain letters and numbers")
        return value


class UserResponse(UserBase):
    public_id: str = Field(..., description="Public unique identifier for the user (KSUID)")
    role: Role = Field(..., description="User role (admin or employee)")
    is_active: bool = Field(..., description="Whether the user account is active")
    created_at: datetime.datetime = Field(..., description="Timestamp of when the user was created")
    updated_at: datetime.datetime = Field(..., description="Timestamp of when the user was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        protected_namespaces=(),
    )


class Token(BaseModel):
    access_token: str
    token_type: str


class IdentityResponse(BaseModel):
    subject: str
    role: Role

"""Pydantic schemas for registration, login and user profiles."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from fixora.schemas.common import clean_text, normalise_email
from fixora.schemas.token import Role


class RegisterRequest(BaseModel):
    name: str
    email: str
    phone: str
    password: str
    admin_secret: str | None = None

    model_config = {"extra": "forbid"}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return clean_text(v, "Name", 2, 50)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: str) -> str:
        return clean_text(v, "Phone number", 10, 15)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        # bcrypt only looks at the first 72 bytes
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        if len(v.encode()) > 72:
            raise ValueError("Password cannot exceed 72 bytes")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    model_config = {"extra": "forbid"}

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    role: Role
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    user: UserRead
    token: str


class MeResponse(BaseModel):
    success: bool = True
    user: UserRead

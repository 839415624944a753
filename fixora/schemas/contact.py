"""Pydantic schemas for the public contact form."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from fixora.schemas.common import clean_text, normalise_email


class ContactCreate(BaseModel):
    name: str
    email: str
    phone: str
    subject: str | None = None
    message: str

    model_config = {"extra": "forbid"}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return clean_text(v, "Name", 2, 100)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: str) -> str:
        return clean_text(v, "Phone number", 10, 15)

    @field_validator("subject")
    @classmethod
    def _subject(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return clean_text(v, "Subject", 0, 200) or None

    @field_validator("message")
    @classmethod
    def _message(cls, v: str) -> str:
        return clean_text(v, "Message", 1, 5000)


class ContactResponse(BaseModel):
    success: bool = True
    message: str
    contact_id: int

"""Pydantic schemas for bookings."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from fixora.schemas.common import clean_text
from fixora.schemas.service import ServiceSummary

BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]


class BookingCreate(BaseModel):
    service_id: int
    date: str
    time: str
    address: str
    phone: str
    notes: str = ""
    # Accepted so existing clients keep working; never stored.
    status: Any = Field(default=None, exclude=True)
    service_name: Any = Field(default=None, exclude=True)

    model_config = {"extra": "forbid"}

    @field_validator("date")
    @classmethod
    def _date(cls, v: str) -> str:
        return clean_text(v, "Date", 1, 50)

    @field_validator("time")
    @classmethod
    def _time(cls, v: str) -> str:
        return clean_text(v, "Time", 1, 50)

    @field_validator("address")
    @classmethod
    def _address(cls, v: str) -> str:
        return clean_text(v, "Address", 10, 500)

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: str) -> str:
        return clean_text(v, "Phone number", 10, 15)

    @field_validator("notes")
    @classmethod
    def _notes(cls, v: str) -> str:
        return clean_text(v, "Notes", 0, 1000)


class BookingUpdate(BaseModel):
    date: str | None = None
    time: str | None = None
    address: str | None = None
    phone: str | None = None
    notes: str | None = None
    status: BookingStatus | None = None

    model_config = {"extra": "forbid"}

    @field_validator("date", "time", "address", "phone", "notes", "status", mode="before")
    @classmethod
    def _not_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("date")
    @classmethod
    def _date(cls, v: str) -> str:
        return clean_text(v, "Date", 1, 50)

    @field_validator("time")
    @classmethod
    def _time(cls, v: str) -> str:
        return clean_text(v, "Time", 1, 50)

    @field_validator("address")
    @classmethod
    def _address(cls, v: str) -> str:
        return clean_text(v, "Address", 10, 500)

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: str) -> str:
        return clean_text(v, "Phone number", 10, 15)

    @field_validator("notes")
    @classmethod
    def _notes(cls, v: str) -> str:
        return clean_text(v, "Notes", 0, 1000)


class BookingRead(BaseModel):
    id: int
    user_id: int
    service_id: int
    service_name: str
    service: ServiceSummary | None = None
    date: str
    time: str
    status: BookingStatus
    address: str
    phone: str
    notes: str
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    success: bool = True
    message: str | None = None
    booking: BookingRead


class BookingListResponse(BaseModel):
    success: bool = True
    bookings: list[BookingRead]
    total: int

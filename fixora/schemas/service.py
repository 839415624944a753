"""Pydantic schemas for the service catalog."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from fixora.schemas.common import clean_text

Category = Literal["electrician", "ac"]


def _image_url(v: str) -> str:
    v = v.strip()
    if not v.startswith(("http://", "https://")) or len(v) > 500:
        raise ValueError("Image must be a valid URL")
    return v


def _features(v: list[str]) -> list[str]:
    return [f.strip() for f in v if f.strip()]


class ServiceCreate(BaseModel):
    title: str
    description: str
    category: Category
    price: float = Field(ge=0)
    duration: str
    image: str
    features: list[str] = Field(default_factory=list)
    rating: float = Field(default=0, ge=0, le=5)
    reviews: int = Field(default=0, ge=0)

    model_config = {"extra": "forbid"}

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        return clean_text(v, "Title", 3, 100)

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        return clean_text(v, "Description", 10, 1000)

    @field_validator("duration")
    @classmethod
    def _duration(cls, v: str) -> str:
        return clean_text(v, "Duration", 1, 50)

    @field_validator("image")
    @classmethod
    def _image(cls, v: str) -> str:
        return _image_url(v)

    @field_validator("features")
    @classmethod
    def _clean_features(cls, v: list[str]) -> list[str]:
        return _features(v)


class ServiceUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    category: Category | None = None
    price: float | None = Field(default=None, ge=0)
    duration: str | None = None
    image: str | None = None
    features: list[str] | None = None

    model_config = {"extra": "forbid"}

    @field_validator(
        "title", "description", "category", "price", "duration", "image", "features", mode="before"
    )
    @classmethod
    def _not_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        return clean_text(v, "Title", 3, 100)

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        return clean_text(v, "Description", 10, 1000)

    @field_validator("duration")
    @classmethod
    def _duration(cls, v: str) -> str:
        return clean_text(v, "Duration", 1, 50)

    @field_validator("image")
    @classmethod
    def _image(cls, v: str) -> str:
        return _image_url(v)

    @field_validator("features")
    @classmethod
    def _clean_features(cls, v: list[str]) -> list[str]:
        return _features(v)


class ServiceRead(BaseModel):
    id: int
    title: str
    description: str
    category: Category
    price: float
    duration: str
    image: str
    features: list[str]
    rating: float
    reviews: int
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class ServiceSummary(BaseModel):
    """The slice of a service embedded in booking responses."""

    id: int
    title: str
    description: str
    category: Category
    price: float
    image: str

    model_config = {"from_attributes": True}


class ServiceResponse(BaseModel):
    success: bool = True
    message: str | None = None
    service: ServiceRead


class ServiceListResponse(BaseModel):
    success: bool = True
    services: list[ServiceRead]
    total: int

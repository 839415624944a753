"""
Service catalog model: what customers can book.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text

from fixora.db.base import Base


class Service(Base):
    __tablename__ = "services"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    title: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    description: str = Column(Text, nullable=False)  # type: ignore[assignment]
    category: str = Column(String(20), nullable=False, index=True)  # type: ignore[assignment]
    # electrician | ac
    price: float = Column(Float, nullable=False)  # type: ignore[assignment]
    duration: str = Column(String(50), nullable=False)  # type: ignore[assignment]
    image: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    features: list[str] = Column(JSON, nullable=False, default=lambda: [])  # type: ignore[assignment]
    rating: float = Column(Float, nullable=False, default=0)  # type: ignore[assignment]
    reviews: int = Column(Integer, nullable=False, default=0)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

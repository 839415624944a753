"""
Contact form messages submitted from the public site.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from fixora.db.base import Base


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    email: str = Column(String(320), nullable=False)  # type: ignore[assignment]
    phone: str = Column(String(15), nullable=False)  # type: ignore[assignment]
    subject: str | None = Column(String(200), nullable=True)  # type: ignore[assignment]
    message: str = Column(Text, nullable=False)  # type: ignore[assignment]
    status: str = Column(String(10), nullable=False, default="new")  # type: ignore[assignment]
    # new | read | replied
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

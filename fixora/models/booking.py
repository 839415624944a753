"""
Booking model — a customer's request for a service visit.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from fixora.db.base import Base

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (Index("ix_bookings_user_created", "user_id", "created_at"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    user_id: int = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)  # type: ignore[assignment]
    # No FK constraint: deleting a service leaves its bookings (and snapshot) intact.
    service_id: int = Column(Integer, nullable=False, index=True)  # type: ignore[assignment]
    service_name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    date: str = Column(String(50), nullable=False)  # type: ignore[assignment]
    time: str = Column(String(50), nullable=False)  # type: ignore[assignment]
    address: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    phone: str = Column(String(15), nullable=False)  # type: ignore[assignment]
    notes: str = Column(String(1000), nullable=False, default="")  # type: ignore[assignment]
    status: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default="pending",
        server_default="pending",
        index=True,
    )  # pending | confirmed | completed | cancelled
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

"""Pydantic schemas for the admin dashboard endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from fixora.schemas.booking import BookingRead, BookingStatus
from fixora.schemas.user import UserRead


# ── Users ──────────────────────────────────────────────────────────
class AdminUserRead(UserRead):
    bookings: int = 0


class AdminUserListResponse(BaseModel):
    success: bool = True
    users: list[AdminUserRead]
    total: int


# ── Bookings ───────────────────────────────────────────────────────
class AdminBookingRead(BookingRead):
    user_name: str
    user_email: str
    user_phone: str


class AdminBookingListResponse(BaseModel):
    success: bool = True
    bookings: list[AdminBookingRead]
    total: int


# ── Analytics ──────────────────────────────────────────────────────
class BookingsByStatus(BaseModel):
    pending: int = 0
    confirmed: int = 0
    completed: int = 0
    cancelled: int = 0


class MonthlyRevenue(BaseModel):
    month: str  # e.g. "Mar 2026"
    revenue: float


class ServicePopularity(BaseModel):
    service_id: int
    service: str
    bookings: int


class RecentBooking(BaseModel):
    id: int
    service_name: str
    user_name: str
    user_email: str
    status: BookingStatus
    date: str
    time: str
    created_at: datetime | None


class Analytics(BaseModel):
    total_bookings: int
    total_users: int
    total_services: int
    total_revenue: float
    bookings_by_status: BookingsByStatus
    monthly_revenue: list[MonthlyRevenue]
    service_popularity: list[ServicePopularity]
    recent_bookings: list[RecentBooking]


class AnalyticsResponse(BaseModel):
    success: bool = True
    analytics: Analytics

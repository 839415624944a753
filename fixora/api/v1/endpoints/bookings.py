"""
Booking endpoints — thin HTTP layer over ``BookingService``.

Every route requires a session. Ownership and the admin-only status
rule are enforced by the service, not here.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from fixora.api.v1.deps import get_booking_service, get_current_identity
from fixora.schemas.booking import (BookingCreate, BookingListResponse,
                                    BookingResponse, BookingStatus,
                                    BookingUpdate)
from fixora.schemas.common import MessageResponse
from fixora.schemas.token import TokenIdentity
from fixora.services.bookings import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    status: BookingStatus | None = Query(default=None),
    identity: TokenIdentity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    """Own bookings, or every booking for admins. Newest first."""
    bookings = await service.present(await service.list(identity, status))
    return BookingListResponse(bookings=bookings, total=len(bookings))


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    body: BookingCreate,
    identity: TokenIdentity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = await service.create(identity, body)
    [read] = await service.present([booking])
    return BookingResponse(message="Booking created successfully!", booking=read)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    identity: TokenIdentity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = await service.get(identity, booking_id)
    [read] = await service.present([booking])
    return BookingResponse(booking=read)


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    body: BookingUpdate,
    identity: TokenIdentity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Partial update. ``status`` is applied only when the caller is an admin."""
    booking = await service.update(identity, booking_id, body)
    [read] = await service.present([booking])
    return BookingResponse(message="Booking updated successfully!", booking=read)


@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: int,
    identity: TokenIdentity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> MessageResponse:
    """Permanently delete (cancel) a booking."""
    await service.delete(identity, booking_id)
    return MessageResponse(message="Booking cancelled successfully!")

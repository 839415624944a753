"""
Booking lifecycle: the only code path that mutates bookings.

Rules enforced here:

- any authenticated user may book for themselves; new bookings are always
  ``pending`` whatever the payload says;
- only the owner or an admin may read, edit or delete a booking;
- only an admin may change ``status``. Any status may follow any other;
- notifications are best-effort. A failed notification never fails or
  rolls back the booking operation, while store errors always propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from fixora.core.exceptions import NotFoundError, PermissionDeniedError
from fixora.models.booking import Booking
from fixora.models.service import Service
from fixora.models.user import User
from fixora.repositories.bookings import BookingRepository
from fixora.repositories.services import ServiceRepository
from fixora.repositories.users import UserRepository
from fixora.schemas.booking import BookingCreate, BookingRead, BookingUpdate
from fixora.schemas.service import ServiceSummary
from fixora.schemas.token import TokenIdentity
from fixora.services.notifications import Notifier

logger = logging.getLogger(__name__)


def to_booking_read(booking: Booking, service: Service | None) -> BookingRead:
    read = BookingRead.model_validate(booking)
    if service is not None:
        read.service = ServiceSummary.model_validate(service)
    return read


class BookingService:
    def __init__(self, db: AsyncSession, notifier: Notifier) -> None:
        self.db = db
        self.notifier = notifier
        self.bookings = BookingRepository(db)
        self.services = ServiceRepository(db)
        self.users = UserRepository(db)

    # ── Queries ─────────────────────────────────────────────────────
    async def get(self, identity: TokenIdentity, booking_id: int) -> Booking:
        booking = await self._get_or_404(booking_id)
        self._ensure_access(identity, booking, "Access denied. This is not your booking.")
        return booking

    async def list(self, identity: TokenIdentity, status: str | None = None) -> list[Booking]:
        """Admins see every booking, everyone else only their own. Newest first."""
        owner = None if identity.is_admin else identity.user_id
        return await self.bookings.list(user_id=owner, status=status)

    async def present(self, bookings: list[Booking]) -> list[BookingRead]:
        """Attach each booking's current service summary (``None`` once deleted)."""
        services = await self.services.get_many(b.service_id for b in bookings)
        return [to_booking_read(b, services.get(b.service_id)) for b in bookings]

    # ── Mutations ───────────────────────────────────────────────────
    async def create(self, identity: TokenIdentity, payload: BookingCreate) -> Booking:
        service = await self.services.get(payload.service_id)
        if service is None:
            raise NotFoundError("Service not found")

        booking = Booking(
            user_id=identity.user_id,
            service_id=service.id,
            service_name=service.title,
            date=payload.date,
            time=payload.time,
            address=payload.address,
            phone=payload.phone,
            notes=payload.notes,
            status="pending",
        )
        booking = await self.bookings.add(booking)
        logger.info(
            "Booking %d created by user %d for service %d", booking.id, identity.user_id, service.id
        )

        await self._notify_owner(
            booking, lambda owner: self.notifier.booking_created(owner, booking)
        )
        return booking

    async def update(
        self, identity: TokenIdentity, booking_id: int, payload: BookingUpdate
    ) -> Booking:
        booking = await self._get_or_404(booking_id)
        self._ensure_access(
            identity, booking, "Access denied. You can only update your own bookings."
        )

        changes = payload.model_dump(exclude_unset=True)
        requested_status = changes.pop("status", None)
        if requested_status is not None:
            if identity.is_admin:
                changes["status"] = requested_status
            else:
                logger.info(
                    "Ignoring status change on booking %d from non-admin user %d",
                    booking_id,
                    identity.user_id,
                )

        previous_status = booking.status
        booking = await self.bookings.update(booking, changes)
        logger.info("Booking %d updated by user %d: %s", booking_id, identity.user_id, sorted(changes))

        if booking.status != previous_status:
            logger.info(
                "Booking %d status %s -> %s", booking_id, previous_status, booking.status
            )
            await self._notify_owner(
                booking,
                lambda owner: self.notifier.booking_status_changed(owner, booking, previous_status),
            )
        return booking

    async def delete(self, identity: TokenIdentity, booking_id: int) -> None:
        booking = await self._get_or_404(booking_id)
        self._ensure_access(
            identity, booking, "Access denied. You can only cancel your own bookings."
        )
        await self.bookings.delete(booking)
        logger.info("Booking %d deleted by user %d", booking_id, identity.user_id)

    # ── Helpers ─────────────────────────────────────────────────────
    async def _get_or_404(self, booking_id: int) -> Booking:
        booking = await self.bookings.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    @staticmethod
    def _ensure_access(identity: TokenIdentity, booking: Booking, detail: str) -> None:
        if not identity.is_admin and booking.user_id != identity.user_id:
            raise PermissionDeniedError(detail)

    async def _notify_owner(self, booking: Booking, send: Callable[[User], None]) -> None:
        try:
            owner = await self.users.get_by_id(booking.user_id)
            if owner is None or not owner.email:
                logger.warning("Booking %d has no reachable owner, notification skipped", booking.id)
                return
            send(owner)
        except Exception as e:
            logger.error("❌ Notification for booking %d failed (booking kept): %s", booking.id, e)

"""
Booking notifications: best-effort, at-most-once email dispatch.

``EmailNotifier`` only *schedules* work on FastAPI's ``BackgroundTasks``;
the email goes out after the response has been sent. Delivery failures
are logged and dropped, never retried and never reported to the client.
"""

from __future__ import annotations

import logging
from typing import Protocol

from fastapi import BackgroundTasks

from fixora.models.booking import Booking
from fixora.models.contact import ContactMessage
from fixora.models.user import User
from fixora.services.mailer import EmailSender

logger = logging.getLogger(__name__)

_STATUS_LINES = {
    "pending": "Your booking is pending and will be reviewed shortly.",
    "confirmed": "Your booking has been confirmed. Our technician will arrive at the scheduled time.",
    "completed": "Your service has been completed. Thank you for choosing Fixora!",
    "cancelled": "Your booking has been cancelled. Contact us if this was unexpected.",
}


class Notifier(Protocol):
    def booking_created(self, user: User, booking: Booking) -> None: ...

    def booking_status_changed(self, user: User, booking: Booking, previous_status: str) -> None: ...

    def contact_received(self, message: ContactMessage) -> None: ...


# ── Message bodies ─────────────────────────────────────────────────
def booking_confirmation_email(user: User, booking: Booking, app_url: str) -> tuple[str, str]:
    subject = f"Booking received: {booking.service_name} - Fixora"
    body = (
        f"Hello {user.name},\n\n"
        "Thank you for choosing Fixora! We have received your booking.\n\n"
        f"Service:    {booking.service_name}\n"
        f"Date:       {booking.date}\n"
        f"Time:       {booking.time}\n"
        f"Address:    {booking.address}\n"
        f"Booking ID: {booking.id}\n\n"
        f"View your bookings: {app_url}/profile\n"
    )
    return subject, body


def booking_status_email(
    user: User, booking: Booking, previous_status: str, app_url: str
) -> tuple[str, str]:
    subject = f"Booking {booking.status}: {booking.service_name} - Fixora"
    body = (
        f"Hello {user.name},\n\n"
        f"{_STATUS_LINES.get(booking.status, 'Your booking status has changed.')}\n\n"
        f"Service: {booking.service_name}\n"
        f"Status:  {previous_status} -> {booking.status}\n"
        f"Date:    {booking.date}\n"
        f"Time:    {booking.time}\n\n"
        f"View your bookings: {app_url}/profile\n"
    )
    return subject, body


def contact_form_email(message: ContactMessage) -> tuple[str, str]:
    subject = f"New contact message from {message.name}"
    if message.subject:
        subject += f": {message.subject}"
    body = (
        f"Name:  {message.name}\n"
        f"Email: {message.email}\n"
        f"Phone: {message.phone}\n\n"
        f"{message.message}\n"
    )
    return subject, body


# ── Dispatcher ─────────────────────────────────────────────────────
class EmailNotifier:
    def __init__(
        self,
        background_tasks: BackgroundTasks,
        sender: EmailSender,
        app_url: str,
        admin_email: str | None = None,
    ) -> None:
        self.background_tasks = background_tasks
        self.sender = sender
        self.app_url = app_url.rstrip("/")
        self.admin_email = admin_email

    def booking_created(self, user: User, booking: Booking) -> None:
        subject, body = booking_confirmation_email(user, booking, self.app_url)
        self._dispatch(user.email, subject, body)

    def booking_status_changed(self, user: User, booking: Booking, previous_status: str) -> None:
        subject, body = booking_status_email(user, booking, previous_status, self.app_url)
        self._dispatch(user.email, subject, body)

    def contact_received(self, message: ContactMessage) -> None:
        if not self.admin_email:
            logger.debug("ADMIN_EMAIL not set, contact message %s not forwarded", message.id)
            return
        subject, body = contact_form_email(message)
        self._dispatch(self.admin_email, subject, body)

    def _dispatch(self, to: str, subject: str, body: str) -> None:
        self.background_tasks.add_task(self._deliver, to, subject, body)

    def _deliver(self, to: str, subject: str, body: str) -> None:
        try:
            self.sender.send(to, subject, body)
        except Exception as e:
            logger.error("❌ Email %r to %s failed (not retried): %s", subject, to, e)

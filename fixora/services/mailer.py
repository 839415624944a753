"""
Outbound email over an SMTP relay.

Sending is synchronous (smtplib); callers run it off the request path,
see ``fixora.services.notifications``.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage

from fixora.core.config import Settings

logger = logging.getLogger(__name__)


class EmailSender:
    def __init__(
        self,
        host: str | None,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        from_address: str = "no-reply@localhost",
        timeout: float = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_address = from_address
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> EmailSender:
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
            from_address=settings.EMAIL_FROM,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.host)

    def build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = to
        msg.set_content(body)
        return msg

    def send(self, to: str, subject: str, body: str) -> bool:
        """Send one plain-text email. Returns False when SMTP is not configured.

        Transport errors propagate to the caller.
        """
        if not self.enabled:
            logger.warning("SMTP not configured, skipping email %r to %s", subject, to)
            return False

        msg = self.build_message(to, subject, body)
        if self.port == 465:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                self.host, self.port, context=ssl.create_default_context(), timeout=self.timeout
            )
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with server:
            if self.use_tls and self.port != 465:
                server.starttls(context=ssl.create_default_context())
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

        logger.info("Email %r sent to %s via %s", subject, to, self.host)
        return True

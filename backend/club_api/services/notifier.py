"""Notifier: best-effort HTML e-mail through an SMTP relay.

Public API:
    send(subject, html_body, recipient) -> bool

Fire-and-forget: delivery failures are logged as warnings and reported
as False, never raised. There is no retry; a lost OTP or receipt e-mail
is simply not received.
"""

from email.message import EmailMessage

import aiosmtplib
import structlog

from club_api.core.config import Settings

logger = structlog.get_logger(__name__)

# Implicit TLS port; every other port negotiates STARTTLS when enabled
SMTPS_PORT = 465


class Notifier:
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        sender: str = "",
        start_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender or username
        self._start_tls = start_tls
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "Notifier":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            sender=settings.smtp_sender,
            start_tls=settings.smtp_start_tls,
            timeout=settings.smtp_timeout_seconds,
        )

    @property
    def enabled(self) -> bool:
        return bool(self._host)

    def build_message(self, subject: str, html_body: str, recipient: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(html_body, subtype="html")
        return message

    async def send(self, subject: str, html_body: str, recipient: str) -> bool:
        """Send one HTML e-mail. Returns True if the relay accepted it."""
        if not self.enabled:
            logger.info("email_skipped", reason="smtp_not_configured", subject=subject)
            return False

        message = self.build_message(subject, html_body, recipient)
        implicit_tls = self._port == SMTPS_PORT
        try:
            await aiosmtplib.send(
                message,
                hostname=self._host,
                port=self._port,
                username=self._username or None,
                password=self._password or None,
                use_tls=implicit_tls,
                start_tls=self._start_tls and not implicit_tls,
                timeout=self._timeout,
            )
        except Exception as exc:
            logger.warning(
                "email_send_failed",
                subject=subject,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return False

        logger.info("email_sent", subject=subject)
        return True

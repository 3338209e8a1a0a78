"""Outgoing email over async SMTP.

Configuration comes from the SMTP_* settings. When SMTP is not configured
every send raises EmailDeliveryException so callers can report it like any
other delivery failure.
"""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from stack_assist.config import settings
from stack_assist.core.exceptions import EmailDeliveryException

logger = logging.getLogger(__name__)


class MailSender:
    """Sends plain text (and optional HTML) email via SMTP."""

    async def send(
        self,
        to: str,
        subject: str,
        text: str,
        html: str | None = None,
        from_name: str | None = None,
    ) -> None:
        """
        Deliver one message.

        Raises:
            EmailDeliveryException: SMTP not configured, no recipient, or SMTP error
        """
        if not settings.smtp_configured:
            logger.warning("Email to %s not sent: SMTP not configured", to)
            raise EmailDeliveryException("SMTP not configured")

        if not to:
            raise EmailDeliveryException("No recipient email address")

        message = self._build_message(to, subject, text, html, from_name)

        try:
            await aiosmtplib.send(
                message,
                hostname=settings.SMTP_HOST,
                port=settings.SMTP_PORT,
                username=settings.SMTP_USERNAME or None,
                password=settings.SMTP_PASSWORD or None,
                start_tls=settings.SMTP_USE_TLS,
            )
        except aiosmtplib.SMTPException as e:
            logger.error("Failed to send email to %s: %s", to, e)
            raise EmailDeliveryException(f"SMTP error: {e}")

        logger.info("Email sent to %s: %s", to, subject)

    def _build_message(
        self,
        to: str,
        subject: str,
        text: str,
        html: str | None,
        from_name: str | None,
    ) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = f"{from_name or settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
        message["To"] = to
        message["Subject"] = subject

        message.attach(MIMEText(text, "plain", "utf-8"))
        if html:
            message.attach(MIMEText(html, "html", "utf-8"))

        return message


def get_mail_sender() -> MailSender:
    """FastAPI dependency for the mail transport (overridden in tests)."""
    return MailSender()

"""
Outgoing email.

Sends through SMTP when ``SMTP_HOST`` is configured. Without it the message
is written to the log, which is enough for local development and tests.
"""
import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from .config import settings

logger = logging.getLogger(__name__)


def _build_message(to_email: str, subject: str, body: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = formataddr((settings.FROM_NAME, settings.FROM_EMAIL))
    message["To"] = to_email
    message["Subject"] = subject
    message.set_content(body)
    return message


def _send_smtp(message: EmailMessage) -> None:
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
        server.ehlo()
        if server.has_extn("starttls"):
            server.starttls()
            server.ehlo()
        if settings.SMTP_EMAIL and settings.SMTP_PASSWORD:
            server.login(settings.SMTP_EMAIL, settings.SMTP_PASSWORD)
        server.send_message(message)


async def send_email(to_email: str, subject: str, body: str) -> None:
    """
    Send a plain-text email.

    Args:
        to_email: Recipient address
        subject: Subject line
        body: Plain-text body

    Raises:
        smtplib.SMTPException, OSError: If delivery fails
    """
    message = _build_message(to_email, subject, body)

    if not settings.SMTP_HOST:
        logger.info(f"[MAILER] SMTP not configured, email to {to_email} not sent")
        logger.info(f"[MAILER] Subject: {subject}\n{body}")
        return

    await asyncio.to_thread(_send_smtp, message)
    logger.info(f"[MAILER] Email sent to {to_email}: {subject}")

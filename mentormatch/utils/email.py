# mentormatch/utils/email.py
"""Plain-text SMTP mail for notification emails."""

import logging
import smtplib
from email.message import EmailMessage

from mentormatch.config import settings

logger = logging.getLogger(__name__)


def is_email_enabled() -> bool:
    """Email goes out only when switched on and a server and sender are set."""
    return bool(
        settings.EMAIL_NOTIFICATIONS_ENABLED
        and settings.SMTP_SERVER
        and settings.EMAIL_FROM
    )


def _build_message(to_email: str, subject: str, body_text: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = settings.EMAIL_FROM
    message["To"] = to_email
    message["Subject"] = subject
    message.set_content(body_text)
    return message


def _connect() -> smtplib.SMTP:
    if settings.SMTP_USE_SSL:
        return smtplib.SMTP_SSL(
            settings.SMTP_SERVER, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT_SECONDS
        )
    server = smtplib.SMTP(
        settings.SMTP_SERVER, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT_SECONDS
    )
    if settings.SMTP_USE_TLS:
        server.starttls()
    return server


def send_email(*, to_email: str, subject: str, body_text: str) -> bool:
    """
    Send one plain-text email.

    Returns False when email is disabled or the SMTP exchange fails; the
    failure is logged, never raised.
    """
    if not is_email_enabled():
        return False

    message = _build_message(to_email, subject, body_text)
    try:
        with _connect() as server:
            if settings.EMAIL_PASSWORD:
                server.login(settings.SMTP_USERNAME or settings.EMAIL_FROM, settings.EMAIL_PASSWORD)
            server.send_message(message)
    except (smtplib.SMTPException, OSError) as exc:
        logger.warning("Email to %s failed: %s", to_email, exc)
        return False
    return True

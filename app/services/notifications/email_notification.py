"""
Email Notification Service

Sends transactional HTML emails through an SMTP relay. smtplib is
blocking, so delivery runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from app.config.settings import Settings, get_settings
from app.domains.ecommerce.application.dto import EmailMessage

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """
    IEmailSender over SMTP.

    Delivery errors propagate (smtplib.SMTPException, OSError); callers
    decide whether a failed email matters.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def send(self, message: EmailMessage) -> None:
        if not self.settings.EMAIL_ENABLED:
            logger.info(f"Email disabled, skipping '{message.subject}' to {message.to}")
            return

        await asyncio.to_thread(self._deliver, self._build(message))
        logger.info(f"Email '{message.subject}' sent to {message.to}")

    def _build(self, message: EmailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.settings.EMAIL_FROM
        msg["To"] = message.to
        msg["Subject"] = message.subject
        msg.attach(MIMEText(message.html_body, "html", "utf-8"))
        return msg

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.settings.SMTP_HOST, self.settings.SMTP_PORT) as server:
            if self.settings.SMTP_USE_TLS:
                server.starttls()
            if self.settings.SMTP_USER:
                server.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD or "")
            server.send_message(msg)

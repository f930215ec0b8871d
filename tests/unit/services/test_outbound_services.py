"""
Unit tests for the SMTP email sender and the shipping label PDF generator.
"""

from unittest.mock import MagicMock, patch

import pytest

from app.config.settings import get_settings
from app.domains.ecommerce.application.dto import EmailMessage
from app.domains.ecommerce.domain.value_objects import PackageStatus
from app.services.notifications import SmtpEmailSender
from app.services.shipping_label import ShippingLabelGenerator
from tests.utils import FIXED_NOW, create_package, create_paid_order


def settings_with(**overrides):
    return get_settings().model_copy(update=overrides)


MESSAGE = EmailMessage(to="user-1@example.com", subject="Your order #order-1 has shipped!", html_body="<p>Hi</p>")


@pytest.mark.unit
class TestSmtpEmailSender:
    @pytest.mark.asyncio
    async def test_disabled_email_is_skipped(self):
        with patch("app.services.notifications.email_notification.smtplib.SMTP") as smtp:
            await SmtpEmailSender(settings_with(EMAIL_ENABLED=False)).send(MESSAGE)

        smtp.assert_not_called()

    @pytest.mark.asyncio
    async def test_sends_through_relay_with_tls_and_login(self):
        # Arrange
        settings = settings_with(
            EMAIL_ENABLED=True,
            SMTP_HOST="smtp.example.com",
            SMTP_PORT=2525,
            SMTP_USE_TLS=True,
            SMTP_USER="mailer",
            SMTP_PASSWORD="pw",
            EMAIL_FROM="shop@example.com",
        )
        server = MagicMock()

        # Act
        with patch("app.services.notifications.email_notification.smtplib.SMTP") as smtp:
            smtp.return_value.__enter__.return_value = server
            await SmtpEmailSender(settings).send(MESSAGE)

        # Assert
        smtp.assert_called_once_with("smtp.example.com", 2525)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "pw")
        sent = server.send_message.call_args.args[0]
        assert sent["To"] == "user-1@example.com"
        assert sent["From"] == "shop@example.com"
        assert sent["Subject"] == MESSAGE.subject

    @pytest.mark.asyncio
    async def test_delivery_errors_propagate(self):
        settings = settings_with(EMAIL_ENABLED=True, SMTP_USER=None, SMTP_USE_TLS=False)

        with patch("app.services.notifications.email_notification.smtplib.SMTP") as smtp:
            smtp.side_effect = OSError("connection refused")
            with pytest.raises(OSError):
                await SmtpEmailSender(settings).send(MESSAGE)


@pytest.mark.unit
class TestShippingLabelGenerator:
    def test_render_produces_pdf(self):
        generator = ShippingLabelGenerator(
            {"name": "Entrepôt", "street": "1 Quai", "city": "Paris", "zip_code": "75010", "country": "France"},
            clock=lambda: FIXED_NOW,
        )
        package = create_package(
            status=PackageStatus.SHIPPED,
            tracking_number="6A12345678901FR",
            label_url="https://labels.example.com/6A12345678901FR.pdf",
            shipped_at=FIXED_NOW,
        )

        pdf = generator.render(package, create_paid_order())

        assert isinstance(pdf, bytes)
        assert pdf.startswith(b"%PDF")

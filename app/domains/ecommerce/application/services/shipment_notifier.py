"""
Shipment Notifier

Builds and sends the "your order has shipped" email. Delivery problems
are logged and reported through the return value; they never undo the
shipment that triggered the email.
"""

import logging
from html import escape

from app.domains.ecommerce.application.dto import EmailMessage
from app.domains.ecommerce.application.ports import ICarrierService, IEmailSender
from app.domains.ecommerce.domain.entities import Order, Package

logger = logging.getLogger(__name__)


class ShipmentNotifier:
    def __init__(self, email_sender: IEmailSender, carrier_service: ICarrierService):
        self.email_sender = email_sender
        self.carrier_service = carrier_service

    async def notify_shipped(self, package: Package, order: Order) -> bool:
        """
        Send the tracking email for a freshly shipped package.

        Returns:
            True when the relay accepted the message
        """
        if package.tracking_notification_sent:
            return False
        if not order.contact_email:
            logger.warning(f"Order {order.id} has no contact email, skipping shipment notification")
            return False

        message = EmailMessage(
            to=order.contact_email,
            subject=f"Your order #{order.id} has shipped!",
            html_body=self._render(package, order),
        )
        try:
            await self.email_sender.send(message)
        except Exception as e:
            logger.error(f"Failed to send shipment notification for order {order.id}: {e}")
            return False

        logger.info(f"Shipment notification sent for order {order.id} to {order.contact_email}")
        return True

    def _render(self, package: Package, order: Order) -> str:
        tracking_number = package.tracking_number or ""
        shipped_at = package.shipped_at.strftime("%d/%m/%Y %H:%M") if package.shipped_at else "-"
        estimated = (
            order.estimated_delivery_date.strftime("%d/%m/%Y") if order.estimated_delivery_date else "-"
        )
        tracking_url = self.carrier_service.get_tracking_url(package.carrier, tracking_number)
        link = (
            f'<p><a href="{escape(tracking_url)}" style="background-color: #4CAF50; color: white; '
            f'padding: 10px 20px; text-decoration: none; border-radius: 5px;">Track my package</a></p>'
            if tracking_url
            else ""
        )
        return f"""
            <h2>Your order has shipped</h2>
            <p>Hello,</p>
            <p>Your order <strong>#{escape(str(order.id))}</strong> is on its way.</p>

            <h3>Delivery details:</h3>
            <ul>
                <li><strong>Carrier:</strong> {escape(package.carrier.display_name)}</li>
                <li><strong>Tracking number:</strong> {escape(tracking_number)}</li>
                <li><strong>Shipped on:</strong> {shipped_at}</li>
                <li><strong>Estimated delivery:</strong> {estimated}</li>
            </ul>

            {link}

            <p>Thank you for shopping with us!</p>
        """

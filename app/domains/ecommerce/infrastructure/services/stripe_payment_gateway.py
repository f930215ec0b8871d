"""
Stripe Payment Gateway

Adapts StripeClient to the IPaymentGateway port. Every provider failure
is surfaced as PaymentException so use cases never see httpx or Stripe
error types.
"""

import logging
from decimal import Decimal

import httpx

from app.clients.stripe_client import StripeClient, StripeError
from app.core.domain import Money, PaymentException
from app.domains.ecommerce.application.dto import PaymentIntentResult

logger = logging.getLogger(__name__)


class StripePaymentGateway:
    """IPaymentGateway backed by Stripe PaymentIntents."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self._transport = transport

    async def create_payment_intent(
        self, amount: Decimal, currency: str, metadata: dict[str, str]
    ) -> PaymentIntentResult:
        minor_units = Money(amount, currency.upper()).to_minor_units()
        try:
            async with StripeClient(transport=self._transport) as client:
                data = await client.create_payment_intent(minor_units, currency, metadata)
        except StripeError as e:
            logger.error(f"Stripe rejected payment intent for {metadata}: {e}")
            raise PaymentException(f"Payment provider error: {e.error_message}", original_error=e) from e

        if not data.get("id") or not data.get("client_secret"):
            raise PaymentException("Payment provider returned an incomplete payment intent")

        return PaymentIntentResult(
            id=data["id"],
            client_secret=data["client_secret"],
            status=data.get("status", "requires_payment_method"),
        )

    async def get_payment_intent(self, payment_intent_id: str) -> str:
        try:
            async with StripeClient(transport=self._transport) as client:
                data = await client.retrieve_payment_intent(payment_intent_id)
        except StripeError as e:
            logger.error(f"Could not retrieve payment intent {payment_intent_id}: {e}")
            raise PaymentException(
                f"Payment provider error: {e.error_message}",
                payment_id=payment_intent_id,
                original_error=e,
            ) from e

        return data.get("status", "")

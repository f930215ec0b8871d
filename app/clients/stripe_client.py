"""
Stripe API Client

Async client for Stripe PaymentIntents using secret key auth.

Connection Details:
    - Base URL: https://api.stripe.com/v1
    - Auth: Bearer Token (secret key)
    - Body: application/x-www-form-urlencoded

Endpoints:
    - POST /payment_intents - Create a payment intent
    - GET /payment_intents/{id} - Retrieve a payment intent

Documentation:
    - https://docs.stripe.com/api/payment_intents
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config.settings import get_settings

logger = logging.getLogger(__name__)


class StripeError(Exception):
    """
    Base exception for Stripe errors.

    Attributes:
        error_code: Machine-readable error code
        error_message: Human-readable error description
    """

    def __init__(self, error_code: str, error_message: str):
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(f"{error_code}: {error_message}")


class StripeAuthError(StripeError):
    """Authentication error (invalid secret key)."""

    def __init__(self, message: str = "Invalid secret key"):
        super().__init__("AUTH_ERROR", message)


class StripeConnectionError(StripeError):
    """Network connectivity issues."""

    def __init__(self, message: str):
        super().__init__("CONNECTION_ERROR", message)


class StripeRequestError(StripeError):
    """Request rejected by Stripe (card_error, invalid_request_error...)."""

    def __init__(self, error_type: str, message: str):
        super().__init__(error_type.upper(), message)


class StripeClient:
    """
    Async HTTP client for the Stripe PaymentIntents API.

    Environment Variables:
        STRIPE_SECRET_KEY: Secret key used as Bearer token
        STRIPE_API_BASE: API base URL (default: https://api.stripe.com/v1)
        STRIPE_TIMEOUT: Request timeout in seconds (default: 30)

    Example:
        async with StripeClient() as client:
            intent = await client.create_payment_intent(
                amount=4998,
                currency="usd",
                metadata={"orderId": "ord-1"},
            )
            # intent["client_secret"] is handed to the browser
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize Stripe client with settings.

        Args:
            transport: Optional httpx transport (tests plug a MockTransport here)
        """
        settings = get_settings()

        self._secret_key = settings.STRIPE_SECRET_KEY
        self._base_url = settings.STRIPE_API_BASE
        self._timeout = settings.STRIPE_TIMEOUT
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        if not self._secret_key:
            logger.error("STRIPE_SECRET_KEY not configured")

    async def __aenter__(self) -> StripeClient:
        """Enter async context and create HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._secret_key}"},
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args) -> None:
        """Exit async context and close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        Create a PaymentIntent.

        Args:
            amount: Amount in the currency's minor unit (cents)
            currency: Three-letter ISO currency code
            metadata: Key/value pairs stored on the intent

        Returns:
            The PaymentIntent object as returned by Stripe

        Raises:
            StripeAuthError: Invalid secret key
            StripeRequestError: Stripe rejected the request
            StripeConnectionError: Network error
        """
        if amount <= 0:
            raise StripeRequestError("invalid_request_error", "Amount must be greater than zero")

        form: dict[str, Any] = {
            "amount": str(amount),
            "currency": currency.lower(),
            "automatic_payment_methods[enabled]": "true",
        }
        for key, value in (metadata or {}).items():
            form[f"metadata[{key}]"] = str(value)

        logger.info(f"Creating Stripe payment intent: amount={amount} {currency}")
        data = await self._request("POST", "/payment_intents", data=form)
        logger.info(f"Stripe payment intent created: {data.get('id')}")
        return data

    async def retrieve_payment_intent(self, payment_intent_id: str) -> dict[str, Any]:
        """
        Retrieve a PaymentIntent by ID.

        Returns:
            dict with at least id, status and client_secret
        """
        data = await self._request("GET", f"/payment_intents/{payment_intent_id}")
        logger.info(f"Stripe payment intent {payment_intent_id} status: {data.get('status')}")
        return data

    async def _request(self, method: str, path: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self._client:
            raise StripeError("CLIENT_NOT_INITIALIZED", "Client not initialized. Use 'async with' context.")

        try:
            response = await self._client.request(method, path, data=data)
        except httpx.ConnectError as e:
            logger.error(f"Stripe connection error: {e}")
            raise StripeConnectionError(f"Could not connect to Stripe: {e}") from e
        except httpx.TimeoutException as e:
            logger.error(f"Stripe timeout error: {e}")
            raise StripeConnectionError(f"Stripe request timed out: {e}") from e

        if response.status_code == 401:
            raise StripeAuthError("Invalid or revoked secret key")

        if response.status_code >= 400:
            error = _error_body(response)
            raise StripeRequestError(error.get("type", "api_error"), error.get("message", response.text))

        return response.json()


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        return response.json().get("error", {}) or {}
    except ValueError:
        return {}

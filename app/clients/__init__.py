"""
Clients for external APIs
"""

from .stripe_client import (
    StripeAuthError,
    StripeClient,
    StripeConnectionError,
    StripeError,
    StripeRequestError,
)

__all__ = [
    "StripeClient",
    "StripeError",
    "StripeAuthError",
    "StripeConnectionError",
    "StripeRequestError",
]

"""
E-commerce Infrastructure Services

Adapters for the external systems behind the application ports:
- Stripe payment intents
- Carrier label and tracking integrations
"""

from app.domains.ecommerce.infrastructure.services.carriers import CarrierGateway, CarrierProfile
from app.domains.ecommerce.infrastructure.services.stripe_payment_gateway import StripePaymentGateway

__all__ = [
    "CarrierGateway",
    "CarrierProfile",
    "StripePaymentGateway",
]

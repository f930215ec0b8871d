"""
Carrier Gateway

Sandbox carrier integrations behind the ICarrierService port. Each carrier
issues tracking numbers in its own format and prices parcels from a
weight tariff; the gateway dispatches on CarrierType and owns the public
tracking URLs.
"""

import logging
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from app.core.domain import CarrierUnavailableException, utcnow
from app.domains.ecommerce.application.dto import (
    ShippingLabelRequest,
    ShippingLabelResult,
    TrackingEvent,
    TrackingInfo,
)
from app.domains.ecommerce.domain.value_objects import CarrierType

logger = logging.getLogger(__name__)


def _digits(count: int) -> str:
    return "".join(secrets.choice(string.digits) for _ in range(count))


def _letters(count: int) -> str:
    return "".join(secrets.choice(string.ascii_uppercase) for _ in range(count))


@dataclass(frozen=True)
class CarrierProfile:
    """
    Static description of a sandbox carrier.

    Attributes:
        name: Display name stored on the order
        tariff: (max weight in kg, price) brackets, ascending
        fallback_price: Price above the heaviest bracket
        transit_days: Days from label to estimated delivery
        tracking_number: Generates a tracking number in the carrier's format
    """

    name: str
    tariff: tuple[tuple[Decimal, Decimal], ...]
    fallback_price: Decimal
    transit_days: int
    tracking_number: Callable[[], str]

    def price_for(self, weight: Decimal) -> Decimal:
        for max_weight, price in self.tariff:
            if weight <= max_weight:
                return price
        return self.fallback_price


def _tariff(*brackets: tuple[str, str]) -> tuple[tuple[Decimal, Decimal], ...]:
    return tuple((Decimal(w), Decimal(p)) for w, p in brackets)


COLISSIMO = CarrierProfile(
    name="Colissimo",
    tariff=_tariff(("0.25", "5.50"), ("0.5", "6.50"), ("1", "7.50"), ("2", "9.50"), ("5", "12.50"), ("10", "18.50")),
    fallback_price=Decimal("25.00"),
    transit_days=3,
    tracking_number=lambda: f"6A{_digits(11)}FR",
)

CHRONOPOST = CarrierProfile(
    name="Chronopost",
    tariff=_tariff(("0.5", "12.90"), ("1", "14.90"), ("2", "17.90"), ("5", "22.90"), ("10", "29.90")),
    fallback_price=Decimal("39.90"),
    transit_days=1,
    tracking_number=lambda: _digits(13),
)

DHL = CarrierProfile(
    name="DHL",
    tariff=_tariff(("0.5", "15.90"), ("1", "18.90"), ("2", "21.90"), ("5", "27.90"), ("10", "35.90")),
    fallback_price=Decimal("49.90"),
    transit_days=2,
    tracking_number=lambda: _digits(10),
)

MONDIAL_RELAY = CarrierProfile(
    name="Mondial Relay",
    tariff=_tariff(("0.5", "3.99"), ("1", "4.99"), ("2", "5.99"), ("5", "7.99"), ("10", "11.99")),
    fallback_price=Decimal("15.99"),
    transit_days=3,
    tracking_number=lambda: f"{_letters(2)}{_digits(10)}",
)

# La Poste parcels ride the Colissimo network
DEFAULT_PROFILES: dict[CarrierType, CarrierProfile] = {
    CarrierType.LA_POSTE: COLISSIMO,
    CarrierType.COLISSIMO: COLISSIMO,
    CarrierType.CHRONOPOST: CHRONOPOST,
    CarrierType.DHL: DHL,
    CarrierType.MONDIAL_RELAY: MONDIAL_RELAY,
}

TRACKING_URLS: dict[CarrierType, str] = {
    CarrierType.LA_POSTE: "https://www.laposte.fr/outils/suivre-vos-envois?code={tn}",
    CarrierType.COLISSIMO: "https://www.laposte.fr/outils/suivre-vos-envois?code={tn}",
    CarrierType.CHRONOPOST: "https://www.chronopost.fr/tracking-no-cms/suivi-page?listeNumerosLT={tn}",
    CarrierType.MONDIAL_RELAY: "https://www.mondialrelay.fr/suivi-de-colis/?numeroExpedition={tn}",
    CarrierType.DHL: "https://www.dhl.com/fr-fr/home/tracking/tracking-express.html?submit=1&tracking-id={tn}",
    CarrierType.UPS: "https://www.ups.com/track?tracknum={tn}",
    CarrierType.FEDEX: "https://www.fedex.com/fedextrack/?tracknumbers={tn}",
}


class CarrierGateway:
    """
    ICarrierService implementation dispatching on CarrierType.

    Carriers without a profile (UPS, FedEx) can still be linked for
    tracking, but any label or status request for them raises
    CarrierUnavailableException.
    """

    def __init__(
        self,
        label_base_url: str,
        profiles: dict[CarrierType, CarrierProfile] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.label_base_url = label_base_url.rstrip("/")
        self.profiles = dict(DEFAULT_PROFILES if profiles is None else profiles)
        self.clock = clock

    def supports_carrier(self, carrier: CarrierType) -> bool:
        return carrier in self.profiles

    def _profile(self, carrier: CarrierType) -> CarrierProfile:
        profile = self.profiles.get(carrier)
        if profile is None:
            logger.warning(f"No integration configured for carrier {carrier.display_name}")
            raise CarrierUnavailableException(carrier.display_name, f"Carrier {carrier.display_name} is not supported")
        return profile

    async def generate_label(self, request: ShippingLabelRequest) -> ShippingLabelResult:
        profile = self._profile(request.carrier)
        tracking_number = profile.tracking_number()
        now = self.clock()

        logger.info(f"{profile.name}: label {tracking_number} issued for order {request.order_id}")

        return ShippingLabelResult(
            tracking_number=tracking_number,
            label_url=f"{self.label_base_url}/{tracking_number}.pdf",
            carrier=request.carrier,
            shipping_cost=profile.price_for(request.weight),
            estimated_delivery_date=now + timedelta(days=profile.transit_days),
        )

    async def get_tracking(self, tracking_number: str, carrier: CarrierType) -> TrackingInfo:
        profile = self._profile(carrier)
        now = self.clock()
        return TrackingInfo(
            tracking_number=tracking_number,
            carrier=carrier,
            status="in_transit",
            events=[TrackingEvent(occurred_at=now, status="in_transit", description=f"Handled by {profile.name}")],
            estimated_delivery_date=now + timedelta(days=profile.transit_days),
            tracking_url=self.get_tracking_url(carrier, tracking_number),
        )

    async def cancel_shipment(self, tracking_number: str, carrier: CarrierType) -> bool:
        profile = self._profile(carrier)
        logger.info(f"{profile.name}: shipment {tracking_number} cancelled")
        return True

    async def calculate_shipping_cost(self, carrier: CarrierType, weight: Decimal) -> Decimal:
        return self._profile(carrier).price_for(weight)

    def get_tracking_url(self, carrier: CarrierType, tracking_number: str) -> str:
        return TRACKING_URLS[carrier].format(tn=tracking_number)


__all__ = [
    "CarrierProfile",
    "CarrierGateway",
    "DEFAULT_PROFILES",
    "TRACKING_URLS",
]

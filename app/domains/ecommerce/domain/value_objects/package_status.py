"""
Package fulfillment lifecycle and supported carriers.
"""

from app.core.domain import StatusEnum


class PackageStatus(StatusEnum):
    """
    Fulfillment states of the physical shipment bound to an order.

    Valid transitions:
    - PENDING -> PREPARING, EXCEPTION
    - PREPARING -> READY_TO_SHIP, EXCEPTION
    - READY_TO_SHIP -> SHIPPED (label generation only), EXCEPTION
    - SHIPPED -> DELIVERED, EXCEPTION, RETURNED
    - DELIVERED -> RETURNED
    - EXCEPTION -> PREPARING (admin recovery)

    EXCEPTION is only reachable while the parcel is in the warehouse or with
    the carrier. Recovery re-prepares and re-ships the parcel, which a
    delivered or returned order can no longer take; problems after delivery
    go through the return workflow instead.
    """

    PENDING = 0
    PREPARING = 1
    READY_TO_SHIP = 2
    SHIPPED = 3
    DELIVERED = 4
    EXCEPTION = 5
    RETURNED = 6

    @classmethod
    def transition_table(cls):
        return _PACKAGE_TRANSITIONS

    def is_deletable(self) -> bool:
        """Nothing has left the warehouse yet."""
        return self in (PackageStatus.PENDING, PackageStatus.EXCEPTION)


class CarrierType(StatusEnum):
    """Shipping providers a package can be handed to."""

    LA_POSTE = 0
    COLISSIMO = 1
    CHRONOPOST = 2
    MONDIAL_RELAY = 3
    DHL = 4
    UPS = 5
    FEDEX = 6

    @property
    def display_name(self) -> str:
        return _CARRIER_NAMES[self]


_PACKAGE_TRANSITIONS = {
    PackageStatus.PENDING: frozenset({PackageStatus.PREPARING, PackageStatus.EXCEPTION}),
    PackageStatus.PREPARING: frozenset({PackageStatus.READY_TO_SHIP, PackageStatus.EXCEPTION}),
    PackageStatus.READY_TO_SHIP: frozenset({PackageStatus.SHIPPED, PackageStatus.EXCEPTION}),
    PackageStatus.SHIPPED: frozenset({PackageStatus.DELIVERED, PackageStatus.EXCEPTION, PackageStatus.RETURNED}),
    PackageStatus.DELIVERED: frozenset({PackageStatus.RETURNED}),
    PackageStatus.EXCEPTION: frozenset({PackageStatus.PREPARING}),
}

_CARRIER_NAMES = {
    CarrierType.LA_POSTE: "La Poste",
    CarrierType.COLISSIMO: "Colissimo",
    CarrierType.CHRONOPOST: "Chronopost",
    CarrierType.MONDIAL_RELAY: "Mondial Relay",
    CarrierType.DHL: "DHL",
    CarrierType.UPS: "UPS",
    CarrierType.FEDEX: "FedEx",
}

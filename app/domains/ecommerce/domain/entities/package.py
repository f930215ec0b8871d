"""
Package Entity

The physical shipment bound one-to-one to an order.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from app.core.domain import (
    Address,
    AggregateRoot,
    InvalidOperationException,
    InvalidTransitionException,
    ValidationException,
    utcnow,
)

from ..value_objects.package_status import CarrierType, PackageStatus


@dataclass
class Package(AggregateRoot[str]):
    """
    Package aggregate.

    SHIPPED is only reachable through `ship_with_label`, so a shipped
    package always carries a tracking number and a label URL.
    """

    order_id: str = ""
    user_id: str = ""

    # Dimensions (kg / cm)
    weight: Decimal = Decimal("0")
    length: Decimal = Decimal("0")
    width: Decimal = Decimal("0")
    height: Decimal = Decimal("0")

    status: PackageStatus = PackageStatus.PENDING
    prepared_at: datetime | None = None
    prepared_by: str | None = None

    carrier: CarrierType = CarrierType.COLISSIMO
    tracking_number: str | None = None
    label_url: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None

    pickup_point_id: str | None = None
    pickup_point_name: str | None = None
    pickup_point_address: str | None = None
    shipping_address: Address | None = None

    tracking_notification_sent: bool = False
    tracking_notification_sent_at: datetime | None = None
    notes: str | None = None

    def __post_init__(self):
        for name in ("weight", "length", "width", "height"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                setattr(self, name, Decimal(str(value)))

    # Transitions

    def _transition(self, new_status: PackageStatus) -> None:
        if not self.status.can_transition_to(new_status):
            raise InvalidTransitionException("Package", self.status.name, new_status.name)
        self.status = new_status
        self.touch()

    def mark_preparing(self, admin_id: str, now: datetime | None = None) -> None:
        self._transition(PackageStatus.PREPARING)
        self.prepared_by = admin_id
        self.prepared_at = now or utcnow()

    def has_dimensions(self) -> bool:
        return all(value > 0 for value in (self.weight, self.length, self.width, self.height))

    def mark_ready_to_ship(self) -> None:
        if not self.has_dimensions():
            raise ValidationException(
                "Weight and dimensions must be set before the package is ready to ship",
                field="weight",
            )
        self._transition(PackageStatus.READY_TO_SHIP)

    def update_dimensions(
        self,
        weight: Decimal | None = None,
        length: Decimal | None = None,
        width: Decimal | None = None,
        height: Decimal | None = None,
    ) -> None:
        """
        Set measurements; a Preparing package becomes ReadyToShip once all are positive.
        """
        if self.status not in (PackageStatus.PENDING, PackageStatus.PREPARING, PackageStatus.READY_TO_SHIP):
            raise InvalidOperationException(
                operation="update_dimensions",
                current_state=self.status.name,
                message="Dimensions cannot change once the package has left the warehouse",
            )
        for name, value in (("weight", weight), ("length", length), ("width", width), ("height", height)):
            if value is None:
                continue
            value = Decimal(str(value))
            if value < 0:
                raise ValidationException(f"{name} cannot be negative", field=name)
            setattr(self, name, value)
        self.touch()

        if self.status == PackageStatus.PREPARING and self.has_dimensions():
            self._transition(PackageStatus.READY_TO_SHIP)

    def change_carrier(self, carrier: CarrierType) -> None:
        if self.tracking_number:
            raise InvalidOperationException(
                operation="change_carrier",
                current_state=self.status.name,
                message="Carrier cannot change after a label was generated",
            )
        self.carrier = carrier
        self.touch()

    def ship_with_label(self, tracking_number: str, label_url: str, now: datetime | None = None) -> None:
        """Record the generated label and flip to SHIPPED in one step."""
        if not tracking_number or not label_url:
            raise ValidationException("A label requires both a tracking number and a label URL")
        if self.status != PackageStatus.READY_TO_SHIP:
            raise InvalidTransitionException("Package", self.status.name, PackageStatus.SHIPPED.name)
        self.tracking_number = tracking_number
        self.label_url = label_url
        self.shipped_at = now or utcnow()
        self._transition(PackageStatus.SHIPPED)

    def mark_delivered(self, now: datetime | None = None) -> None:
        self._transition(PackageStatus.DELIVERED)
        self.delivered_at = now or utcnow()

    def mark_returned(self) -> None:
        self._transition(PackageStatus.RETURNED)

    def report_exception(self, note: str | None = None) -> None:
        self._transition(PackageStatus.EXCEPTION)
        if note:
            self.notes = f"{self.notes}\n{note}" if self.notes else note

    def recover(self, admin_id: str, now: datetime | None = None) -> str | None:
        """
        Admin override: put an EXCEPTION package back into preparation.

        The previous label is void once the package is re-prepared, so the
        tracking data is cleared and a new label has to be generated.

        Returns:
            The voided tracking number, if the package had one
        """
        if self.status != PackageStatus.EXCEPTION:
            raise InvalidTransitionException("Package", self.status.name, PackageStatus.PREPARING.name)
        voided = self.tracking_number
        self.mark_preparing(admin_id, now)
        self.tracking_number = None
        self.label_url = None
        self.shipped_at = None
        self.tracking_notification_sent = False
        self.tracking_notification_sent_at = None
        return voided

    def mark_tracking_notified(self, now: datetime | None = None) -> None:
        self.tracking_notification_sent = True
        self.tracking_notification_sent_at = now or utcnow()
        self.touch()

    def ensure_deletable(self) -> None:
        if not self.status.is_deletable():
            raise InvalidOperationException(
                operation="delete_package",
                current_state=self.status.name,
                message="Only pending packages or packages in exception can be deleted",
            )

    def check_invariants(self) -> None:
        if self.status == PackageStatus.SHIPPED and not (self.tracking_number and self.label_url):
            raise ValidationException("A shipped package must have a tracking number and a label URL")

"""
Warranty Claim Entity

A post-delivery defect report tied to one (order, product) pair.
"""

from dataclasses import dataclass, field
from datetime import datetime

from app.core.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    InvalidTransitionException,
    ValidationException,
    utcnow,
)

from ..value_objects.warranty_status import WarrantyClaimStatus


def add_months(value: datetime, months: int) -> datetime:
    """Calendar month arithmetic; the day is clamped to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    days_in_month = [31, 29 if _is_leap(year) else 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31][month - 1]
    return value.replace(year=year, month=month, day=min(value.day, days_in_month))


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


@dataclass
class WarrantyClaim(AggregateRoot[str]):
    order_id: str = ""
    product_id: str = ""
    product_name: str = ""
    user_id: str = ""
    purchase_date: datetime | None = None
    warranty_expiration_date: datetime | None = None
    issue_description: str = ""
    photos: list[str] = field(default_factory=list)
    status: WarrantyClaimStatus = WarrantyClaimStatus.SUBMITTED
    resolution: str | None = None
    admin_notes: str | None = None
    resolved_at: datetime | None = None

    @classmethod
    def submit(
        cls,
        order_id: str,
        product_id: str,
        product_name: str,
        user_id: str,
        purchase_date: datetime,
        warranty_months: int,
        issue_description: str,
        photos: list[str] | None = None,
        now: datetime | None = None,
    ) -> "WarrantyClaim":
        """
        Raises:
            BusinessRuleViolationException: If the product's warranty has expired
        """
        if not issue_description or not issue_description.strip():
            raise ValidationException("Issue description is required", field="issue_description")
        now = now or utcnow()
        expires = add_months(purchase_date, warranty_months)
        if now > expires:
            raise BusinessRuleViolationException(
                rule="WARRANTY_ACTIVE",
                message=f"Warranty for {product_name or product_id} expired on {expires.date().isoformat()}",
                details={"warranty_expiration_date": expires.isoformat()},
            )
        return cls(
            order_id=order_id,
            product_id=product_id,
            product_name=product_name,
            user_id=user_id,
            purchase_date=purchase_date,
            warranty_expiration_date=expires,
            issue_description=issue_description.strip(),
            photos=list(photos or []),
        )

    def review(
        self,
        new_status: WarrantyClaimStatus | None = None,
        resolution: str | None = None,
        admin_notes: str | None = None,
        now: datetime | None = None,
    ) -> None:
        if new_status is not None and new_status != self.status:
            if not self.status.can_transition_to(new_status):
                raise InvalidTransitionException("WarrantyClaim", self.status.name, new_status.name)
            self.status = new_status
            if new_status == WarrantyClaimStatus.RESOLVED:
                self.resolved_at = now or utcnow()
        if resolution is not None:
            self.resolution = resolution
        if admin_notes is not None:
            self.admin_notes = admin_notes
        self.touch()

    def is_under_warranty(self, now: datetime | None = None) -> bool:
        if self.warranty_expiration_date is None:
            return False
        return (now or utcnow()) <= self.warranty_expiration_date

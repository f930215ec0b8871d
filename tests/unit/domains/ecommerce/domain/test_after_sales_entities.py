"""
Unit tests for Cart, catalog, SupportTicket and WarrantyClaim entities.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from app.core.domain import (
    BusinessRuleViolationException,
    InsufficientStockException,
    InvalidTransitionException,
    ValidationException,
)
from app.domains.ecommerce.domain.entities import WarrantyClaim
from app.domains.ecommerce.domain.entities.warranty_claim import add_months
from app.domains.ecommerce.domain.value_objects import CarrierType, TicketStatus, WarrantyClaimStatus
from tests.utils import (
    FIXED_NOW,
    create_cart,
    create_category,
    create_claim,
    create_product,
    create_shipping_method,
    create_ticket,
)


@pytest.mark.unit
class TestCart:
    def test_add_merges_same_product(self):
        cart = create_cart(items=[("prod-1", 1)])

        cart.add_item("prod-1", 2)

        assert cart.quantity_of("prod-1") == 3
        assert len(cart.items) == 1

    def test_update_to_zero_removes_line(self):
        cart = create_cart(items=[("prod-1", 1), ("prod-2", 1)])

        assert cart.update_item("prod-1", 0) is True

        assert [item.product_id for item in cart.items] == ["prod-2"]

    def test_update_unknown_line(self):
        assert create_cart().update_item("missing", 2) is False

    def test_add_rejects_non_positive_quantity(self):
        with pytest.raises(ValidationException):
            create_cart().add_item("prod-1", 0)


@pytest.mark.unit
class TestProductStock:
    def test_deduct_and_restock(self):
        product = create_product(stock=5)

        product.deduct_stock(3)
        product.restock(1)

        assert product.stock == 3

    def test_insufficient_stock(self):
        product = create_product(stock=1)

        with pytest.raises(InsufficientStockException) as exc_info:
            product.deduct_stock(2)

        assert exc_info.value.details == {"product_id": "prod-1", "requested": 2, "available": 1}
        assert product.stock == 1

    def test_inactive_product_is_unavailable(self):
        product = create_product(stock=10, is_active=False)

        assert not product.is_available(1)


@pytest.mark.unit
class TestCatalogInvariants:
    @pytest.mark.parametrize(
        "overrides",
        [{"name": " "}, {"price": "-0.01"}, {"stock": -1}, {"warranty_months": -1}],
    )
    def test_product_rejects_bad_values(self, overrides):
        product = create_product()
        for key, value in overrides.items():
            setattr(product, key, Decimal(value) if key == "price" else value)

        with pytest.raises(ValidationException):
            product.check_invariants()

    def test_category_cannot_be_its_own_parent(self):
        category = create_category(parent_category_id="cat-1")

        with pytest.raises(ValidationException):
            category.check_invariants()

    def test_top_level_category(self):
        category = create_category()

        category.check_invariants()
        assert not category.is_subcategory()

    @pytest.mark.parametrize("min_days,max_days", [(3, 2), (-1, 2)])
    def test_shipping_method_delivery_window(self, min_days, max_days):
        method = create_shipping_method(min_delivery_days=min_days, max_delivery_days=max_days)

        with pytest.raises(ValidationException):
            method.check_invariants()

    def test_shipping_method_carrier_name(self):
        assert create_shipping_method(carrier=CarrierType.MONDIAL_RELAY).carrier_name == "Mondial Relay"
        assert create_shipping_method().carrier_name is None


@pytest.mark.unit
class TestSupportTicket:
    def test_open_adds_description_as_first_message(self):
        ticket = create_ticket()

        assert ticket.status == TicketStatus.OPEN
        assert len(ticket.messages) == 1
        assert ticket.messages[0].message == ticket.description
        assert ticket.messages[0].is_from_admin is False

    def test_messages_keep_insertion_order(self):
        ticket = create_ticket()

        ticket.add_message("admin-1", "Support", True, "Can you send a photo?", now=FIXED_NOW)
        ticket.add_message("user-1", "Customer", False, "Here it is", ["photo.jpg"], now=FIXED_NOW)

        assert [m.message for m in ticket.messages[1:]] == ["Can you send a photo?", "Here it is"]
        assert ticket.messages[2].attachments == ("photo.jpg",)

    def test_admin_reply_on_open_ticket_starts_progress(self):
        ticket = create_ticket()

        ticket.add_message("admin-1", "Support", True, "Looking into it")

        assert ticket.status == TicketStatus.IN_PROGRESS

    @pytest.mark.parametrize("status", [TicketStatus.WAITING_CUSTOMER, TicketStatus.RESOLVED, TicketStatus.CLOSED])
    def test_owner_reply_reopens(self, status):
        ticket = create_ticket()
        ticket.set_status(status, now=FIXED_NOW)

        ticket.add_message("user-1", "Customer", False, "Still broken")

        assert ticket.status == TicketStatus.IN_PROGRESS
        assert ticket.closed_at is None

    def test_set_status_tracks_closed_at(self):
        ticket = create_ticket()

        ticket.set_status(TicketStatus.CLOSED, now=FIXED_NOW)
        assert ticket.closed_at == FIXED_NOW

        ticket.set_status(TicketStatus.OPEN)
        assert ticket.closed_at is None

    def test_empty_message_rejected(self):
        with pytest.raises(ValidationException):
            create_ticket().add_message("user-1", "Customer", False, "  ")

    def test_message_round_trips_through_dict(self):
        ticket = create_ticket()
        message = ticket.messages[0]

        assert type(message).from_dict(message.to_dict()) == message


@pytest.mark.unit
class TestWarrantyClaim:
    def test_expiration_from_purchase_date(self):
        claim = create_claim(purchase_date=datetime(2024, 1, 31, tzinfo=UTC), warranty_months=25, now=FIXED_NOW)

        assert claim.warranty_expiration_date == datetime(2026, 2, 28, tzinfo=UTC)
        assert claim.status == WarrantyClaimStatus.SUBMITTED

    def test_expired_warranty_rejected(self):
        with pytest.raises(BusinessRuleViolationException) as exc_info:
            WarrantyClaim.submit(
                order_id="order-1",
                product_id="prod-1",
                product_name="Kettle",
                user_id="user-1",
                purchase_date=FIXED_NOW - timedelta(days=400),
                warranty_months=12,
                issue_description="Broken",
                now=FIXED_NOW,
            )

        assert exc_info.value.rule == "WARRANTY_ACTIVE"

    def test_add_months_handles_leap_years(self):
        assert add_months(datetime(2023, 2, 28, tzinfo=UTC), 12) == datetime(2024, 2, 28, tzinfo=UTC)
        assert add_months(datetime(2024, 2, 29, tzinfo=UTC), 12) == datetime(2025, 2, 28, tzinfo=UTC)

    def test_review_through_resolution(self):
        claim = create_claim()

        claim.review(WarrantyClaimStatus.UNDER_REVIEW, admin_notes="Checking", now=FIXED_NOW)
        claim.review(WarrantyClaimStatus.APPROVED)
        assert claim.resolved_at is None

        claim.review(WarrantyClaimStatus.RESOLVED, resolution="Replaced", now=FIXED_NOW)

        assert claim.status == WarrantyClaimStatus.RESOLVED
        assert claim.resolution == "Replaced"
        assert claim.admin_notes == "Checking"
        assert claim.resolved_at == FIXED_NOW

    def test_review_rejects_illegal_transition(self):
        claim = create_claim()

        with pytest.raises(InvalidTransitionException):
            claim.review(WarrantyClaimStatus.RESOLVED)

        assert claim.status == WarrantyClaimStatus.SUBMITTED

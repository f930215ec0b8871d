"""
Unit tests for the status enums and their transition tables.
"""

import pytest

from app.domains.ecommerce.domain.value_objects import (
    CarrierType,
    OrderStatus,
    PackageStatus,
    PaymentStatus,
    ReturnStatus,
    TicketStatus,
    WarrantyClaimStatus,
)


@pytest.mark.unit
class TestOrderStatus:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.PROCESSING),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
            (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.DELIVERED, OrderStatus.RETURN_REQUESTED),
            (OrderStatus.RETURN_REQUESTED, OrderStatus.RETURNED),
            (OrderStatus.RETURN_REQUESTED, OrderStatus.DELIVERED),
        ],
    )
    def test_allowed_transitions(self, current, target):
        assert current.can_transition_to(target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
            (OrderStatus.DELIVERED, OrderStatus.PENDING),
            (OrderStatus.SHIPPED, OrderStatus.RETURN_REQUESTED),
        ],
    )
    def test_rejected_transitions(self, current, target):
        assert not current.can_transition_to(target)

    def test_cancelled_and_returned_are_terminal(self):
        assert OrderStatus.CANCELLED.is_terminal()
        assert OrderStatus.RETURNED.is_terminal()
        assert not OrderStatus.SHIPPED.is_terminal()

    def test_wire_values_follow_declaration_order(self):
        assert OrderStatus.values() == [0, 1, 2, 3, 4, 5, 6]
        assert int(OrderStatus.RETURN_REQUESTED) == 5


@pytest.mark.unit
class TestPaymentAndReturnStatus:
    def test_failed_payment_can_be_retried(self):
        assert PaymentStatus.FAILED.can_transition_to(PaymentStatus.COMPLETED)
        assert not PaymentStatus.REFUNDED.can_transition_to(PaymentStatus.COMPLETED)

    def test_return_workflow_is_linear_after_approval(self):
        assert ReturnStatus.APPROVED.allowed_next() == frozenset({ReturnStatus.IN_TRANSIT})
        assert ReturnStatus.REFUNDED.is_terminal()
        assert ReturnStatus.REJECTED.is_terminal()


@pytest.mark.unit
class TestPackageStatus:
    def test_shipped_reachable_only_from_ready_to_ship(self):
        sources = [s for s in PackageStatus if s.can_transition_to(PackageStatus.SHIPPED)]

        assert sources == [PackageStatus.READY_TO_SHIP]

    def test_exception_recovers_to_preparing_only(self):
        assert PackageStatus.EXCEPTION.allowed_next() == frozenset({PackageStatus.PREPARING})

    @pytest.mark.parametrize("status", [PackageStatus.DELIVERED, PackageStatus.RETURNED])
    def test_no_exception_once_parcel_is_back_or_delivered(self, status):
        assert not status.can_transition_to(PackageStatus.EXCEPTION)

    def test_exception_reachable_before_delivery(self):
        sources = {s for s in PackageStatus if s.can_transition_to(PackageStatus.EXCEPTION)}

        assert sources == {
            PackageStatus.PENDING,
            PackageStatus.PREPARING,
            PackageStatus.READY_TO_SHIP,
            PackageStatus.SHIPPED,
        }

    def test_deletable_statuses(self):
        assert PackageStatus.PENDING.is_deletable()
        assert PackageStatus.EXCEPTION.is_deletable()
        assert not PackageStatus.SHIPPED.is_deletable()


@pytest.mark.unit
class TestStatusParsing:
    @pytest.mark.parametrize("raw", ["2", "READY_TO_SHIP", "ReadyToShip", "ready to ship"])
    def test_from_string_accepts_value_or_name(self, raw):
        assert PackageStatus.from_string(raw) == PackageStatus.READY_TO_SHIP

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError):
            OrderStatus.from_string("teleported")

    def test_ticket_status_has_no_table(self):
        assert TicketStatus.CLOSED.can_transition_to(TicketStatus.OPEN)
        assert TicketStatus.RESOLVED.is_closed()

    def test_warranty_resolved_only_after_approval(self):
        assert not WarrantyClaimStatus.SUBMITTED.can_transition_to(WarrantyClaimStatus.RESOLVED)
        assert WarrantyClaimStatus.APPROVED.can_transition_to(WarrantyClaimStatus.RESOLVED)

    def test_labels_and_carrier_names(self):
        assert PackageStatus.READY_TO_SHIP.label == "Ready To Ship"
        assert CarrierType.MONDIAL_RELAY.display_name == "Mondial Relay"
        assert int(CarrierType.LA_POSTE) == 0

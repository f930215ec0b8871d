"""
Unit tests for returns, shipping, support and warranty use cases.
"""

from datetime import timedelta

import pytest

from app.core.domain import (
    AuthorizationException,
    BusinessRuleViolationException,
    CarrierUnavailableException,
    DuplicateEntityException,
    EntityNotFoundException,
    InvalidTransitionException,
    ValidationException,
)
from app.domains.ecommerce.application.dto import (
    CreateTicketRequest,
    SubmitWarrantyClaimRequest,
    TrackingEvent,
    TrackingInfo,
    UpdateShippingRequest,
)
from app.domains.ecommerce.application.use_cases import (
    AddTicketMessageUseCase,
    CreateTicketUseCase,
    GetOrderTrackingUseCase,
    GetReturnInfoUseCase,
    ListDelayedOrdersUseCase,
    RequestReturnUseCase,
    SubmitWarrantyClaimUseCase,
    UpdateReturnStatusUseCase,
    UpdateShippingInfoUseCase,
    UpdateWarrantyClaimUseCase,
)
from app.domains.ecommerce.domain.value_objects import (
    CarrierType,
    OrderStatus,
    PackageStatus,
    PaymentStatus,
    ReturnStatus,
    TicketStatus,
    WarrantyClaimStatus,
)
from tests.utils import (
    FIXED_NOW,
    create_claim,
    create_order,
    create_package,
    create_paid_order,
    create_product,
    create_ticket,
)


def delivered_order(**kwargs):
    kwargs.setdefault("delivered_at", FIXED_NOW - timedelta(days=3))
    kwargs.setdefault("return_deadline", FIXED_NOW + timedelta(days=11))
    return create_order(status=OrderStatus.DELIVERED, payment_status=PaymentStatus.COMPLETED, **kwargs)


@pytest.mark.unit
class TestRequestReturnUseCase:
    @pytest.mark.asyncio
    async def test_owner_requests_return(self, mock_order_repository, clock, customer):
        # Arrange
        order = delivered_order()
        mock_order_repository.get.return_value = order

        # Act
        result = await RequestReturnUseCase(mock_order_repository, clock).execute("order-1", customer, "Too small")

        # Assert
        assert result.status == OrderStatus.RETURN_REQUESTED
        assert result.return_status == ReturnStatus.REQUESTED
        assert result.return_requested_at == FIXED_NOW
        mock_order_repository.update.assert_awaited_once_with(order)

    @pytest.mark.asyncio
    async def test_admin_cannot_request_on_behalf(self, mock_order_repository, clock, admin):
        mock_order_repository.get.return_value = delivered_order()

        with pytest.raises(AuthorizationException):
            await RequestReturnUseCase(mock_order_repository, clock).execute("order-1", admin, "Too small")

    @pytest.mark.asyncio
    async def test_shipped_order_refused_without_writes(self, mock_order_repository, clock, customer):
        order = create_order(status=OrderStatus.SHIPPED)
        mock_order_repository.get.return_value = order

        with pytest.raises(InvalidTransitionException):
            await RequestReturnUseCase(mock_order_repository, clock).execute("order-1", customer, "Too small")

        assert order.return_status == ReturnStatus.NONE
        mock_order_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_order(self, mock_order_repository, clock, customer):
        mock_order_repository.get.return_value = None

        with pytest.raises(EntityNotFoundException):
            await RequestReturnUseCase(mock_order_repository, clock).execute("nope", customer, "Too small")


@pytest.mark.unit
class TestReturnInfo:
    @pytest.mark.asyncio
    async def test_days_remaining_while_window_open(self, mock_order_repository, clock, customer):
        mock_order_repository.get.return_value = delivered_order()

        info = await GetReturnInfoUseCase(mock_order_repository, clock).execute("order-1", customer)

        assert info.can_return is True
        assert info.days_remaining == 11
        assert info.status == int(OrderStatus.DELIVERED)

    @pytest.mark.asyncio
    async def test_other_customer_denied(self, mock_order_repository, clock, other_customer):
        mock_order_repository.get.return_value = delivered_order()

        with pytest.raises(AuthorizationException):
            await GetReturnInfoUseCase(mock_order_repository, clock).execute("order-1", other_customer)


@pytest.mark.unit
class TestUpdateReturnStatusUseCase:
    @pytest.mark.asyncio
    async def test_received_marks_package_returned(self, mock_order_repository, mock_package_repository, admin):
        # Arrange
        order = create_order(
            status=OrderStatus.RETURN_REQUESTED,
            payment_status=PaymentStatus.COMPLETED,
            return_status=ReturnStatus.IN_TRANSIT,
        )
        package = create_package(status=PackageStatus.DELIVERED, tracking_number="T", label_url="L")
        mock_order_repository.get.return_value = order
        mock_package_repository.get_by_order_id.return_value = package

        # Act
        result = await UpdateReturnStatusUseCase(mock_order_repository, mock_package_repository).execute(
            "order-1", ReturnStatus.RECEIVED, admin
        )

        # Assert
        assert result.return_status == ReturnStatus.RECEIVED
        assert package.status == PackageStatus.RETURNED
        mock_package_repository.update.assert_awaited_once_with(package)

    @pytest.mark.asyncio
    async def test_approval_leaves_package_alone(self, mock_order_repository, mock_package_repository, admin):
        mock_order_repository.get.return_value = create_order(
            status=OrderStatus.RETURN_REQUESTED,
            payment_status=PaymentStatus.COMPLETED,
            return_status=ReturnStatus.REQUESTED,
        )

        await UpdateReturnStatusUseCase(mock_order_repository, mock_package_repository).execute(
            "order-1", ReturnStatus.APPROVED, admin
        )

        mock_package_repository.get_by_order_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_customer_cannot_update(self, mock_order_repository, mock_package_repository, customer):
        with pytest.raises(AuthorizationException):
            await UpdateReturnStatusUseCase(mock_order_repository, mock_package_repository).execute(
                "order-1", ReturnStatus.APPROVED, customer
            )


@pytest.mark.unit
class TestGetOrderTrackingUseCase:
    @pytest.fixture
    def shipped(self):
        return create_order(
            status=OrderStatus.SHIPPED,
            tracking_number="6A12345678901FR",
            carrier_name="Colissimo",
            shipped_at=FIXED_NOW - timedelta(days=1),
            estimated_delivery_date=FIXED_NOW + timedelta(days=1),
        )

    @pytest.fixture
    def use_case(self, mock_order_repository, mock_package_repository, mock_carrier_service, clock):
        return GetOrderTrackingUseCase(mock_order_repository, mock_package_repository, mock_carrier_service, clock)

    @pytest.mark.asyncio
    async def test_live_tracking_merged(
        self, use_case, shipped, mock_order_repository, mock_package_repository, mock_carrier_service, customer
    ):
        # Arrange
        mock_order_repository.get.return_value = shipped
        mock_package_repository.get_by_order_id.return_value = create_package(
            status=PackageStatus.SHIPPED, tracking_number="6A12345678901FR", label_url="L"
        )
        event = TrackingEvent(occurred_at=FIXED_NOW, status="in_transit", location="Paris")
        mock_carrier_service.get_tracking.return_value = TrackingInfo(
            tracking_number="6A12345678901FR", carrier=CarrierType.COLISSIMO, status="in_transit", events=[event]
        )

        # Act
        tracking = await use_case.execute("order-1", customer)

        # Assert
        assert tracking.carrier_status == "in_transit"
        assert tracking.events == [event]
        assert tracking.tracking_url == "https://track.example.com/6A12345678901FR"
        assert tracking.is_delayed is False

    @pytest.mark.asyncio
    async def test_carrier_outage_degrades_to_stored_data(
        self, use_case, shipped, mock_order_repository, mock_package_repository, mock_carrier_service, customer
    ):
        mock_order_repository.get.return_value = shipped
        mock_package_repository.get_by_order_id.return_value = create_package(
            status=PackageStatus.SHIPPED, tracking_number="6A12345678901FR", label_url="L"
        )
        mock_carrier_service.get_tracking.side_effect = CarrierUnavailableException("Colissimo")

        tracking = await use_case.execute("order-1", customer)

        assert tracking.tracking_number == "6A12345678901FR"
        assert tracking.carrier_status is None
        assert tracking.events == []

    @pytest.mark.asyncio
    async def test_without_package(
        self, use_case, mock_order_repository, mock_package_repository, mock_carrier_service, customer
    ):
        mock_order_repository.get.return_value = create_paid_order()
        mock_package_repository.get_by_order_id.return_value = None

        tracking = await use_case.execute("order-1", customer)

        assert tracking.tracking_number is None
        mock_carrier_service.get_tracking.assert_not_awaited()


@pytest.mark.unit
class TestShippingUpdates:
    @pytest.mark.asyncio
    async def test_manual_shipping_moves_order_to_shipped(self, mock_order_repository, clock, admin):
        mock_order_repository.get.return_value = create_paid_order()

        order = await UpdateShippingInfoUseCase(mock_order_repository, 3, clock).execute(
            "order-1", UpdateShippingRequest(tracking_number="1234567890", carrier_name="DHL"), admin
        )

        assert order.status == OrderStatus.SHIPPED
        assert order.estimated_delivery_date == FIXED_NOW + timedelta(days=3)
        assert order.shipped_at == FIXED_NOW

    @pytest.mark.asyncio
    async def test_manual_shipping_rejects_pending_order(self, mock_order_repository, clock, admin):
        mock_order_repository.get.return_value = create_order()

        with pytest.raises(InvalidTransitionException):
            await UpdateShippingInfoUseCase(mock_order_repository, 3, clock).execute(
                "order-1", UpdateShippingRequest(tracking_number="1234567890", carrier_name="DHL"), admin
            )

    @pytest.mark.asyncio
    async def test_delayed_orders(self, mock_order_repository, clock, admin):
        late = create_order("late", status=OrderStatus.SHIPPED, estimated_delivery_date=FIXED_NOW - timedelta(days=1))
        on_time = create_order("ok", status=OrderStatus.SHIPPED, estimated_delivery_date=FIXED_NOW + timedelta(days=1))
        unknown = create_order("unknown", status=OrderStatus.SHIPPED)
        mock_order_repository.get_by_status.return_value = [late, on_time, unknown]

        delayed = await ListDelayedOrdersUseCase(mock_order_repository, clock).execute(admin)

        assert [o.id for o in delayed] == ["late"]


@pytest.mark.unit
class TestSupportTickets:
    @pytest.mark.asyncio
    async def test_ticket_on_foreign_order_refused(self, mock_ticket_repository, mock_order_repository, other_customer):
        mock_order_repository.get.return_value = create_order()
        request = CreateTicketRequest(subject="Late", description="Where is it?", order_id="order-1")

        with pytest.raises(AuthorizationException):
            await CreateTicketUseCase(mock_ticket_repository, mock_order_repository).execute(request, other_customer)

        mock_ticket_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ticket_created_with_first_message(self, mock_ticket_repository, mock_order_repository, customer):
        request = CreateTicketRequest(subject="Late", description="Where is it?")

        ticket = await CreateTicketUseCase(mock_ticket_repository, mock_order_repository).execute(request, customer)

        assert ticket.id == "supportticket-new"
        assert ticket.messages[0].sender_name == customer.email
        mock_order_repository.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_reply_starts_progress(self, mock_ticket_repository, admin):
        mock_ticket_repository.get.return_value = create_ticket()

        ticket = await AddTicketMessageUseCase(mock_ticket_repository).execute("ticket-1", admin, "On it")

        assert ticket.status == TicketStatus.IN_PROGRESS
        assert ticket.messages[-1].is_from_admin is True
        assert ticket.messages[-1].sender_name == "Alice Admin"

    @pytest.mark.asyncio
    async def test_owner_reply_reopens_closed_ticket(self, mock_ticket_repository, customer):
        ticket = create_ticket()
        ticket.set_status(TicketStatus.CLOSED, now=FIXED_NOW)
        mock_ticket_repository.get.return_value = ticket

        result = await AddTicketMessageUseCase(mock_ticket_repository).execute("ticket-1", customer, "Still broken")

        assert result.status == TicketStatus.IN_PROGRESS
        assert result.closed_at is None

    @pytest.mark.asyncio
    async def test_stranger_cannot_reply(self, mock_ticket_repository, other_customer):
        mock_ticket_repository.get.return_value = create_ticket()

        with pytest.raises(AuthorizationException):
            await AddTicketMessageUseCase(mock_ticket_repository).execute("ticket-1", other_customer, "Hi")

        mock_ticket_repository.update.assert_not_awaited()


@pytest.mark.unit
class TestWarrantyClaims:
    @pytest.fixture
    def use_case(self, mock_claim_repository, mock_order_repository, mock_product_repository, clock):
        return SubmitWarrantyClaimUseCase(mock_claim_repository, mock_order_repository, mock_product_repository, clock)

    @pytest.mark.asyncio
    async def test_claim_submitted(self, use_case, mock_order_repository, mock_product_repository, customer):
        # Arrange
        mock_order_repository.get.return_value = delivered_order()
        mock_product_repository.get.return_value = create_product(warranty_months=24)
        request = SubmitWarrantyClaimRequest(order_id="order-1", product_id="prod-1", issue_description="No heat")

        # Act
        claim = await use_case.execute(request, customer)

        # Assert
        assert claim.status == WarrantyClaimStatus.SUBMITTED
        assert claim.product_name == "Kettle"
        assert claim.purchase_date == FIXED_NOW - timedelta(days=30)
        assert claim.warranty_expiration_date > FIXED_NOW

    @pytest.mark.asyncio
    async def test_product_not_in_order(self, use_case, mock_order_repository, mock_claim_repository, customer):
        mock_order_repository.get.return_value = delivered_order()
        request = SubmitWarrantyClaimRequest(order_id="order-1", product_id="prod-9", issue_description="No heat")

        with pytest.raises(ValidationException):
            await use_case.execute(request, customer)

        mock_claim_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_expired_warranty(self, use_case, mock_order_repository, mock_product_repository, customer):
        mock_order_repository.get.return_value = delivered_order(created_at=FIXED_NOW - timedelta(days=120))
        mock_product_repository.get.return_value = create_product(warranty_months=3)
        request = SubmitWarrantyClaimRequest(order_id="order-1", product_id="prod-1", issue_description="No heat")

        with pytest.raises(BusinessRuleViolationException):
            await use_case.execute(request, customer)

    @pytest.mark.asyncio
    async def test_duplicate_claim(
        self, use_case, mock_order_repository, mock_product_repository, mock_claim_repository, customer
    ):
        mock_order_repository.get.return_value = delivered_order()
        mock_product_repository.get.return_value = create_product()
        mock_claim_repository.create.side_effect = DuplicateEntityException(
            "WarrantyClaim", "order_id,product_id", "order-1,prod-1"
        )
        request = SubmitWarrantyClaimRequest(order_id="order-1", product_id="prod-1", issue_description="No heat")

        with pytest.raises(DuplicateEntityException):
            await use_case.execute(request, customer)

    @pytest.mark.asyncio
    async def test_admin_resolves_claim(self, mock_claim_repository, clock, admin):
        claim = create_claim()
        claim.review(WarrantyClaimStatus.UNDER_REVIEW)
        claim.review(WarrantyClaimStatus.APPROVED)
        mock_claim_repository.get.return_value = claim

        result = await UpdateWarrantyClaimUseCase(mock_claim_repository, clock).execute(
            "claim-1", admin, status=WarrantyClaimStatus.RESOLVED, resolution="Replaced"
        )

        assert result.status == WarrantyClaimStatus.RESOLVED
        assert result.resolved_at == FIXED_NOW

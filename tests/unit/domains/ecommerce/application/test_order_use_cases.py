"""
Unit tests for cart, checkout and payment use cases.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from app.core.domain import (
    AuthorizationException,
    EntityNotFoundException,
    InsufficientStockException,
    InvalidOperationException,
    InvalidTransitionException,
    PaymentException,
    ValidationException,
)
from app.domains.ecommerce.application.dto import CreateOrderRequest, PaymentIntentResult
from app.domains.ecommerce.application.use_cases import (
    AddCartItemUseCase,
    ConfirmPaymentUseCase,
    CreateOrderUseCase,
    CreatePaymentIntentUseCase,
    ListOrdersUseCase,
    RequestReturnUseCase,
    UpdateOrderStatusUseCase,
)
from app.domains.ecommerce.domain.value_objects import OrderStatus, PaymentStatus, ReturnStatus
from tests.utils import (
    FIXED_NOW,
    create_address,
    create_cart,
    create_order,
    create_paid_order,
    create_product,
)


@pytest.mark.unit
class TestAddCartItemUseCase:
    @pytest.fixture
    def use_case(self, mock_cart_repository, mock_product_repository):
        return AddCartItemUseCase(mock_cart_repository, mock_product_repository)

    @pytest.mark.asyncio
    async def test_creates_cart_lazily(self, use_case, mock_cart_repository, mock_product_repository, customer):
        # Arrange
        mock_product_repository.get.return_value = create_product(stock=5)
        mock_cart_repository.get_by_user_id.return_value = None

        # Act
        cart = await use_case.execute(customer, "prod-1", 2)

        # Assert
        mock_cart_repository.create.assert_awaited_once()
        assert cart.user_id == customer.user_id
        assert cart.quantity_of("prod-1") == 2

    @pytest.mark.asyncio
    async def test_merged_quantity_checked_against_stock(
        self, use_case, mock_cart_repository, mock_product_repository, customer
    ):
        # Arrange
        mock_product_repository.get.return_value = create_product(stock=3)
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 2)])

        # Act & Assert
        with pytest.raises(InsufficientStockException):
            await use_case.execute(customer, "prod-1", 2)

        mock_cart_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_product(self, use_case, mock_product_repository, customer):
        mock_product_repository.get.return_value = None

        with pytest.raises(EntityNotFoundException):
            await use_case.execute(customer, "missing", 1)


@pytest.mark.unit
class TestCreateOrderUseCase:
    @pytest.fixture
    def use_case(self, mock_order_repository, mock_cart_repository, mock_product_repository):
        return CreateOrderUseCase(mock_order_repository, mock_cart_repository, mock_product_repository, currency="EUR")

    @pytest.mark.asyncio
    async def test_checkout_snapshots_cart_and_deducts_stock(
        self, use_case, mock_order_repository, mock_cart_repository, mock_product_repository, customer
    ):
        # Arrange
        kettle = create_product("prod-1", "Kettle", "25.00", stock=10)
        mug = create_product("prod-2", "Mug", "7.50", stock=4)
        cart = create_cart(items=[("prod-1", 1), ("prod-2", 2)])
        mock_cart_repository.get_by_user_id.return_value = cart
        mock_product_repository.get_many.return_value = {"prod-1": kettle, "prod-2": mug}

        # Act
        order = await use_case.execute(customer, CreateOrderRequest(shipping_address=create_address()))

        # Assert
        assert order.id == "order-new"
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.PENDING
        assert order.total_amount == Decimal("40.00")
        assert order.currency == "EUR"
        assert order.contact_email == customer.email
        assert [(i.product_id, i.quantity, i.price) for i in order.items] == [
            ("prod-1", 1, Decimal("25.00")),
            ("prod-2", 2, Decimal("7.50")),
        ]
        assert kettle.stock == 9
        assert mug.stock == 2
        assert mock_product_repository.update.await_count == 2
        assert cart.is_empty()
        mock_cart_repository.update.assert_awaited_once_with(cart)

    @pytest.mark.asyncio
    async def test_empty_cart_rejected(self, use_case, mock_cart_repository, mock_order_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = create_cart()

        with pytest.raises(ValidationException):
            await use_case.execute(customer, CreateOrderRequest(shipping_address=create_address()))

        mock_order_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_contact_email_normalized(self, use_case, mock_cart_repository, mock_product_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 1)])
        mock_product_repository.get_many.return_value = {"prod-1": create_product("prod-1", stock=3)}

        order = await use_case.execute(
            customer, CreateOrderRequest(shipping_address=create_address(), contact_email=" Jane.Doe@Example.COM ")
        )

        assert order.contact_email == "jane.doe@example.com"

    @pytest.mark.asyncio
    async def test_malformed_contact_email_rejected(
        self, use_case, mock_order_repository, mock_cart_repository, mock_product_repository, customer
    ):
        product = create_product("prod-1", stock=3)
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 1)])
        mock_product_repository.get_many.return_value = {"prod-1": product}

        with pytest.raises(ValidationException) as exc_info:
            await use_case.execute(
                customer, CreateOrderRequest(shipping_address=create_address(), contact_email="not-an-address")
            )

        assert exc_info.value.details["field"] == "contact_email"
        assert product.stock == 3
        mock_order_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_insufficient_stock_leaves_everything_untouched(
        self, use_case, mock_order_repository, mock_cart_repository, mock_product_repository, customer
    ):
        # Arrange
        kettle = create_product("prod-1", stock=10)
        mug = create_product("prod-2", "Mug", "7.50", stock=1)
        cart = create_cart(items=[("prod-1", 1), ("prod-2", 2)])
        mock_cart_repository.get_by_user_id.return_value = cart
        mock_product_repository.get_many.return_value = {"prod-1": kettle, "prod-2": mug}

        # Act
        with pytest.raises(InsufficientStockException):
            await use_case.execute(customer, CreateOrderRequest(shipping_address=create_address()))

        # Assert
        assert kettle.stock == 10
        assert len(cart.items) == 2
        mock_product_repository.update.assert_not_awaited()
        mock_order_repository.create.assert_not_awaited()


@pytest.mark.unit
class TestCreatePaymentIntentUseCase:
    @pytest.fixture
    def use_case(self, mock_order_repository, mock_payment_gateway):
        return CreatePaymentIntentUseCase(mock_order_repository, mock_payment_gateway)

    @pytest.mark.asyncio
    async def test_intent_attached_to_order(self, use_case, mock_order_repository, mock_payment_gateway, customer):
        # Arrange
        order = create_order()
        mock_order_repository.get.return_value = order
        mock_payment_gateway.create_payment_intent.return_value = PaymentIntentResult(
            id="pi_123", client_secret="pi_123_secret"
        )

        # Act
        result = await use_case.execute("order-1", customer)

        # Assert
        assert result == {"client_secret": "pi_123_secret", "payment_intent_id": "pi_123"}
        assert order.payment_intent_id == "pi_123"
        kwargs = mock_payment_gateway.create_payment_intent.await_args.kwargs
        assert kwargs["amount"] == Decimal("50.00")
        assert kwargs["metadata"] == {"orderId": "order-1", "userId": customer.user_id}
        mock_order_repository.update.assert_awaited_once_with(order)

    @pytest.mark.asyncio
    async def test_only_owner_may_pay(self, use_case, mock_order_repository, mock_payment_gateway, other_customer):
        mock_order_repository.get.return_value = create_order()

        with pytest.raises(AuthorizationException):
            await use_case.execute("order-1", other_customer)

        mock_payment_gateway.create_payment_intent.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_paid_order_refused(self, use_case, mock_order_repository, customer):
        mock_order_repository.get.return_value = create_paid_order()

        with pytest.raises(InvalidOperationException):
            await use_case.execute("order-1", customer)

    @pytest.mark.asyncio
    async def test_gateway_failure_persists_nothing(
        self, use_case, mock_order_repository, mock_payment_gateway, customer
    ):
        # Arrange
        order = create_order()
        mock_order_repository.get.return_value = order
        mock_payment_gateway.create_payment_intent.side_effect = PaymentException("card_error")

        # Act
        with pytest.raises(PaymentException):
            await use_case.execute("order-1", customer)

        # Assert
        assert order.payment_intent_id is None
        mock_order_repository.update.assert_not_awaited()


@pytest.mark.unit
class TestConfirmPaymentUseCase:
    @pytest.fixture
    def use_case(self, mock_order_repository, mock_payment_gateway):
        return ConfirmPaymentUseCase(mock_order_repository, mock_payment_gateway)

    @pytest.mark.asyncio
    async def test_succeeded_intent_confirms_order(
        self, use_case, mock_order_repository, mock_payment_gateway
    ):
        # Arrange
        order = create_order(payment_intent_id="pi_123")
        mock_order_repository.get_by_payment_intent_id.return_value = order
        mock_payment_gateway.get_payment_intent.return_value = "succeeded"

        # Act
        confirmed = await use_case.execute("pi_123")

        # Assert
        assert confirmed is True
        assert order.status == OrderStatus.PROCESSING
        assert order.payment_status == PaymentStatus.COMPLETED
        mock_order_repository.update.assert_awaited_once_with(order)

    @pytest.mark.asyncio
    async def test_second_confirmation_is_a_no_op(self, use_case, mock_order_repository, mock_payment_gateway):
        mock_order_repository.get_by_payment_intent_id.return_value = create_paid_order()

        assert await use_case.execute("pi_123") is False

        mock_payment_gateway.get_payment_intent.assert_not_awaited()
        mock_order_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, payment_status",
        [
            (OrderStatus.SHIPPED, PaymentStatus.COMPLETED),
            (OrderStatus.DELIVERED, PaymentStatus.COMPLETED),
            (OrderStatus.RETURNED, PaymentStatus.REFUNDED),
        ],
    )
    async def test_late_confirmation_after_fulfillment_is_a_no_op(
        self, use_case, mock_order_repository, mock_payment_gateway, status, payment_status
    ):
        # Arrange
        order = create_paid_order(status=status, payment_status=payment_status)
        mock_order_repository.get_by_payment_intent_id.return_value = order

        # Act
        confirmed = await use_case.execute("pi_123")

        # Assert
        assert confirmed is False
        assert order.status == status
        assert order.payment_status == payment_status
        mock_payment_gateway.get_payment_intent.assert_not_awaited()
        mock_order_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_intent(self, use_case, mock_order_repository):
        mock_order_repository.get_by_payment_intent_id.return_value = None

        with pytest.raises(EntityNotFoundException):
            await use_case.execute("pi_unknown")

    @pytest.mark.asyncio
    async def test_unsettled_intent_changes_nothing(self, use_case, mock_order_repository, mock_payment_gateway):
        order = create_order(payment_intent_id="pi_123")
        mock_order_repository.get_by_payment_intent_id.return_value = order
        mock_payment_gateway.get_payment_intent.return_value = "requires_payment_method"

        assert await use_case.execute("pi_123") is False

        assert order.status == OrderStatus.PENDING
        mock_order_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_canceled_intent_marks_payment_failed(self, use_case, mock_order_repository, mock_payment_gateway):
        order = create_order(payment_intent_id="pi_123")
        mock_order_repository.get_by_payment_intent_id.return_value = order
        mock_payment_gateway.get_payment_intent.return_value = "canceled"

        assert await use_case.execute("pi_123") is False

        assert order.payment_status == PaymentStatus.FAILED
        assert order.status == OrderStatus.PENDING
        mock_order_repository.update.assert_awaited_once_with(order)


@pytest.mark.unit
class TestUpdateOrderStatusUseCase:
    @pytest.fixture
    def use_case(self, mock_order_repository, mock_product_repository, return_window, clock):
        return UpdateOrderStatusUseCase(mock_order_repository, mock_product_repository, return_window, clock)

    @pytest.mark.asyncio
    async def test_cancel_restocks_products(self, use_case, mock_order_repository, mock_product_repository, admin):
        # Arrange
        product = create_product(stock=3)
        mock_order_repository.get.return_value = create_paid_order()
        mock_product_repository.get_many.return_value = {"prod-1": product}

        # Act
        order = await use_case.execute("order-1", OrderStatus.CANCELLED, admin)

        # Assert
        assert order.status == OrderStatus.CANCELLED
        assert order.cancelled_at == FIXED_NOW
        assert product.stock == 5
        mock_product_repository.update.assert_awaited_once_with(product)

    @pytest.mark.asyncio
    async def test_illegal_transition_not_persisted(self, use_case, mock_order_repository, admin):
        mock_order_repository.get.return_value = create_order(status=OrderStatus.SHIPPED)

        with pytest.raises(InvalidTransitionException):
            await use_case.execute("order-1", OrderStatus.CANCELLED, admin)

        mock_order_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_back_to_delivered_rejects_open_return(
        self, use_case, mock_order_repository, clock, admin, customer
    ):
        # Arrange
        order = create_paid_order(
            status=OrderStatus.RETURN_REQUESTED,
            return_status=ReturnStatus.REQUESTED,
            return_deadline=FIXED_NOW + timedelta(days=5),
        )
        mock_order_repository.get.return_value = order

        # Act
        result = await use_case.execute("order-1", OrderStatus.DELIVERED, admin)

        # Assert
        assert result.status == OrderStatus.DELIVERED
        assert result.return_status == ReturnStatus.REJECTED
        assert result.payment_status == PaymentStatus.COMPLETED
        with pytest.raises(InvalidTransitionException):
            await RequestReturnUseCase(mock_order_repository, clock).execute("order-1", customer, "Second try")

    @pytest.mark.asyncio
    async def test_returned_requires_received_parcel(self, use_case, mock_order_repository, admin):
        order = create_paid_order(status=OrderStatus.RETURN_REQUESTED, return_status=ReturnStatus.APPROVED)
        mock_order_repository.get.return_value = order

        with pytest.raises(InvalidTransitionException):
            await use_case.execute("order-1", OrderStatus.RETURNED, admin)

        assert order.status == OrderStatus.RETURN_REQUESTED
        assert order.return_status == ReturnStatus.APPROVED
        assert order.payment_status == PaymentStatus.COMPLETED
        mock_order_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_returned_refunds_received_parcel(self, use_case, mock_order_repository, admin):
        mock_order_repository.get.return_value = create_paid_order(
            status=OrderStatus.RETURN_REQUESTED, return_status=ReturnStatus.RECEIVED
        )

        result = await use_case.execute("order-1", OrderStatus.RETURNED, admin)

        assert result.status == OrderStatus.RETURNED
        assert result.return_status == ReturnStatus.REFUNDED
        assert result.payment_status == PaymentStatus.REFUNDED

    @pytest.mark.asyncio
    async def test_customers_cannot_change_status(self, use_case, mock_order_repository, customer):
        with pytest.raises(AuthorizationException):
            await use_case.execute("order-1", OrderStatus.CANCELLED, customer)

        mock_order_repository.get.assert_not_awaited()


@pytest.mark.unit
class TestListOrdersUseCase:
    @pytest.mark.asyncio
    async def test_customer_sees_only_own_orders(self, mock_order_repository, customer):
        mock_order_repository.get_by_user_id.return_value = [
            create_order("order-1"),
            create_paid_order(order_id="order-2"),
        ]

        orders = await ListOrdersUseCase(mock_order_repository).execute(customer, OrderStatus.PROCESSING)

        mock_order_repository.get_by_user_id.assert_awaited_once_with(customer.user_id)
        assert [o.id for o in orders] == ["order-2"]

    @pytest.mark.asyncio
    async def test_admin_filters_by_status(self, mock_order_repository, admin):
        mock_order_repository.get_by_status.return_value = []

        await ListOrdersUseCase(mock_order_repository).execute(admin, OrderStatus.SHIPPED)

        mock_order_repository.get_by_status.assert_awaited_once_with(OrderStatus.SHIPPED)

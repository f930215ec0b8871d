"""
Unit tests for the cart use cases other than add-to-cart.
"""

import pytest

from app.core.domain import EntityNotFoundException, InsufficientStockException
from app.domains.ecommerce.application.use_cases import (
    ClearCartUseCase,
    GetCartUseCase,
    RemoveCartItemUseCase,
    UpdateCartItemUseCase,
)
from tests.utils import create_cart, create_product


@pytest.mark.unit
class TestGetCartUseCase:
    @pytest.mark.asyncio
    async def test_existing_cart_returned(self, mock_cart_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 1)])

        cart = await GetCartUseCase(mock_cart_repository).execute(customer)

        assert cart.id == "cart-1"
        mock_cart_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_access_creates_empty_cart(self, mock_cart_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = None

        cart = await GetCartUseCase(mock_cart_repository).execute(customer)

        assert cart.user_id == customer.user_id
        assert cart.is_empty()
        mock_cart_repository.create.assert_awaited_once()


@pytest.mark.unit
class TestUpdateCartItemUseCase:
    @pytest.fixture
    def use_case(self, mock_cart_repository, mock_product_repository):
        return UpdateCartItemUseCase(mock_cart_repository, mock_product_repository)

    @pytest.mark.asyncio
    async def test_quantity_replaced(self, use_case, mock_cart_repository, mock_product_repository, customer):
        # Arrange
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 1)])
        mock_product_repository.get.return_value = create_product(stock=5)

        # Act
        cart = await use_case.execute(customer, "prod-1", 4)

        # Assert
        assert cart.quantity_of("prod-1") == 4
        mock_cart_repository.update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_zero_removes_line_without_stock_check(
        self, use_case, mock_cart_repository, mock_product_repository, customer
    ):
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 1)])

        cart = await use_case.execute(customer, "prod-1", 0)

        assert cart.is_empty()
        mock_product_repository.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stock_exceeded(self, use_case, mock_cart_repository, mock_product_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 1)])
        mock_product_repository.get.return_value = create_product(stock=2)

        with pytest.raises(InsufficientStockException):
            await use_case.execute(customer, "prod-1", 3)

        mock_cart_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_product_not_in_cart(self, use_case, mock_cart_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = create_cart()

        with pytest.raises(EntityNotFoundException):
            await use_case.execute(customer, "prod-1", 2)


@pytest.mark.unit
class TestRemoveAndClear:
    @pytest.mark.asyncio
    async def test_remove_line(self, mock_cart_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 1), ("prod-2", 3)])

        cart = await RemoveCartItemUseCase(mock_cart_repository).execute(customer, "prod-1")

        assert [item.product_id for item in cart.items] == ["prod-2"]

    @pytest.mark.asyncio
    async def test_remove_missing_line(self, mock_cart_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = create_cart()

        with pytest.raises(EntityNotFoundException):
            await RemoveCartItemUseCase(mock_cart_repository).execute(customer, "prod-1")

    @pytest.mark.asyncio
    async def test_clear_keeps_cart(self, mock_cart_repository, customer):
        mock_cart_repository.get_by_user_id.return_value = create_cart(items=[("prod-1", 1), ("prod-2", 3)])

        cart = await ClearCartUseCase(mock_cart_repository).execute(customer)

        assert cart.is_empty()
        assert cart.id == "cart-1"
        mock_cart_repository.delete.assert_not_awaited()

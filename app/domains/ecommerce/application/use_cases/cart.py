"""
Cart Use Cases

Manage the actor's cart. A cart is created lazily on first access.
"""

import logging

from app.core.domain import EntityNotFoundException, ValidationException
from app.domains.ecommerce.application.ports import ICartRepository, IProductRepository
from app.domains.ecommerce.domain.entities import Cart
from app.domains.ecommerce.domain.value_objects import Actor

logger = logging.getLogger(__name__)


async def load_or_create_cart(cart_repository: ICartRepository, user_id: str) -> Cart:
    cart = await cart_repository.get_by_user_id(user_id)
    if cart is None:
        cart = await cart_repository.create(Cart(user_id=user_id))
    return cart


class GetCartUseCase:
    def __init__(self, cart_repository: ICartRepository):
        self.cart_repository = cart_repository

    async def execute(self, actor: Actor) -> Cart:
        return await load_or_create_cart(self.cart_repository, actor.user_id)


class AddCartItemUseCase:
    """
    Use Case: Add to cart

    Validates that the product exists and that the merged quantity is in stock.
    """

    def __init__(self, cart_repository: ICartRepository, product_repository: IProductRepository):
        self.cart_repository = cart_repository
        self.product_repository = product_repository

    async def execute(self, actor: Actor, product_id: str, quantity: int) -> Cart:
        if quantity <= 0:
            raise ValidationException("Quantity must be positive", field="quantity")

        product = await self.product_repository.get(product_id)
        if product is None:
            raise EntityNotFoundException("Product", product_id)

        cart = await load_or_create_cart(self.cart_repository, actor.user_id)
        product.ensure_available(cart.quantity_of(product_id) + quantity)

        cart.add_item(product_id, quantity)
        cart = await self.cart_repository.update(cart)
        logger.info(f"Added {quantity} x {product_id} to cart of user {actor.user_id}")
        return cart


class UpdateCartItemUseCase:
    def __init__(self, cart_repository: ICartRepository, product_repository: IProductRepository):
        self.cart_repository = cart_repository
        self.product_repository = product_repository

    async def execute(self, actor: Actor, product_id: str, quantity: int) -> Cart:
        cart = await load_or_create_cart(self.cart_repository, actor.user_id)
        if cart.quantity_of(product_id) == 0:
            raise EntityNotFoundException("CartItem", product_id)

        if quantity > 0:
            product = await self.product_repository.get(product_id)
            if product is None:
                raise EntityNotFoundException("Product", product_id)
            product.ensure_available(quantity)

        cart.update_item(product_id, quantity)
        return await self.cart_repository.update(cart)


class RemoveCartItemUseCase:
    def __init__(self, cart_repository: ICartRepository):
        self.cart_repository = cart_repository

    async def execute(self, actor: Actor, product_id: str) -> Cart:
        cart = await load_or_create_cart(self.cart_repository, actor.user_id)
        if not cart.remove_item(product_id):
            raise EntityNotFoundException("CartItem", product_id)
        return await self.cart_repository.update(cart)


class ClearCartUseCase:
    def __init__(self, cart_repository: ICartRepository):
        self.cart_repository = cart_repository

    async def execute(self, actor: Actor) -> Cart:
        cart = await load_or_create_cart(self.cart_repository, actor.user_id)
        cart.clear()
        return await self.cart_repository.update(cart)


__all__ = [
    "load_or_create_cart",
    "GetCartUseCase",
    "AddCartItemUseCase",
    "UpdateCartItemUseCase",
    "RemoveCartItemUseCase",
    "ClearCartUseCase",
]

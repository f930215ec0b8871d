"""
Catalog Use Cases

Public product and category browsing, and admin catalog management.
"""

import logging
from dataclasses import fields
from decimal import Decimal

from app.core.domain import EntityNotFoundException, InvalidOperationException, ValidationException
from app.domains.ecommerce.application.dto import (
    CreateCategoryRequest,
    CreateProductRequest,
    UpdateProductRequest,
)
from app.domains.ecommerce.application.ports import ICategoryRepository, IProductRepository
from app.domains.ecommerce.domain.entities import Category, Product
from app.domains.ecommerce.domain.entities.product import DEFAULT_WARRANTY_MONTHS, DEFAULT_WARRANTY_TYPE
from app.domains.ecommerce.domain.value_objects import Actor

logger = logging.getLogger(__name__)

MAX_SEARCH_RESULTS = 50


async def load_product(product_repository: IProductRepository, product_id: str) -> Product:
    product = await product_repository.get(product_id)
    if product is None:
        raise EntityNotFoundException("Product", product_id)
    return product


async def load_category(category_repository: ICategoryRepository, category_id: str) -> Category:
    category = await category_repository.get(category_id)
    if category is None:
        raise EntityNotFoundException("Category", category_id)
    return category


# ==================== Products ====================


class ListProductsUseCase:
    def __init__(self, product_repository: IProductRepository):
        self.product_repository = product_repository

    async def execute(self, skip: int = 0, limit: int = 100) -> list[Product]:
        return await self.product_repository.get_active(skip=skip, limit=limit)


class GetFeaturedProductsUseCase:
    def __init__(self, product_repository: IProductRepository):
        self.product_repository = product_repository

    async def execute(self) -> list[Product]:
        return await self.product_repository.get_featured()


class GetProductUseCase:
    def __init__(self, product_repository: IProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_id: str) -> Product:
        return await load_product(self.product_repository, product_id)


class GetProductsByCategoryUseCase:
    def __init__(self, product_repository: IProductRepository):
        self.product_repository = product_repository

    async def execute(self, category_id: str) -> list[Product]:
        return await self.product_repository.get_by_category(category_id)


class SearchProductsUseCase:
    """
    Use Case: Search products

    Case-insensitive substring match on name and description, active
    products only.
    """

    def __init__(self, product_repository: IProductRepository):
        self.product_repository = product_repository

    async def execute(self, term: str) -> list[Product]:
        term = (term or "").strip()
        if not term:
            raise ValidationException("A search term is required", field="term")
        products = await self.product_repository.search(term, limit=MAX_SEARCH_RESULTS)
        logger.info(f"Product search '{term}' returned {len(products)} products")
        return products


class CreateProductUseCase:
    def __init__(self, product_repository: IProductRepository, category_repository: ICategoryRepository):
        self.product_repository = product_repository
        self.category_repository = category_repository

    async def execute(self, request: CreateProductRequest, actor: Actor) -> Product:
        actor.ensure_admin("create_product")
        if request.category_id is not None:
            await load_category(self.category_repository, request.category_id)

        product = Product(
            name=request.name.strip(),
            description=request.description,
            price=Decimal(str(request.price)),
            stock=request.stock,
            category_id=request.category_id,
            images=list(request.images),
            specifications=dict(request.specifications),
            is_featured=request.is_featured,
            is_new=request.is_new,
            warranty_months=DEFAULT_WARRANTY_MONTHS if request.warranty_months is None else request.warranty_months,
            warranty_type=request.warranty_type or DEFAULT_WARRANTY_TYPE,
        )
        product = await self.product_repository.create(product)
        logger.info(f"Product {product.id} '{product.name}' created by {actor.user_id}")
        return product


class UpdateProductUseCase:
    """Partial update; invariants are checked by the repository before writing."""

    def __init__(self, product_repository: IProductRepository, category_repository: ICategoryRepository):
        self.product_repository = product_repository
        self.category_repository = category_repository

    async def execute(self, product_id: str, request: UpdateProductRequest, actor: Actor) -> Product:
        actor.ensure_admin("update_product", f"product:{product_id}")
        product = await load_product(self.product_repository, product_id)

        if request.category_id is not None and request.category_id != product.category_id:
            await load_category(self.category_repository, request.category_id)

        for f in fields(request):
            value = getattr(request, f.name)
            if value is None:
                continue
            if f.name == "price":
                value = Decimal(str(value))
            setattr(product, f.name, value)
        product.touch()

        product = await self.product_repository.update(product)
        logger.info(f"Product {product_id} updated by {actor.user_id}")
        return product


class DeleteProductUseCase:
    """
    Orders keep their own item snapshot, so a product can be deleted
    without touching past orders.
    """

    def __init__(self, product_repository: IProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_id: str, actor: Actor) -> None:
        actor.ensure_admin("delete_product", f"product:{product_id}")
        if not await self.product_repository.delete(product_id):
            raise EntityNotFoundException("Product", product_id)
        logger.info(f"Product {product_id} deleted by {actor.user_id}")


# ==================== Categories ====================


class ListCategoriesUseCase:
    def __init__(self, category_repository: ICategoryRepository):
        self.category_repository = category_repository

    async def execute(self) -> list[Category]:
        return await self.category_repository.get_active()


class GetCategoryUseCase:
    def __init__(self, category_repository: ICategoryRepository):
        self.category_repository = category_repository

    async def execute(self, category_id: str) -> Category:
        return await load_category(self.category_repository, category_id)


class GetSubcategoriesUseCase:
    def __init__(self, category_repository: ICategoryRepository):
        self.category_repository = category_repository

    async def execute(self, category_id: str) -> list[Category]:
        return await self.category_repository.get_subcategories(category_id)


class CreateCategoryUseCase:
    def __init__(self, category_repository: ICategoryRepository):
        self.category_repository = category_repository

    async def execute(self, request: CreateCategoryRequest, actor: Actor) -> Category:
        actor.ensure_admin("create_category")
        if request.parent_category_id is not None:
            await load_category(self.category_repository, request.parent_category_id)

        category = Category(
            name=request.name.strip(),
            description=request.description,
            parent_category_id=request.parent_category_id,
            image_url=request.image_url,
        )
        category = await self.category_repository.create(category)
        logger.info(f"Category {category.id} '{category.name}' created by {actor.user_id}")
        return category


class DeleteCategoryUseCase:
    """
    Use Case: Delete category

    Refused while subcategories or products still point at the category.
    """

    def __init__(self, category_repository: ICategoryRepository, product_repository: IProductRepository):
        self.category_repository = category_repository
        self.product_repository = product_repository

    async def execute(self, category_id: str, actor: Actor) -> None:
        actor.ensure_admin("delete_category", f"category:{category_id}")
        await load_category(self.category_repository, category_id)

        children = await self.category_repository.count(parent_category_id=category_id)
        products = await self.product_repository.count(category_id=category_id)
        if children or products:
            raise InvalidOperationException(
                operation="delete_category",
                current_state=f"{children} subcategories/{products} products",
                message="Move or delete the subcategories and products of this category first",
            )

        await self.category_repository.delete(category_id)
        logger.info(f"Category {category_id} deleted by {actor.user_id}")


__all__ = [
    "load_product",
    "load_category",
    "ListProductsUseCase",
    "GetFeaturedProductsUseCase",
    "GetProductUseCase",
    "GetProductsByCategoryUseCase",
    "SearchProductsUseCase",
    "CreateProductUseCase",
    "UpdateProductUseCase",
    "DeleteProductUseCase",
    "ListCategoriesUseCase",
    "GetCategoryUseCase",
    "GetSubcategoriesUseCase",
    "CreateCategoryUseCase",
    "DeleteCategoryUseCase",
]

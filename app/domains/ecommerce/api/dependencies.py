"""
E-commerce API Dependencies

FastAPI dependencies for the e-commerce domain: bearer-token actor
resolution, gateway singletons and per-request use case wiring. Every use
case of one request shares the request's AsyncSession, so its writes are
committed (or rolled back) together.
"""

import logging
from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import get_settings
from app.database.async_db import get_async_db
from app.domains.ecommerce.application.ports import (
    ICarrierService,
    IEmailSender,
    ILabelRenderer,
    IPaymentGateway,
)
from app.domains.ecommerce.application.services import ShipmentNotifier
from app.domains.ecommerce.application.use_cases import (
    AddCartItemUseCase,
    AddTicketMessageUseCase,
    AssignTicketUseCase,
    ClearCartUseCase,
    ConfirmPaymentUseCase,
    CreateCategoryUseCase,
    CreateOrderUseCase,
    CreatePackageUseCase,
    CreatePaymentIntentUseCase,
    CreateProductUseCase,
    CreateTicketUseCase,
    DeleteCategoryUseCase,
    DeletePackageUseCase,
    DeleteProductUseCase,
    GenerateLabelUseCase,
    GetCartUseCase,
    GetCategoryUseCase,
    GetFeaturedProductsUseCase,
    GetOrderTrackingUseCase,
    GetOrderUseCase,
    GetPackageByOrderUseCase,
    GetPackageUseCase,
    GetProductsByCategoryUseCase,
    GetProductUseCase,
    GetReturnInfoUseCase,
    GetSubcategoriesUseCase,
    GetTicketUseCase,
    GetWarrantyClaimUseCase,
    ListCategoriesUseCase,
    ListDelayedOrdersUseCase,
    ListMyTicketsUseCase,
    ListMyWarrantyClaimsUseCase,
    ListOrdersUseCase,
    ListPackagesUseCase,
    ListProductsUseCase,
    ListReturnsUseCase,
    ListShippingMethodsUseCase,
    ListTicketsUseCase,
    ListWarrantyClaimsUseCase,
    MarkPackageDeliveredUseCase,
    MarkPackagePreparingUseCase,
    MarkPackageReadyUseCase,
    RecoverPackageUseCase,
    RemoveCartItemUseCase,
    RenderLabelPdfUseCase,
    ReportPackageExceptionUseCase,
    RequestReturnUseCase,
    SearchProductsUseCase,
    SubmitWarrantyClaimUseCase,
    UpdateCartItemUseCase,
    UpdateOrderStatusUseCase,
    UpdatePackageUseCase,
    UpdateProductUseCase,
    UpdateReturnStatusUseCase,
    UpdateShippingInfoUseCase,
    UpdateTicketStatusUseCase,
    UpdateWarrantyClaimUseCase,
)
from app.domains.ecommerce.domain.value_objects import Actor
from app.domains.ecommerce.infrastructure.repositories import (
    SQLAlchemyCartRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyOrderRepository,
    SQLAlchemyPackageRepository,
    SQLAlchemyProductRepository,
    SQLAlchemyShippingMethodRepository,
    SQLAlchemySupportTicketRepository,
    SQLAlchemyWarrantyClaimRepository,
)
from app.domains.ecommerce.infrastructure.services import CarrierGateway, StripePaymentGateway
from app.services.notifications import SmtpEmailSender
from app.services.shipping_label import ShippingLabelGenerator

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# AUTH
# ============================================================


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _roles(payload: dict) -> set[str]:
    roles = payload.get("role", payload.get("roles", []))
    if isinstance(roles, str):
        return {roles}
    return set(roles or [])


def actor_from_token(token: str) -> Actor:
    """
    Decode a bearer token into an Actor.

    Tokens are issued by the identity service; `sub` is the user id and the
    `role`/`roles` claim grants admin when it contains JWT_ADMIN_ROLE.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise _unauthorized("Invalid or expired token") from e

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Token has no subject")

    return Actor(
        user_id=str(user_id),
        is_admin=settings.JWT_ADMIN_ROLE in _roles(payload),
        email=payload.get("email"),
        display_name=payload.get("name"),
    )


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> Actor:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return actor_from_token(credentials.credentials)


# ============================================================
# GATEWAYS (process-wide)
# ============================================================


@lru_cache(maxsize=1)
def get_payment_gateway() -> IPaymentGateway:
    return StripePaymentGateway()


@lru_cache(maxsize=1)
def get_carrier_service() -> ICarrierService:
    return CarrierGateway(label_base_url=get_settings().LABEL_BASE_URL)


@lru_cache(maxsize=1)
def get_email_sender() -> IEmailSender:
    return SmtpEmailSender()


@lru_cache(maxsize=1)
def get_label_renderer() -> ILabelRenderer:
    return ShippingLabelGenerator(sender_address=get_settings().warehouse_address)


def get_return_window() -> timedelta:
    return timedelta(days=get_settings().RETURN_WINDOW_DAYS)


# ============================================================
# CATALOG
# ============================================================


def get_list_products_use_case(db: AsyncSession = Depends(get_async_db)) -> ListProductsUseCase:  # noqa: B008
    return ListProductsUseCase(SQLAlchemyProductRepository(db))


def get_featured_products_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> GetFeaturedProductsUseCase:
    return GetFeaturedProductsUseCase(SQLAlchemyProductRepository(db))


def get_product_use_case(db: AsyncSession = Depends(get_async_db)) -> GetProductUseCase:  # noqa: B008
    return GetProductUseCase(SQLAlchemyProductRepository(db))


def get_products_by_category_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> GetProductsByCategoryUseCase:
    return GetProductsByCategoryUseCase(SQLAlchemyProductRepository(db))


def get_search_products_use_case(db: AsyncSession = Depends(get_async_db)) -> SearchProductsUseCase:  # noqa: B008
    return SearchProductsUseCase(SQLAlchemyProductRepository(db))


def get_create_product_use_case(db: AsyncSession = Depends(get_async_db)) -> CreateProductUseCase:  # noqa: B008
    return CreateProductUseCase(SQLAlchemyProductRepository(db), SQLAlchemyCategoryRepository(db))


def get_update_product_use_case(db: AsyncSession = Depends(get_async_db)) -> UpdateProductUseCase:  # noqa: B008
    return UpdateProductUseCase(SQLAlchemyProductRepository(db), SQLAlchemyCategoryRepository(db))


def get_delete_product_use_case(db: AsyncSession = Depends(get_async_db)) -> DeleteProductUseCase:  # noqa: B008
    return DeleteProductUseCase(SQLAlchemyProductRepository(db))


def get_list_categories_use_case(db: AsyncSession = Depends(get_async_db)) -> ListCategoriesUseCase:  # noqa: B008
    return ListCategoriesUseCase(SQLAlchemyCategoryRepository(db))


def get_category_use_case(db: AsyncSession = Depends(get_async_db)) -> GetCategoryUseCase:  # noqa: B008
    return GetCategoryUseCase(SQLAlchemyCategoryRepository(db))


def get_subcategories_use_case(db: AsyncSession = Depends(get_async_db)) -> GetSubcategoriesUseCase:  # noqa: B008
    return GetSubcategoriesUseCase(SQLAlchemyCategoryRepository(db))


def get_create_category_use_case(db: AsyncSession = Depends(get_async_db)) -> CreateCategoryUseCase:  # noqa: B008
    return CreateCategoryUseCase(SQLAlchemyCategoryRepository(db))


def get_delete_category_use_case(db: AsyncSession = Depends(get_async_db)) -> DeleteCategoryUseCase:  # noqa: B008
    return DeleteCategoryUseCase(SQLAlchemyCategoryRepository(db), SQLAlchemyProductRepository(db))


# ============================================================
# CART
# ============================================================


def get_cart_use_case(db: AsyncSession = Depends(get_async_db)) -> GetCartUseCase:  # noqa: B008
    return GetCartUseCase(SQLAlchemyCartRepository(db))


def get_add_cart_item_use_case(db: AsyncSession = Depends(get_async_db)) -> AddCartItemUseCase:  # noqa: B008
    return AddCartItemUseCase(SQLAlchemyCartRepository(db), SQLAlchemyProductRepository(db))


def get_update_cart_item_use_case(db: AsyncSession = Depends(get_async_db)) -> UpdateCartItemUseCase:  # noqa: B008
    return UpdateCartItemUseCase(SQLAlchemyCartRepository(db), SQLAlchemyProductRepository(db))


def get_remove_cart_item_use_case(db: AsyncSession = Depends(get_async_db)) -> RemoveCartItemUseCase:  # noqa: B008
    return RemoveCartItemUseCase(SQLAlchemyCartRepository(db))


def get_clear_cart_use_case(db: AsyncSession = Depends(get_async_db)) -> ClearCartUseCase:  # noqa: B008
    return ClearCartUseCase(SQLAlchemyCartRepository(db))


# ============================================================
# ORDERS & PAYMENTS
# ============================================================


def get_create_order_use_case(db: AsyncSession = Depends(get_async_db)) -> CreateOrderUseCase:  # noqa: B008
    return CreateOrderUseCase(
        SQLAlchemyOrderRepository(db),
        SQLAlchemyCartRepository(db),
        SQLAlchemyProductRepository(db),
        currency=get_settings().STRIPE_CURRENCY.upper(),
    )


def get_order_use_case(db: AsyncSession = Depends(get_async_db)) -> GetOrderUseCase:  # noqa: B008
    return GetOrderUseCase(SQLAlchemyOrderRepository(db))


def get_list_orders_use_case(db: AsyncSession = Depends(get_async_db)) -> ListOrdersUseCase:  # noqa: B008
    return ListOrdersUseCase(SQLAlchemyOrderRepository(db))


def get_update_order_status_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> UpdateOrderStatusUseCase:
    return UpdateOrderStatusUseCase(
        SQLAlchemyOrderRepository(db),
        SQLAlchemyProductRepository(db),
        return_window=get_return_window(),
    )


def get_create_payment_intent_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    gateway: IPaymentGateway = Depends(get_payment_gateway),  # noqa: B008
) -> CreatePaymentIntentUseCase:
    return CreatePaymentIntentUseCase(SQLAlchemyOrderRepository(db), gateway)


def get_confirm_payment_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    gateway: IPaymentGateway = Depends(get_payment_gateway),  # noqa: B008
) -> ConfirmPaymentUseCase:
    return ConfirmPaymentUseCase(SQLAlchemyOrderRepository(db), gateway)


# ============================================================
# PACKAGES
# ============================================================


def get_create_package_use_case(db: AsyncSession = Depends(get_async_db)) -> CreatePackageUseCase:  # noqa: B008
    return CreatePackageUseCase(SQLAlchemyPackageRepository(db), SQLAlchemyOrderRepository(db))


def get_package_use_case(db: AsyncSession = Depends(get_async_db)) -> GetPackageUseCase:  # noqa: B008
    return GetPackageUseCase(SQLAlchemyPackageRepository(db))


def get_package_by_order_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> GetPackageByOrderUseCase:
    return GetPackageByOrderUseCase(SQLAlchemyPackageRepository(db), SQLAlchemyOrderRepository(db))


def get_list_packages_use_case(db: AsyncSession = Depends(get_async_db)) -> ListPackagesUseCase:  # noqa: B008
    return ListPackagesUseCase(SQLAlchemyPackageRepository(db))


def get_update_package_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    carrier_service: ICarrierService = Depends(get_carrier_service),  # noqa: B008
) -> UpdatePackageUseCase:
    return UpdatePackageUseCase(SQLAlchemyPackageRepository(db), carrier_service)


def get_mark_preparing_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> MarkPackagePreparingUseCase:
    return MarkPackagePreparingUseCase(SQLAlchemyPackageRepository(db))


def get_mark_ready_use_case(db: AsyncSession = Depends(get_async_db)) -> MarkPackageReadyUseCase:  # noqa: B008
    return MarkPackageReadyUseCase(SQLAlchemyPackageRepository(db))


def get_generate_label_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    carrier_service: ICarrierService = Depends(get_carrier_service),  # noqa: B008
    email_sender: IEmailSender = Depends(get_email_sender),  # noqa: B008
) -> GenerateLabelUseCase:
    return GenerateLabelUseCase(
        SQLAlchemyPackageRepository(db),
        SQLAlchemyOrderRepository(db),
        carrier_service,
        ShipmentNotifier(email_sender, carrier_service),
        sender_address=get_settings().warehouse_address,
    )


def get_mark_delivered_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> MarkPackageDeliveredUseCase:
    return MarkPackageDeliveredUseCase(
        SQLAlchemyPackageRepository(db),
        SQLAlchemyOrderRepository(db),
        return_window=get_return_window(),
    )


def get_report_exception_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> ReportPackageExceptionUseCase:
    return ReportPackageExceptionUseCase(SQLAlchemyPackageRepository(db))


def get_recover_package_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    carrier_service: ICarrierService = Depends(get_carrier_service),  # noqa: B008
) -> RecoverPackageUseCase:
    return RecoverPackageUseCase(SQLAlchemyPackageRepository(db), carrier_service)


def get_delete_package_use_case(db: AsyncSession = Depends(get_async_db)) -> DeletePackageUseCase:  # noqa: B008
    return DeletePackageUseCase(SQLAlchemyPackageRepository(db))


def get_render_label_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    renderer: ILabelRenderer = Depends(get_label_renderer),  # noqa: B008
) -> RenderLabelPdfUseCase:
    return RenderLabelPdfUseCase(SQLAlchemyPackageRepository(db), SQLAlchemyOrderRepository(db), renderer)


# ============================================================
# SHIPPING
# ============================================================


def get_order_tracking_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    carrier_service: ICarrierService = Depends(get_carrier_service),  # noqa: B008
) -> GetOrderTrackingUseCase:
    return GetOrderTrackingUseCase(SQLAlchemyOrderRepository(db), SQLAlchemyPackageRepository(db), carrier_service)


def get_update_shipping_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> UpdateShippingInfoUseCase:
    return UpdateShippingInfoUseCase(
        SQLAlchemyOrderRepository(db),
        default_delivery_days=get_settings().ESTIMATED_DELIVERY_DAYS,
    )


def get_delayed_orders_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> ListDelayedOrdersUseCase:
    return ListDelayedOrdersUseCase(SQLAlchemyOrderRepository(db))


def get_list_shipping_methods_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    carrier_service: ICarrierService = Depends(get_carrier_service),  # noqa: B008
) -> ListShippingMethodsUseCase:
    return ListShippingMethodsUseCase(SQLAlchemyShippingMethodRepository(db), carrier_service)


# ============================================================
# RETURNS
# ============================================================


def get_request_return_use_case(db: AsyncSession = Depends(get_async_db)) -> RequestReturnUseCase:  # noqa: B008
    return RequestReturnUseCase(SQLAlchemyOrderRepository(db))


def get_return_info_use_case(db: AsyncSession = Depends(get_async_db)) -> GetReturnInfoUseCase:  # noqa: B008
    return GetReturnInfoUseCase(SQLAlchemyOrderRepository(db))


def get_update_return_status_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> UpdateReturnStatusUseCase:
    return UpdateReturnStatusUseCase(SQLAlchemyOrderRepository(db), SQLAlchemyPackageRepository(db))


def get_list_returns_use_case(db: AsyncSession = Depends(get_async_db)) -> ListReturnsUseCase:  # noqa: B008
    return ListReturnsUseCase(SQLAlchemyOrderRepository(db))


# ============================================================
# SUPPORT
# ============================================================


def get_create_ticket_use_case(db: AsyncSession = Depends(get_async_db)) -> CreateTicketUseCase:  # noqa: B008
    return CreateTicketUseCase(SQLAlchemySupportTicketRepository(db), SQLAlchemyOrderRepository(db))


def get_ticket_use_case(db: AsyncSession = Depends(get_async_db)) -> GetTicketUseCase:  # noqa: B008
    return GetTicketUseCase(SQLAlchemySupportTicketRepository(db))


def get_my_tickets_use_case(db: AsyncSession = Depends(get_async_db)) -> ListMyTicketsUseCase:  # noqa: B008
    return ListMyTicketsUseCase(SQLAlchemySupportTicketRepository(db))


def get_list_tickets_use_case(db: AsyncSession = Depends(get_async_db)) -> ListTicketsUseCase:  # noqa: B008
    return ListTicketsUseCase(SQLAlchemySupportTicketRepository(db))


def get_add_message_use_case(db: AsyncSession = Depends(get_async_db)) -> AddTicketMessageUseCase:  # noqa: B008
    return AddTicketMessageUseCase(SQLAlchemySupportTicketRepository(db))


def get_assign_ticket_use_case(db: AsyncSession = Depends(get_async_db)) -> AssignTicketUseCase:  # noqa: B008
    return AssignTicketUseCase(SQLAlchemySupportTicketRepository(db))


def get_update_ticket_status_use_case(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> UpdateTicketStatusUseCase:
    return UpdateTicketStatusUseCase(SQLAlchemySupportTicketRepository(db))


# ============================================================
# WARRANTY
# ============================================================


def get_submit_claim_use_case(db: AsyncSession = Depends(get_async_db)) -> SubmitWarrantyClaimUseCase:  # noqa: B008
    return SubmitWarrantyClaimUseCase(
        SQLAlchemyWarrantyClaimRepository(db),
        SQLAlchemyOrderRepository(db),
        SQLAlchemyProductRepository(db),
    )


def get_my_claims_use_case(db: AsyncSession = Depends(get_async_db)) -> ListMyWarrantyClaimsUseCase:  # noqa: B008
    return ListMyWarrantyClaimsUseCase(SQLAlchemyWarrantyClaimRepository(db))


def get_claim_use_case(db: AsyncSession = Depends(get_async_db)) -> GetWarrantyClaimUseCase:  # noqa: B008
    return GetWarrantyClaimUseCase(SQLAlchemyWarrantyClaimRepository(db))


def get_update_claim_use_case(db: AsyncSession = Depends(get_async_db)) -> UpdateWarrantyClaimUseCase:  # noqa: B008
    return UpdateWarrantyClaimUseCase(SQLAlchemyWarrantyClaimRepository(db))


def get_list_claims_use_case(db: AsyncSession = Depends(get_async_db)) -> ListWarrantyClaimsUseCase:  # noqa: B008
    return ListWarrantyClaimsUseCase(SQLAlchemyWarrantyClaimRepository(db))

"""
E-commerce API Routes

FastAPI routers for the storefront endpoints. Handlers only translate HTTP
payloads to use case calls; authorization and business rules live in the
use cases and surface through the domain exception handlers.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.domain import StatusEnum, ValidationException
from app.domains.ecommerce.api.dependencies import (
    get_add_cart_item_use_case,
    get_add_message_use_case,
    get_assign_ticket_use_case,
    get_cart_use_case,
    get_category_use_case,
    get_claim_use_case,
    get_clear_cart_use_case,
    get_confirm_payment_use_case,
    get_create_category_use_case,
    get_create_order_use_case,
    get_create_package_use_case,
    get_create_payment_intent_use_case,
    get_create_product_use_case,
    get_create_ticket_use_case,
    get_current_actor,
    get_delayed_orders_use_case,
    get_delete_category_use_case,
    get_delete_package_use_case,
    get_delete_product_use_case,
    get_featured_products_use_case,
    get_generate_label_use_case,
    get_list_categories_use_case,
    get_list_claims_use_case,
    get_list_orders_use_case,
    get_list_packages_use_case,
    get_list_products_use_case,
    get_list_returns_use_case,
    get_list_shipping_methods_use_case,
    get_list_tickets_use_case,
    get_mark_delivered_use_case,
    get_mark_preparing_use_case,
    get_mark_ready_use_case,
    get_my_claims_use_case,
    get_my_tickets_use_case,
    get_order_tracking_use_case,
    get_order_use_case,
    get_package_by_order_use_case,
    get_package_use_case,
    get_product_use_case,
    get_products_by_category_use_case,
    get_recover_package_use_case,
    get_remove_cart_item_use_case,
    get_render_label_use_case,
    get_report_exception_use_case,
    get_request_return_use_case,
    get_return_info_use_case,
    get_search_products_use_case,
    get_submit_claim_use_case,
    get_subcategories_use_case,
    get_ticket_use_case,
    get_update_cart_item_use_case,
    get_update_claim_use_case,
    get_update_order_status_use_case,
    get_update_package_use_case,
    get_update_product_use_case,
    get_update_return_status_use_case,
    get_update_shipping_use_case,
    get_update_ticket_status_use_case,
)
from app.domains.ecommerce.api.schemas import (
    AddCartItemRequest,
    AddTicketMessageBody,
    AssignTicketBody,
    CartResponse,
    CategoryResponse,
    ConfirmPaymentBody,
    ConfirmPaymentResponse,
    CreateCategoryBody,
    CreateOrderBody,
    CreatePackageBody,
    CreateProductBody,
    CreateTicketBody,
    OrderResponse,
    OrderTrackingResponse,
    PackageResponse,
    PaymentIntentResponse,
    ProductResponse,
    ReportExceptionBody,
    RequestReturnBody,
    ReturnInfoResponse,
    ShippingMethodResponse,
    SubmitWarrantyClaimBody,
    TicketResponse,
    UpdateCartItemRequest,
    UpdateOrderStatusBody,
    UpdatePackageBody,
    UpdateProductBody,
    UpdateReturnStatusBody,
    UpdateShippingBody,
    UpdateTicketStatusBody,
    UpdateWarrantyClaimBody,
    WarrantyClaimResponse,
)
from app.domains.ecommerce.application.dto import (
    CreateCategoryRequest,
    CreateOrderRequest,
    CreatePackageRequest,
    CreateProductRequest,
    CreateTicketRequest,
    SubmitWarrantyClaimRequest,
    UpdatePackageRequest,
    UpdateProductRequest,
    UpdateShippingRequest,
)
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
from app.domains.ecommerce.domain.value_objects import (
    Actor,
    OrderStatus,
    PackageStatus,
    TicketStatus,
    WarrantyClaimStatus,
)


def parse_status_filter(enum_type: type[StatusEnum], value: str | None) -> StatusEnum | None:
    """Query-string status filters accept the integer value or the member name."""
    if value is None or value == "":
        return None
    try:
        return enum_type.from_string(value)
    except ValueError as e:
        raise ValidationException(str(e), field="status") from e


# ============================================================
# CATALOG
# ============================================================

products_router = APIRouter(prefix="/products", tags=["Products"])


@products_router.get("", response_model=list[ProductResponse])
async def list_products(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
):
    return [ProductResponse.model_validate(p) for p in await use_case.execute(skip=skip, limit=limit)]


@products_router.get("/featured", response_model=list[ProductResponse])
async def list_featured_products(
    use_case: GetFeaturedProductsUseCase = Depends(get_featured_products_use_case),
):
    return [ProductResponse.model_validate(p) for p in await use_case.execute()]


@products_router.get("/search", response_model=list[ProductResponse])
async def search_products(
    term: str = Query(..., min_length=1),
    use_case: SearchProductsUseCase = Depends(get_search_products_use_case),
):
    return [ProductResponse.model_validate(p) for p in await use_case.execute(term)]


@products_router.get("/category/{category_id}", response_model=list[ProductResponse])
async def list_products_by_category(
    category_id: str,
    use_case: GetProductsByCategoryUseCase = Depends(get_products_by_category_use_case),
):
    return [ProductResponse.model_validate(p) for p in await use_case.execute(category_id)]


@products_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    use_case: GetProductUseCase = Depends(get_product_use_case),
):
    return ProductResponse.model_validate(await use_case.execute(product_id))


@products_router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: CreateProductBody,
    actor: Actor = Depends(get_current_actor),
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
):
    product = await use_case.execute(CreateProductRequest(**body.model_dump()), actor)
    return ProductResponse.model_validate(product)


@products_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductBody,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
):
    request = UpdateProductRequest(**body.model_dump(exclude_unset=True))
    return ProductResponse.model_validate(await use_case.execute(product_id, request, actor))


@products_router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
):
    await use_case.execute(product_id, actor)


categories_router = APIRouter(prefix="/categories", tags=["Categories"])


@categories_router.get("", response_model=list[CategoryResponse])
async def list_categories(
    use_case: ListCategoriesUseCase = Depends(get_list_categories_use_case),
):
    return [CategoryResponse.model_validate(c) for c in await use_case.execute()]


@categories_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: str,
    use_case: GetCategoryUseCase = Depends(get_category_use_case),
):
    return CategoryResponse.model_validate(await use_case.execute(category_id))


@categories_router.get("/{category_id}/subcategories", response_model=list[CategoryResponse])
async def list_subcategories(
    category_id: str,
    use_case: GetSubcategoriesUseCase = Depends(get_subcategories_use_case),
):
    return [CategoryResponse.model_validate(c) for c in await use_case.execute(category_id)]


@categories_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CreateCategoryBody,
    actor: Actor = Depends(get_current_actor),
    use_case: CreateCategoryUseCase = Depends(get_create_category_use_case),
):
    category = await use_case.execute(CreateCategoryRequest(**body.model_dump()), actor)
    return CategoryResponse.model_validate(category)


@categories_router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: DeleteCategoryUseCase = Depends(get_delete_category_use_case),
):
    await use_case.execute(category_id, actor)


# ============================================================
# CART
# ============================================================

cart_router = APIRouter(prefix="/cart", tags=["Cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(
    actor: Actor = Depends(get_current_actor),
    use_case: GetCartUseCase = Depends(get_cart_use_case),
):
    """Current user's cart (created empty on first access)."""
    return CartResponse.model_validate(await use_case.execute(actor))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(
    body: AddCartItemRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: AddCartItemUseCase = Depends(get_add_cart_item_use_case),
):
    cart = await use_case.execute(actor, body.product_id, body.quantity)
    return CartResponse.model_validate(cart)


@cart_router.put("/items", response_model=CartResponse)
async def update_cart_item(
    body: UpdateCartItemRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdateCartItemUseCase = Depends(get_update_cart_item_use_case),
):
    cart = await use_case.execute(actor, body.product_id, body.quantity)
    return CartResponse.model_validate(cart)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(
    product_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: RemoveCartItemUseCase = Depends(get_remove_cart_item_use_case),
):
    return CartResponse.model_validate(await use_case.execute(actor, product_id))


@cart_router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(
    actor: Actor = Depends(get_current_actor),
    use_case: ClearCartUseCase = Depends(get_clear_cart_use_case),
):
    await use_case.execute(actor)


# ============================================================
# ORDERS
# ============================================================

orders_router = APIRouter(prefix="/orders", tags=["Orders"])


@orders_router.get("", response_model=list[OrderResponse])
async def list_orders(
    status_filter: str | None = Query(None, alias="status"),
    actor: Actor = Depends(get_current_actor),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
):
    """Own orders for customers; every order (optionally by status) for admins."""
    orders = await use_case.execute(actor, parse_status_filter(OrderStatus, status_filter))
    return [OrderResponse.model_validate(order) for order in orders]


@orders_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: GetOrderUseCase = Depends(get_order_use_case),
):
    return OrderResponse.model_validate(await use_case.execute(order_id, actor))


@orders_router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    body: CreateOrderBody,
    actor: Actor = Depends(get_current_actor),
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
):
    """Checkout: snapshot the cart into a new order."""
    request = CreateOrderRequest(
        shipping_address=body.shipping_address.to_domain(),
        contact_email=body.contact_email or actor.email,
    )
    return OrderResponse.model_validate(await use_case.execute(actor, request))


@orders_router.post("/{order_id}/payment", response_model=PaymentIntentResponse)
async def create_payment_intent(
    order_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: CreatePaymentIntentUseCase = Depends(get_create_payment_intent_use_case),
):
    return PaymentIntentResponse(**await use_case.execute(order_id, actor))


@orders_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusBody,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdateOrderStatusUseCase = Depends(get_update_order_status_use_case),
):
    return OrderResponse.model_validate(await use_case.execute(order_id, body.status, actor))


payments_router = APIRouter(prefix="/payments", tags=["Payments"])


@payments_router.post("/confirm", response_model=ConfirmPaymentResponse)
async def confirm_payment(
    body: ConfirmPaymentBody,
    actor: Actor = Depends(get_current_actor),
    use_case: ConfirmPaymentUseCase = Depends(get_confirm_payment_use_case),
):
    """Re-check a payment intent with the provider; safe to call repeatedly."""
    return ConfirmPaymentResponse(confirmed=await use_case.execute(body.payment_intent_id))


# ============================================================
# PACKAGES
# ============================================================

packages_router = APIRouter(prefix="/packages", tags=["Packages"])


@packages_router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
async def create_package(
    body: CreatePackageBody,
    actor: Actor = Depends(get_current_actor),
    use_case: CreatePackageUseCase = Depends(get_create_package_use_case),
):
    request = CreatePackageRequest(**body.model_dump())
    return PackageResponse.model_validate(await use_case.execute(request, actor))


@packages_router.get("", response_model=list[PackageResponse])
async def list_packages(
    status_filter: str | None = Query(None, alias="status"),
    actor: Actor = Depends(get_current_actor),
    use_case: ListPackagesUseCase = Depends(get_list_packages_use_case),
):
    packages = await use_case.execute(actor, parse_status_filter(PackageStatus, status_filter))
    return [PackageResponse.model_validate(package) for package in packages]


@packages_router.get("/order/{order_id}", response_model=PackageResponse)
async def get_package_by_order(
    order_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: GetPackageByOrderUseCase = Depends(get_package_by_order_use_case),
):
    return PackageResponse.model_validate(await use_case.execute(order_id, actor))


@packages_router.get("/{package_id}", response_model=PackageResponse)
async def get_package(
    package_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: GetPackageUseCase = Depends(get_package_use_case),
):
    return PackageResponse.model_validate(await use_case.execute(package_id, actor))


@packages_router.put("/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: str,
    body: UpdatePackageBody,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdatePackageUseCase = Depends(get_update_package_use_case),
):
    request = UpdatePackageRequest(**body.model_dump())
    return PackageResponse.model_validate(await use_case.execute(package_id, request, actor))


@packages_router.post("/{package_id}/prepare", response_model=PackageResponse)
async def mark_as_preparing(
    package_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: MarkPackagePreparingUseCase = Depends(get_mark_preparing_use_case),
):
    return PackageResponse.model_validate(await use_case.execute(package_id, actor))


@packages_router.post("/{package_id}/ready", response_model=PackageResponse)
async def mark_ready_to_ship(
    package_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: MarkPackageReadyUseCase = Depends(get_mark_ready_use_case),
):
    return PackageResponse.model_validate(await use_case.execute(package_id, actor))


@packages_router.post("/{package_id}/generate-label", response_model=PackageResponse)
async def generate_label(
    package_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: GenerateLabelUseCase = Depends(get_generate_label_use_case),
):
    """Buy a carrier label; the package and its order become SHIPPED."""
    return PackageResponse.model_validate(await use_case.execute(package_id, actor))


@packages_router.post("/{package_id}/deliver", response_model=PackageResponse)
async def mark_delivered(
    package_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: MarkPackageDeliveredUseCase = Depends(get_mark_delivered_use_case),
):
    return PackageResponse.model_validate(await use_case.execute(package_id, actor))


@packages_router.post("/{package_id}/exception", response_model=PackageResponse)
async def report_exception(
    package_id: str,
    body: ReportExceptionBody,
    actor: Actor = Depends(get_current_actor),
    use_case: ReportPackageExceptionUseCase = Depends(get_report_exception_use_case),
):
    return PackageResponse.model_validate(await use_case.execute(package_id, actor, body.note))


@packages_router.post("/{package_id}/recover", response_model=PackageResponse)
async def recover_package(
    package_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: RecoverPackageUseCase = Depends(get_recover_package_use_case),
):
    return PackageResponse.model_validate(await use_case.execute(package_id, actor))


@packages_router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(
    package_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: DeletePackageUseCase = Depends(get_delete_package_use_case),
):
    await use_case.execute(package_id, actor)


@packages_router.get("/{package_id}/label")
async def download_label(
    package_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: RenderLabelPdfUseCase = Depends(get_render_label_use_case),
):
    pdf = await use_case.execute(package_id, actor)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="label-{package_id}.pdf"'},
    )


# ============================================================
# SHIPPING
# ============================================================

shipping_router = APIRouter(prefix="/shipping", tags=["Shipping"])


@shipping_router.get("/tracking/{order_id}", response_model=OrderTrackingResponse)
async def get_tracking(
    order_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: GetOrderTrackingUseCase = Depends(get_order_tracking_use_case),
):
    return OrderTrackingResponse.model_validate(await use_case.execute(order_id, actor))


@shipping_router.put("/orders/{order_id}/shipping", response_model=OrderResponse)
async def update_shipping(
    order_id: str,
    body: UpdateShippingBody,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdateShippingInfoUseCase = Depends(get_update_shipping_use_case),
):
    request = UpdateShippingRequest(**body.model_dump())
    return OrderResponse.model_validate(await use_case.execute(order_id, request, actor))


@shipping_router.get("/delayed-orders", response_model=list[OrderResponse])
async def list_delayed_orders(
    actor: Actor = Depends(get_current_actor),
    use_case: ListDelayedOrdersUseCase = Depends(get_delayed_orders_use_case),
):
    return [OrderResponse.model_validate(order) for order in await use_case.execute(actor)]


@shipping_router.get("/methods", response_model=list[ShippingMethodResponse])
async def list_shipping_methods(
    weight: Decimal | None = Query(None),
    use_case: ListShippingMethodsUseCase = Depends(get_list_shipping_methods_use_case),
):
    """Active shipping methods, priced for the parcel weight when one is given."""
    return [ShippingMethodResponse.model_validate(q) for q in await use_case.execute(weight)]


# ============================================================
# RETURNS
# ============================================================

returns_router = APIRouter(prefix="/returns", tags=["Returns"])


@returns_router.post("/orders/{order_id}/request", response_model=OrderResponse)
async def request_return(
    order_id: str,
    body: RequestReturnBody,
    actor: Actor = Depends(get_current_actor),
    use_case: RequestReturnUseCase = Depends(get_request_return_use_case),
):
    return OrderResponse.model_validate(await use_case.execute(order_id, actor, body.reason))


@returns_router.get("/orders/{order_id}", response_model=ReturnInfoResponse)
async def get_return_info(
    order_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: GetReturnInfoUseCase = Depends(get_return_info_use_case),
):
    return ReturnInfoResponse.model_validate(await use_case.execute(order_id, actor))


@returns_router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def update_return_status(
    order_id: str,
    body: UpdateReturnStatusBody,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdateReturnStatusUseCase = Depends(get_update_return_status_use_case),
):
    return OrderResponse.model_validate(await use_case.execute(order_id, body.status, actor))


@returns_router.get("", response_model=list[OrderResponse])
async def list_returns(
    actor: Actor = Depends(get_current_actor),
    use_case: ListReturnsUseCase = Depends(get_list_returns_use_case),
):
    return [OrderResponse.model_validate(order) for order in await use_case.execute(actor)]


# ============================================================
# SUPPORT
# ============================================================

support_router = APIRouter(prefix="/support", tags=["Support"])


@support_router.post("/tickets", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    body: CreateTicketBody,
    actor: Actor = Depends(get_current_actor),
    use_case: CreateTicketUseCase = Depends(get_create_ticket_use_case),
):
    request = CreateTicketRequest(**body.model_dump())
    return TicketResponse.model_validate(await use_case.execute(request, actor))


@support_router.get("/tickets", response_model=list[TicketResponse])
async def list_my_tickets(
    actor: Actor = Depends(get_current_actor),
    use_case: ListMyTicketsUseCase = Depends(get_my_tickets_use_case),
):
    return [TicketResponse.model_validate(ticket) for ticket in await use_case.execute(actor)]


@support_router.get("/tickets/admin/all", response_model=list[TicketResponse])
async def list_all_tickets(
    status_filter: str | None = Query(None, alias="status"),
    actor: Actor = Depends(get_current_actor),
    use_case: ListTicketsUseCase = Depends(get_list_tickets_use_case),
):
    tickets = await use_case.execute(actor, parse_status_filter(TicketStatus, status_filter))
    return [TicketResponse.model_validate(ticket) for ticket in tickets]


@support_router.get("/tickets/{ticket_id}", response_model=TicketResponse)
async def get_ticket(
    ticket_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: GetTicketUseCase = Depends(get_ticket_use_case),
):
    return TicketResponse.model_validate(await use_case.execute(ticket_id, actor))


@support_router.post("/tickets/{ticket_id}/messages", response_model=TicketResponse)
async def add_ticket_message(
    ticket_id: str,
    body: AddTicketMessageBody,
    actor: Actor = Depends(get_current_actor),
    use_case: AddTicketMessageUseCase = Depends(get_add_message_use_case),
):
    ticket = await use_case.execute(ticket_id, actor, body.message, body.attachments)
    return TicketResponse.model_validate(ticket)


@support_router.put("/tickets/{ticket_id}/assign", response_model=TicketResponse)
async def assign_ticket(
    ticket_id: str,
    body: AssignTicketBody,
    actor: Actor = Depends(get_current_actor),
    use_case: AssignTicketUseCase = Depends(get_assign_ticket_use_case),
):
    return TicketResponse.model_validate(await use_case.execute(ticket_id, body.admin_id, actor))


@support_router.put("/tickets/{ticket_id}/status", response_model=TicketResponse)
async def update_ticket_status(
    ticket_id: str,
    body: UpdateTicketStatusBody,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdateTicketStatusUseCase = Depends(get_update_ticket_status_use_case),
):
    ticket = await use_case.execute(ticket_id, body.status, actor, priority=body.priority)
    return TicketResponse.model_validate(ticket)


# ============================================================
# WARRANTY
# ============================================================

warranty_router = APIRouter(prefix="/warranty", tags=["Warranty"])


@warranty_router.post("/claims", response_model=WarrantyClaimResponse, status_code=status.HTTP_201_CREATED)
async def submit_claim(
    body: SubmitWarrantyClaimBody,
    actor: Actor = Depends(get_current_actor),
    use_case: SubmitWarrantyClaimUseCase = Depends(get_submit_claim_use_case),
):
    request = SubmitWarrantyClaimRequest(**body.model_dump())
    return WarrantyClaimResponse.model_validate(await use_case.execute(request, actor))


@warranty_router.get("/claims", response_model=list[WarrantyClaimResponse])
async def list_my_claims(
    actor: Actor = Depends(get_current_actor),
    use_case: ListMyWarrantyClaimsUseCase = Depends(get_my_claims_use_case),
):
    return [WarrantyClaimResponse.model_validate(claim) for claim in await use_case.execute(actor)]


@warranty_router.get("/claims/admin/all", response_model=list[WarrantyClaimResponse])
async def list_all_claims(
    status_filter: str | None = Query(None, alias="status"),
    actor: Actor = Depends(get_current_actor),
    use_case: ListWarrantyClaimsUseCase = Depends(get_list_claims_use_case),
):
    claims = await use_case.execute(actor, parse_status_filter(WarrantyClaimStatus, status_filter))
    return [WarrantyClaimResponse.model_validate(claim) for claim in claims]


@warranty_router.get("/claims/{claim_id}", response_model=WarrantyClaimResponse)
async def get_claim(
    claim_id: str,
    actor: Actor = Depends(get_current_actor),
    use_case: GetWarrantyClaimUseCase = Depends(get_claim_use_case),
):
    return WarrantyClaimResponse.model_validate(await use_case.execute(claim_id, actor))


@warranty_router.put("/claims/{claim_id}", response_model=WarrantyClaimResponse)
async def update_claim(
    claim_id: str,
    body: UpdateWarrantyClaimBody,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdateWarrantyClaimUseCase = Depends(get_update_claim_use_case),
):
    claim = await use_case.execute(
        claim_id,
        actor,
        status=body.status,
        resolution=body.resolution,
        admin_notes=body.admin_notes,
    )
    return WarrantyClaimResponse.model_validate(claim)


router = APIRouter()
for _router in (
    products_router,
    categories_router,
    cart_router,
    orders_router,
    payments_router,
    packages_router,
    shipping_router,
    returns_router,
    support_router,
    warranty_router,
):
    router.include_router(_router)


__all__ = ["router"]

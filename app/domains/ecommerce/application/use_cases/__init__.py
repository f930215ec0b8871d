"""
E-commerce Use Cases

Business use cases for the e-commerce domain.
Each use case represents a single business operation.
"""

from .cart import (
    AddCartItemUseCase,
    ClearCartUseCase,
    GetCartUseCase,
    RemoveCartItemUseCase,
    UpdateCartItemUseCase,
)
from .catalog import (
    CreateCategoryUseCase,
    CreateProductUseCase,
    DeleteCategoryUseCase,
    DeleteProductUseCase,
    GetCategoryUseCase,
    GetFeaturedProductsUseCase,
    GetProductsByCategoryUseCase,
    GetProductUseCase,
    GetSubcategoriesUseCase,
    ListCategoriesUseCase,
    ListProductsUseCase,
    SearchProductsUseCase,
    UpdateProductUseCase,
)
from .orders import (
    ConfirmPaymentUseCase,
    CreateOrderUseCase,
    CreatePaymentIntentUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    UpdateOrderStatusUseCase,
)
from .packages import (
    CreatePackageUseCase,
    DeletePackageUseCase,
    GenerateLabelUseCase,
    GetPackageByOrderUseCase,
    GetPackageUseCase,
    ListPackagesUseCase,
    MarkPackageDeliveredUseCase,
    MarkPackagePreparingUseCase,
    MarkPackageReadyUseCase,
    RecoverPackageUseCase,
    RenderLabelPdfUseCase,
    ReportPackageExceptionUseCase,
    UpdatePackageUseCase,
)
from .returns import (
    GetReturnInfoUseCase,
    ListReturnsUseCase,
    RequestReturnUseCase,
    UpdateReturnStatusUseCase,
)
from .shipping import (
    GetOrderTrackingUseCase,
    ListDelayedOrdersUseCase,
    ListShippingMethodsUseCase,
    UpdateShippingInfoUseCase,
)
from .support import (
    AddTicketMessageUseCase,
    AssignTicketUseCase,
    CreateTicketUseCase,
    GetTicketUseCase,
    ListMyTicketsUseCase,
    ListTicketsUseCase,
    UpdateTicketStatusUseCase,
)
from .warranty import (
    GetWarrantyClaimUseCase,
    ListMyWarrantyClaimsUseCase,
    ListWarrantyClaimsUseCase,
    SubmitWarrantyClaimUseCase,
    UpdateWarrantyClaimUseCase,
)

__all__ = [
    # Catalog
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
    # Cart
    "GetCartUseCase",
    "AddCartItemUseCase",
    "UpdateCartItemUseCase",
    "RemoveCartItemUseCase",
    "ClearCartUseCase",
    # Orders & payment
    "CreateOrderUseCase",
    "CreatePaymentIntentUseCase",
    "ConfirmPaymentUseCase",
    "UpdateOrderStatusUseCase",
    "GetOrderUseCase",
    "ListOrdersUseCase",
    # Packages
    "CreatePackageUseCase",
    "GetPackageUseCase",
    "GetPackageByOrderUseCase",
    "ListPackagesUseCase",
    "UpdatePackageUseCase",
    "MarkPackagePreparingUseCase",
    "MarkPackageReadyUseCase",
    "GenerateLabelUseCase",
    "MarkPackageDeliveredUseCase",
    "ReportPackageExceptionUseCase",
    "RecoverPackageUseCase",
    "DeletePackageUseCase",
    "RenderLabelPdfUseCase",
    # Shipping
    "GetOrderTrackingUseCase",
    "UpdateShippingInfoUseCase",
    "ListDelayedOrdersUseCase",
    "ListShippingMethodsUseCase",
    # Returns
    "RequestReturnUseCase",
    "GetReturnInfoUseCase",
    "UpdateReturnStatusUseCase",
    "ListReturnsUseCase",
    # Support
    "CreateTicketUseCase",
    "GetTicketUseCase",
    "ListMyTicketsUseCase",
    "ListTicketsUseCase",
    "AddTicketMessageUseCase",
    "AssignTicketUseCase",
    "UpdateTicketStatusUseCase",
    # Warranty
    "SubmitWarrantyClaimUseCase",
    "ListMyWarrantyClaimsUseCase",
    "ListWarrantyClaimsUseCase",
    "GetWarrantyClaimUseCase",
    "UpdateWarrantyClaimUseCase",
]

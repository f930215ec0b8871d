"""Test utilities and helpers."""

from tests.utils.factories import (
    ADMIN_ID,
    CUSTOMER_ID,
    FIXED_NOW,
    OTHER_CUSTOMER_ID,
    create_address,
    create_admin,
    create_cart,
    create_category,
    create_claim,
    create_customer,
    create_order,
    create_package,
    create_paid_order,
    create_product,
    create_shipping_method,
    create_ticket,
)

__all__ = [
    "ADMIN_ID",
    "CUSTOMER_ID",
    "FIXED_NOW",
    "OTHER_CUSTOMER_ID",
    "create_address",
    "create_admin",
    "create_cart",
    "create_category",
    "create_claim",
    "create_customer",
    "create_order",
    "create_package",
    "create_paid_order",
    "create_product",
    "create_shipping_method",
    "create_ticket",
]

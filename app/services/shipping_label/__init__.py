"""
Shipping Label Module

Printable label rendering for shipped packages.
"""

from app.services.shipping_label.pdf_generator import ShippingLabelGenerator

__all__ = ["ShippingLabelGenerator"]

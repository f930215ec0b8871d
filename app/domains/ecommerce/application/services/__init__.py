"""
Ecommerce Application Services

Helpers shared by several use cases.
"""

from app.domains.ecommerce.application.services.shipment_notifier import ShipmentNotifier

__all__ = ["ShipmentNotifier"]

# Services

from .order_placement import OrderPlacementService
from .order_management import OrderService

__all__ = ["OrderPlacementService", "OrderService"]

"""Order queries and status updates"""

import logging

from ..database.orders import OrderDatabase
from ..exceptions import ForbiddenError, InvalidStatusError, NotFoundError
from ..models.order import Order, OrderStatus
from ..security.models import Identity

logger = logging.getLogger(__name__)


class OrderService:
    """Read access to orders and administrative status changes"""

    def __init__(self, order_db: OrderDatabase):
        self.order_db = order_db

    def get_order(self, order_id: str, identity: Identity) -> Order:
        """Get an order the caller owns, or any order for an admin"""
        order = self.order_db.get_order(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)

        if not identity.can_access(order.user_id):
            logger.warning(f"User {identity.user_id} denied access to order {order_id}")
            raise ForbiddenError()

        return order

    def list_orders_for_user(self, user_id: str) -> list[Order]:
        return self.order_db.list_orders(user_id=user_id)

    def list_all_orders(self, identity: Identity) -> list[Order]:
        if not identity.is_admin:
            raise ForbiddenError("Administrator access required")
        return self.order_db.list_orders()

    def update_status(self, order_id: str, status: str, identity: Identity) -> Order:
        """
        Change an order's status.

        Raises:
            ForbiddenError: if the caller is not an admin
            InvalidStatusError: if status is not one of OrderStatus
            NotFoundError: if the order does not exist
        """
        if not identity.is_admin:
            raise ForbiddenError("Administrator access required")

        if status not in OrderStatus.values():
            raise InvalidStatusError(status, OrderStatus.values())

        order = self.order_db.update_status(order_id, OrderStatus(status))
        if order is None:
            raise NotFoundError("Order", order_id)

        logger.info(f"Order {order_id} status set to {status} by {identity.user_id}")
        return order

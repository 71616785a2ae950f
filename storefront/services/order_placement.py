"""
Order placement.

Turns the caller's cart into an order:

1. Load the cart and resolve every line to current product data
2. Validate stock for all lines before touching anything
3. Snapshot line items at the prices read in step 2 and compute the total
4. Conditionally decrement stock for each line, in cart order
5. Store the order
6. Delete the cart

Steps 4-6 run as a saga. If any of them fails, the completed steps are
compensated in reverse: a stored order is cancelled and every decrement is
returned to stock. Validation errors surface unchanged; anything else is
reported as a StorageFailureError.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from pymongo.errors import PyMongoError

from ..database.carts import CartDatabase
from ..database.orders import OrderDatabase
from ..database.products import ProductDatabase
from ..exceptions import (
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    StorageFailureError,
    StorefrontError,
)
from ..models.cart import Cart
from ..models.order import Order, OrderItem, OrderStatus
from ..models.product import Product
from ..security.models import Identity

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Server Error: Failed to create order"


@dataclass
class ResolvedLine:
    """Cart line joined with the product data read for validation"""
    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class OrderPlacementService:
    """Places orders from carts with stock-safe compensation"""

    def __init__(
        self,
        product_db: ProductDatabase,
        cart_db: CartDatabase,
        order_db: OrderDatabase,
    ):
        self.product_db = product_db
        self.cart_db = cart_db
        self.order_db = order_db

    def place_order(self, identity: Identity, shipping_address: str) -> Order:
        """
        Place an order from the caller's cart.

        Args:
            identity: Authenticated caller
            shipping_address: Destination for the order

        Returns:
            The created order, status pending

        Raises:
            EmptyCartError: if the caller has no cart or it has no items
            NotFoundError: if a cart line references a deleted product
            InsufficientStockError: if any line exceeds available stock
            StorageFailureError: if persistence fails; state is compensated
        """
        try:
            cart = self.cart_db.get_cart_for_user(identity.user_id)
            if cart is None or not cart.items:
                raise EmptyCartError(identity.user_id)
            lines = self._resolve_lines(cart)
        except PyMongoError as e:
            logger.exception(f"Failed to load cart for user {identity.user_id}")
            raise StorageFailureError(FAILURE_MESSAGE) from e

        self._validate_stock(lines)

        items = [
            OrderItem(
                product_id=line.product.id,
                product_name=line.product.name,
                quantity=line.quantity,
                unit_price=line.product.price,
                line_total=line.line_total,
            )
            for line in lines
        ]
        total_amount = sum((item.line_total for item in items), Decimal("0"))

        order = self._commit(identity.user_id, cart, items, total_amount, shipping_address)
        logger.info(
            f"Order {order.id} created for user {identity.user_id}: "
            f"{len(items)} item(s), total {order.total_amount}"
        )
        return order

    def _resolve_lines(self, cart: Cart) -> list[ResolvedLine]:
        lines = []
        for item in cart.items:
            product = self.product_db.get_product(item.product_id)
            if product is None:
                raise NotFoundError("Product", item.product_id)
            lines.append(ResolvedLine(product=product, quantity=item.quantity))
        return lines

    def _validate_stock(self, lines: list[ResolvedLine]) -> None:
        """Check every line before any stock is mutated"""
        for line in lines:
            if line.product.stock < line.quantity:
                raise InsufficientStockError(
                    line.product.id,
                    available=line.product.stock,
                    requested=line.quantity,
                    product_name=line.product.name,
                )

    def _commit(
        self,
        user_id: str,
        cart: Cart,
        items: list[OrderItem],
        total_amount: Decimal,
        shipping_address: str,
    ) -> Order:
        decremented: list[OrderItem] = []
        order: Optional[Order] = None

        try:
            for item in items:
                self.product_db.decrement_stock(item.product_id, item.quantity)
                decremented.append(item)

            order = self.order_db.create_order(
                user_id=user_id,
                items=items,
                total_amount=total_amount,
                shipping_address=shipping_address,
                status=OrderStatus.PENDING,
            )

            # Only after the order is stored
            self.cart_db.delete_cart(cart.id)
        except Exception as e:
            self._compensate(order, decremented)
            if isinstance(e, StorefrontError):
                raise
            logger.exception(f"Order placement failed for user {user_id}")
            raise StorageFailureError(FAILURE_MESSAGE) from e

        return order

    def _compensate(self, order: Optional[Order], decremented: list[OrderItem]) -> None:
        """Undo completed saga steps; failures are logged, not raised"""
        if order is not None:
            try:
                self.order_db.update_status(order.id, OrderStatus.CANCELLED)
                logger.warning(f"Order {order.id} cancelled during compensation")
            except Exception:
                logger.exception(f"Compensation failed: could not cancel order {order.id}")

        for item in reversed(decremented):
            try:
                self.product_db.increment_stock(item.product_id, item.quantity)
                logger.warning(
                    f"Restored {item.quantity} unit(s) of product {item.product_id} during compensation"
                )
            except Exception:
                logger.exception(
                    f"Compensation failed: could not restore {item.quantity} unit(s) "
                    f"of product {item.product_id}"
                )

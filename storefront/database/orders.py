"""Order storage"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from ..models.order import Order, OrderItem, OrderStatus
from .products import to_decimal, to_decimal128


def _to_order(doc: dict) -> Order:
    return Order(
        id=doc["_id"],
        user_id=doc["user_id"],
        items=[
            OrderItem(
                product_id=item["product_id"],
                product_name=item["product_name"],
                quantity=item["quantity"],
                unit_price=to_decimal(item["unit_price"]),
                line_total=to_decimal(item["line_total"]),
            )
            for item in doc["items"]
        ],
        total_amount=to_decimal(doc["total_amount"]),
        shipping_address=doc["shipping_address"],
        status=doc["status"],
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


class OrderDatabase:
    """MongoDB-backed order storage"""

    def __init__(self, collection: Collection):
        self.collection = collection

    def create_order(
        self,
        user_id: str,
        items: list[OrderItem],
        total_amount: Decimal,
        shipping_address: str,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Persist a new order; items and total are stored as given"""
        now = datetime.now(timezone.utc)
        doc = {
            "_id": str(uuid.uuid4()),
            "user_id": user_id,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity,
                    "unit_price": to_decimal128(item.unit_price),
                    "line_total": to_decimal128(item.line_total),
                }
                for item in items
            ],
            "total_amount": to_decimal128(total_amount),
            "shipping_address": shipping_address,
            "status": status.value,
            "created_at": now,
            "updated_at": now,
        }
        self.collection.insert_one(doc)
        return _to_order(doc)

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        doc = self.collection.find_one({"_id": order_id})
        return _to_order(doc) if doc else None

    def list_orders(self, user_id: Optional[str] = None) -> list[Order]:
        """List orders newest first, optionally for one user"""
        query = {"user_id": user_id} if user_id is not None else {}
        return [_to_order(doc) for doc in self.collection.find(query).sort("created_at", DESCENDING)]

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Update order status"""
        doc = self.collection.find_one_and_update(
            {"_id": order_id},
            {"$set": {"status": status.value, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return _to_order(doc) if doc else None

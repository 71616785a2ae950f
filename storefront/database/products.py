"""Product storage and stock ledger"""

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from bson.decimal128 import Decimal128
from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection

from ..exceptions import InsufficientStockError, NotFoundError
from ..models.product import Product, ProductCreateRequest

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal:
    """Convert a stored money value back to Decimal"""
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return Decimal(str(value))


def to_decimal128(value: Decimal) -> Decimal128:
    return Decimal128(str(value))


def _to_product(doc: dict) -> Product:
    return Product(
        id=doc["_id"],
        name=doc["name"],
        description=doc["description"],
        price=to_decimal(doc["price"]),
        category_id=doc["category_id"],
        stock=doc["stock"],
        image_url=doc.get("image_url"),
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


class ProductDatabase:
    """
    MongoDB-backed product storage.

    Stock is only ever changed through single-document atomic updates:
    decrements carry a ``stock >= quantity`` filter so the counter cannot
    go negative even when several orders race for the same product.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def create_product(self, request: ProductCreateRequest) -> Product:
        """Create a new product"""
        now = datetime.now(timezone.utc)
        doc = {
            "_id": str(uuid.uuid4()),
            "name": request.name,
            "description": request.description,
            "price": to_decimal128(request.price),
            "category_id": request.category_id,
            "stock": request.stock,
            "image_url": request.image_url,
            "created_at": now,
            "updated_at": now,
        }
        self.collection.insert_one(doc)
        return _to_product(doc)

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        doc = self.collection.find_one({"_id": product_id})
        return _to_product(doc) if doc else None

    def list_products(self) -> list[Product]:
        """Get all products"""
        return [_to_product(doc) for doc in self.collection.find().sort("created_at", ASCENDING)]

    def update_product(self, product_id: str, changes: dict[str, Any]) -> Optional[Product]:
        """
        Apply a partial update in one atomic write.

        Args:
            product_id: Product to update
            changes: Validated field values, excluding stock

        Returns:
            The updated product, or None if it does not exist
        """
        fields = dict(changes)
        if fields.get("price") is not None:
            fields["price"] = to_decimal128(fields["price"])
        fields["updated_at"] = datetime.now(timezone.utc)

        doc = self.collection.find_one_and_update(
            {"_id": product_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return _to_product(doc) if doc else None

    def delete_product(self, product_id: str) -> bool:
        """Delete a product"""
        return self.collection.delete_one({"_id": product_id}).deleted_count > 0

    def decrement_stock(self, product_id: str, quantity: int) -> Product:
        """
        Conditionally remove stock.

        The availability check and the decrement happen in the same
        update, so a stale read elsewhere can never oversell.

        Raises:
            InsufficientStockError: if fewer than ``quantity`` units remain
            NotFoundError: if the product does not exist
        """
        doc = self.collection.find_one_and_update(
            {"_id": product_id, "stock": {"$gte": quantity}},
            {
                "$inc": {"stock": -quantity},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )
        if doc is not None:
            return _to_product(doc)

        current = self.collection.find_one({"_id": product_id}, {"stock": 1, "name": 1})
        if current is None:
            raise NotFoundError("Product", product_id)

        logger.info(
            f"Conditional decrement rejected for product {product_id}: "
            f"available={current['stock']}, requested={quantity}"
        )
        raise InsufficientStockError(
            product_id,
            available=current["stock"],
            requested=quantity,
            product_name=current.get("name"),
        )

    def increment_stock(self, product_id: str, quantity: int) -> Optional[Product]:
        """Return stock to a product; None if the product no longer exists"""
        doc = self.collection.find_one_and_update(
            {"_id": product_id},
            {
                "$inc": {"stock": quantity},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )
        return _to_product(doc) if doc else None

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """
        Administrative stock adjustment.

        Args:
            product_id: Product to update
            delta: Positive to add, negative to remove

        Raises:
            InsufficientStockError: if a removal would take stock below zero
            NotFoundError: if the product does not exist
        """
        if delta < 0:
            return self.decrement_stock(product_id, -delta)

        product = self.increment_stock(product_id, delta)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

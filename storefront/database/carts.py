"""Cart storage"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..exceptions import ConflictError, NotFoundError
from ..models.cart import Cart, CartItem

logger = logging.getLogger(__name__)

ADD_ATTEMPTS = 3


def _to_cart(doc: dict) -> Cart:
    return Cart(
        id=doc["_id"],
        user_id=doc["user_id"],
        items=[CartItem(**item) for item in doc.get("items", [])],
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


class CartDatabase:
    """
    MongoDB-backed cart storage.

    A unique index on ``user_id`` keeps one cart per user. Line items are
    changed with positional updates so repeated adds merge quantities
    instead of duplicating the product.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def get_cart_for_user(self, user_id: str) -> Optional[Cart]:
        """Get the user's cart, if one exists"""
        doc = self.collection.find_one({"user_id": user_id})
        return _to_cart(doc) if doc else None

    def add_item(self, user_id: str, product_id: str, quantity: int = 1) -> tuple[Cart, bool]:
        """
        Add an item to the user's cart, creating the cart on first use.

        Returns:
            Tuple of (cart, created) where created is True if the cart is new

        Raises:
            ConflictError: if concurrent changes keep the write from applying
            NotFoundError: if the cart was removed right after the write
        """
        now = datetime.now(timezone.utc)
        created = False

        # A concurrent add of the same product can win the push, and a placement
        # can delete the cart between steps; each attempt re-checks both
        for _ in range(ADD_ATTEMPTS):
            if self._create_cart_if_missing(user_id, now):
                created = True
            if self._increment_quantity(user_id, product_id, quantity, now):
                break
            if self._push_item(user_id, product_id, quantity, now):
                break
        else:
            logger.warning(f"Gave up adding product {product_id} to cart of user {user_id}")
            raise ConflictError("Cart was modified concurrently, please retry")

        cart = self.get_cart_for_user(user_id)
        if cart is None:
            raise NotFoundError("Cart", user_id)
        return cart, created

    def _create_cart_if_missing(self, user_id: str, now: datetime) -> bool:
        if self.collection.find_one({"user_id": user_id}, {"_id": 1}) is not None:
            return False
        try:
            self.collection.insert_one({
                "_id": str(uuid.uuid4()),
                "user_id": user_id,
                "items": [],
                "created_at": now,
                "updated_at": now,
            })
        except DuplicateKeyError:
            logger.debug(f"Cart for user {user_id} created by a concurrent request")
            return False
        return True

    def _increment_quantity(self, user_id: str, product_id: str, quantity: int, now: datetime) -> bool:
        result = self.collection.update_one(
            {"user_id": user_id, "items.product_id": product_id},
            {"$inc": {"items.$.quantity": quantity}, "$set": {"updated_at": now}},
        )
        return result.matched_count > 0

    def _push_item(self, user_id: str, product_id: str, quantity: int, now: datetime) -> bool:
        result = self.collection.update_one(
            {"user_id": user_id, "items.product_id": {"$ne": product_id}},
            {
                "$push": {"items": {"product_id": product_id, "quantity": quantity}},
                "$set": {"updated_at": now},
            },
        )
        return result.matched_count > 0

    def update_item_quantity(self, user_id: str, product_id: str, quantity: int) -> Optional[Cart]:
        """Set an item's quantity; None if the item is not in the cart"""
        result = self.collection.update_one(
            {"user_id": user_id, "items.product_id": product_id},
            {
                "$set": {
                    "items.$.quantity": quantity,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
        )
        if result.matched_count == 0:
            return None
        return self.get_cart_for_user(user_id)

    def remove_item(self, user_id: str, product_id: str) -> Optional[Cart]:
        """Remove an item from the cart; None if the user has no cart"""
        result = self.collection.update_one(
            {"user_id": user_id},
            {
                "$pull": {"items": {"product_id": product_id}},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )
        if result.matched_count == 0:
            return None
        return self.get_cart_for_user(user_id)

    def delete_cart(self, cart_id: str) -> bool:
        """Delete a cart; deleting a missing cart is not an error"""
        return self.collection.delete_one({"_id": cart_id}).deleted_count > 0

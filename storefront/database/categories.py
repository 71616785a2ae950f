"""Category storage"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..exceptions import ConflictError
from ..models.category import Category


def _to_category(doc: dict) -> Category:
    return Category(
        id=doc["_id"],
        name=doc["name"],
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


class CategoryDatabase:
    """MongoDB-backed category storage"""

    def __init__(self, collection: Collection):
        self.collection = collection

    def create_category(self, name: str) -> Category:
        """Create a new category"""
        now = datetime.now(timezone.utc)
        doc = {
            "_id": str(uuid.uuid4()),
            "name": name,
            "created_at": now,
            "updated_at": now,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("Category already exists")
        return _to_category(doc)

    def get_category(self, category_id: str) -> Optional[Category]:
        """Get a category by ID"""
        doc = self.collection.find_one({"_id": category_id})
        return _to_category(doc) if doc else None

    def get_category_by_name(self, name: str) -> Optional[Category]:
        doc = self.collection.find_one({"name": name})
        return _to_category(doc) if doc else None

    def list_categories(self) -> list[Category]:
        """List all categories by name"""
        return [_to_category(doc) for doc in self.collection.find().sort("name", ASCENDING)]

    def rename_category(self, category_id: str, name: str) -> Optional[Category]:
        try:
            doc = self.collection.find_one_and_update(
                {"_id": category_id},
                {"$set": {"name": name, "updated_at": datetime.now(timezone.utc)}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise ConflictError("Category already exists")
        return _to_category(doc) if doc else None

    def delete_category(self, category_id: str) -> bool:
        """Delete a category"""
        return self.collection.delete_one({"_id": category_id}).deleted_count > 0

"""User storage"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..exceptions import ConflictError
from ..models.user import UserRecord, UserRole


def _to_user(doc: dict) -> UserRecord:
    return UserRecord(
        id=doc["_id"],
        name=doc["name"],
        email=doc["email"],
        role=doc.get("role", UserRole.USER.value),
        password_hash=doc["password_hash"],
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


class UserDatabase:
    """MongoDB-backed user storage"""

    def __init__(self, collection: Collection):
        self.collection = collection

    def create_user(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole = UserRole.USER,
    ) -> UserRecord:
        """
        Create a new user; email is stored lower-cased.

        Raises:
            ConflictError: if the email is already registered
        """
        now = datetime.now(timezone.utc)
        doc = {
            "_id": str(uuid.uuid4()),
            "name": name,
            "email": email.lower(),
            "password_hash": password_hash,
            "role": role.value,
            "created_at": now,
            "updated_at": now,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("User already exists")
        return _to_user(doc)

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        """Get a user by ID"""
        doc = self.collection.find_one({"_id": user_id})
        return _to_user(doc) if doc else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        """Get a user by email (case-insensitive)"""
        doc = self.collection.find_one({"email": email.lower()})
        return _to_user(doc) if doc else None

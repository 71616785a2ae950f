"""MongoDB connection helpers"""

import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from ..core.config import Settings

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> MongoClient:
    """Create a MongoDB client; no connection is made until first use"""
    return MongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        tz_aware=True,
    )


def ensure_indexes(db: Database) -> None:
    """Create the unique indexes the storefront relies on"""
    db["users"].create_index([("email", ASCENDING)], unique=True)
    db["categories"].create_index([("name", ASCENDING)], unique=True)
    db["carts"].create_index([("user_id", ASCENDING)], unique=True)
    db["orders"].create_index([("user_id", ASCENDING), ("created_at", ASCENDING)])
    logger.info(f"Indexes ensured on database '{db.name}'")

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from moodapi import config

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None
db: Optional[Database] = None


def connect(url: Optional[str] = None, name: Optional[str] = None) -> Database:
    """Open the shared client and make sure the server answers.

    Raises ``pymongo.errors.PyMongoError`` when the server cannot be reached,
    so callers can abort startup before any route is served.
    """
    global _client, db

    client = MongoClient(url or config.DATABASE_URL)
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise

    _client = client
    db = client[name or config.DATABASE_NAME]
    logger.info("MongoDB connected (database=%s)", db.name)
    return db


def get_collection(name: Optional[str] = None) -> Collection:
    if db is None:
        raise RuntimeError("database is not connected; call connect() first")
    return db[name or config.COLLECTION_NAME]


def close() -> None:
    global _client, db
    if _client is not None:
        _client.close()
    _client = None
    db = None

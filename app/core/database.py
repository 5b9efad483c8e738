# app/core/database.py
import threading

from pymongo import MongoClient
from pymongo.database import Database

from app.core.config import CONFIG
from app.core.logger import get_logger

logger = get_logger("database")

_lock = threading.Lock()
_client: MongoClient | None = None


def get_client() -> MongoClient:
    """
    Lazily create the process-wide MongoClient.
    pymongo pools connections internally, so one client is shared.
    """
    global _client
    with _lock:
        if _client is None:
            _client = MongoClient(
                CONFIG.MONGO_URI,
                serverSelectionTimeoutMS=CONFIG.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            )
            logger.info("MongoDB client created for database %s", CONFIG.MONGO_DB_NAME)
        return _client


def get_database() -> Database:
    return get_client()[CONFIG.MONGO_DB_NAME]

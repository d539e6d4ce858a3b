import logging
import time

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

USERS_COLLECTION_NAME = 'users'

# Seconds to wait after a failed connect before trying the same URL again
RETRY_AFTER_SECONDS = 30.0

_clock = time.monotonic

_client_cache: MongoClient | None = None
_cached_url: str | None = None
_failed_at: dict[str, float] = {}


def _close_quietly(client: MongoClient) -> None:
    try:
        client.close()
    except PyMongoError as e:
        logger.debug(f"[MONGODB] Error closing client: {str(e)[:200]}")


def reset_client():
    global _client_cache, _cached_url
    if _client_cache is not None:
        _close_quietly(_client_cache)
    _client_cache = None
    _cached_url = None
    _failed_at.clear()


def get_mongodb_client(mongo_url: str) -> MongoClient | None:
    """Get MongoDB client with connection caching and reconnection logic.

    Connection strategy:
    1. Return cached client if healthy (ping succeeds)
    2. If cached client fails, close it and attempt reconnection
    3. After a failed connect, return None until RETRY_AFTER_SECONDS pass,
       then try again (the store may simply have started later than the app)

    Returns:
        MongoDB client or None if connection fails
    """
    global _client_cache, _cached_url

    if not mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    if _client_cache is not None and _cached_url == mongo_url:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            logger.debug("[MONGODB] Cached client failed ping, attempting reconnection...")
            _close_quietly(_client_cache)
            _client_cache = None

    failed_at = _failed_at.get(mongo_url)
    if failed_at is not None and _clock() - failed_at < RETRY_AFTER_SECONDS:
        return None

    client = None
    try:
        client = MongoClient(
            mongo_url,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
            tz_aware=True,
        )
        client.admin.command('ping')
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Connection failed, retrying in {RETRY_AFTER_SECONDS:.0f}s: {str(e)[:200]}")
        if client is not None:
            _close_quietly(client)
        _failed_at[mongo_url] = _clock()
        return None

    if _cached_url != mongo_url or failed_at is not None:
        logger.info("[MONGODB] Connected successfully")
    _failed_at.pop(mongo_url, None)
    _client_cache = client
    _cached_url = mongo_url
    return client

import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo driver logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)


def create_mongodb_client(mongo_uri: str | None) -> MongoClient | None:
    """Create a MongoDB client and verify it with a ping.

    Returns None when the URI is missing or the server cannot be reached,
    so the API can still start and report the store as unavailable.
    """
    if not mongo_uri:
        logger.error("[MONGODB] MONGO_URI not configured.")
        return None

    try:
        client = MongoClient(
            mongo_uri,
            serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
            connectTimeoutMS=5000,  # 5s timeout for initial connection
            socketTimeoutMS=30000,  # 30s timeout for operations
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            tz_aware=True,  # datetimes come back as UTC-aware like the domain creates them
        )
        client.admin.command('ping')
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
        return None

    logger.info("[MONGODB] Connected successfully")
    return client


def ping(client: MongoClient | None) -> bool:
    """Return True if the server answers a ping."""
    if client is None:
        return False
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False

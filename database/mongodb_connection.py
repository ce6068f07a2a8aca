"""
MongoDB connection management for SmartFit Backend

Environment Variables:
    - MONGODB_URI: MongoDB connection string (enables the MongoDB backend)
    - MONGODB_DB_NAME: Database name used when the URI does not name one (default: smartfit)

Usage:
    from database.mongodb_connection import init_mongodb

    db = init_mongodb()
    db["users"].find_one({"email": "demo@example.com"})
"""

from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConfigurationError, PyMongoError

from config.settings import settings
from core.exceptions import MongoDBConnectionException
from core.logging import logger, log_structured


# Collection names
USERS = "users"
MEASUREMENTS = "measurements"
PRODUCTS = "products"
FIT_ANALYSES = "fitAnalyses"
FAVORITES = "favorites"
RECOMMENDATIONS = "recommendations"
USER_HISTORY = "userHistory"
NOTIFICATIONS = "notifications"

# Global MongoDB resources
mongo_client: Optional[MongoClient] = None


def ensure_indexes(db: Database) -> None:
    """
    Create the indexes the repository relies on

    Unique indexes back the duplicate-user and duplicate-favorite contract;
    the userId indexes serve the per-user listings.
    """
    db[USERS].create_index([("email", ASCENDING)], unique=True)
    db[USERS].create_index([("username", ASCENDING)], unique=True)
    db[MEASUREMENTS].create_index([("userId", ASCENDING)], unique=True)
    db[PRODUCTS].create_index([("userId", ASCENDING)])
    db[FIT_ANALYSES].create_index([("userId", ASCENDING)])
    db[FIT_ANALYSES].create_index([("productId", ASCENDING)])
    db[FAVORITES].create_index([("userId", ASCENDING), ("productId", ASCENDING)], unique=True)
    db[RECOMMENDATIONS].create_index([("userId", ASCENDING)])
    db[USER_HISTORY].create_index([("userId", ASCENDING)])
    db[NOTIFICATIONS].create_index([("userId", ASCENDING)])


def init_mongodb(uri: Optional[str] = None, db_name: Optional[str] = None) -> Database:
    """
    Connect to MongoDB, verify the server answers and create indexes

    Args:
        uri: Connection string (defaults to MONGODB_URI)
        db_name: Fallback database name when the URI names none

    Returns:
        Database: pymongo database handle

    Raises:
        MongoDBConnectionException: server unreachable or index creation failed
    """
    global mongo_client

    mongo_uri = uri or settings.MONGODB_URI
    if not mongo_uri:
        raise MongoDBConnectionException("MONGODB_URI is not configured")

    try:
        logger.info("🔌 Connecting to MongoDB...")

        mongo_client = MongoClient(mongo_uri, serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS)
        try:
            db = mongo_client.get_default_database()
        except ConfigurationError:
            db = mongo_client[db_name or settings.MONGODB_DB_NAME]

        mongo_client.admin.command("ping")
        ensure_indexes(db)

    except PyMongoError as e:
        logger.error(f"❌ MongoDB connection failed: {str(e)}")
        mongo_client = None
        raise MongoDBConnectionException(f"Failed to connect to MongoDB: {str(e)}") from e

    logger.info(f"✅ MongoDB connected: {db.name}")
    log_structured("mongodb_connected", {
        "database": db.name,
        "collections": [USERS, MEASUREMENTS, PRODUCTS, FIT_ANALYSES, FAVORITES,
                        RECOMMENDATIONS, USER_HISTORY, NOTIFICATIONS]
    })

    return db


def close_mongodb() -> None:
    """Close the global client, if any"""
    global mongo_client

    if mongo_client is not None:
        mongo_client.close()
        mongo_client = None
        logger.info("🔌 MongoDB connection closed")

"""
MongoDB connection and database management.

Provides async MongoDB client using Motor and database access functions.
"""

import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from config.settings import settings

logger = logging.getLogger(__name__)

# Global MongoDB client
_mongo_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


async def init_db() -> AsyncIOMotorDatabase:
    """
    Initialize MongoDB connection.

    The profile collection belongs to the registration service and is only
    read here, so no indexes are created.

    Returns:
        AsyncIOMotorDatabase: Database instance

    Raises:
        ConnectionFailure: If connection to MongoDB fails
    """
    global _mongo_client, _database

    try:
        logger.info(f"Connecting to MongoDB: {settings.MONGODB_URI}")

        _mongo_client = AsyncIOMotorClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=10000,
            socketTimeoutMS=10000
        )

        # Test connection
        await _mongo_client.admin.command('ping')

        db_name = settings.MONGODB_URI.split('/')[-1].split('?')[0]
        _database = _mongo_client[db_name]

        logger.info("MongoDB connected")
        return _database

    except (ConnectionFailure, ServerSelectionTimeoutError) as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise


def get_db() -> AsyncIOMotorDatabase:
    """
    Get the database instance.

    Returns:
        AsyncIOMotorDatabase: Database instance

    Raises:
        RuntimeError: If database is not initialized
    """
    if _database is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _database


async def close_db() -> None:
    """Close MongoDB connection."""
    global _mongo_client, _database

    if _mongo_client:
        _mongo_client.close()
        _mongo_client = None
        _database = None
        logger.info("MongoDB connection closed")

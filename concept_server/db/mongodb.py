"""
MongoDB database initialization and connection management.

Version: 1.0
"""

import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError
from typing import Optional

from concept_server.config.settings import get_settings

# Configure module logger
logger = logging.getLogger(__name__)

# Global database connection objects
_mongodb_client: Optional[AsyncIOMotorClient] = None
_mongodb_db: Optional[AsyncIOMotorDatabase] = None


async def init_mongodb() -> bool:
    """
    Initialize MongoDB connection with connection pooling.

    Returns:
        bool: True if connection successful, False otherwise
    """
    global _mongodb_client, _mongodb_db

    settings = get_settings()
    config = settings.get_mongodb_settings()

    try:
        _mongodb_client = AsyncIOMotorClient(
            config["host"],
            maxPoolSize=config["maxPoolSize"],
            minPoolSize=config["minPoolSize"],
            connectTimeoutMS=config["connectTimeoutMS"],
            serverSelectionTimeoutMS=config["serverSelectionTimeoutMS"],
        )

        # Verify connection is alive
        await _mongodb_client.admin.command('ping')

        _mongodb_db = _mongodb_client[config["db"]]

        logger.info(f"Successfully connected to MongoDB database '{config['db']}'")
        return True

    except ConnectionFailure as e:
        logger.error(f"Failed to connect to MongoDB: {str(e)}")
    except PyMongoError as e:
        logger.error(f"Error initializing MongoDB: {str(e)}")

    if _mongodb_client is not None:
        _mongodb_client.close()
    _mongodb_client = None
    _mongodb_db = None
    return False


async def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance with connection check.

    Returns:
        AsyncIOMotorDatabase: MongoDB database instance
    """
    if _mongodb_db is None:
        if not await init_mongodb():
            raise ConnectionFailure("Database connection not initialized")

    return _mongodb_db


async def close_mongodb_connection() -> None:
    """Close MongoDB connection gracefully."""
    global _mongodb_client, _mongodb_db

    if _mongodb_client is not None:
        _mongodb_client.close()
        _mongodb_client = None
        _mongodb_db = None
        logger.info("MongoDB connection closed")

# database.py
"""
GymPortal MongoDB Database Connection.

Uses Motor async driver with Beanie ODM.
"""

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    _initialized: bool = False

    @classmethod
    async def connect_db(cls, database_url: str, database_name: str):
        """
        Connect to MongoDB.

        Args:
            database_url: MongoDB connection string
            database_name: Database name to use
        """
        # Skip if already initialized (prevents multiple worker initialization)
        if cls._initialized:
            return

        try:
            cls.client = AsyncIOMotorClient(
                database_url,
                serverSelectionTimeoutMS=5000,
                maxPoolSize=50,
                minPoolSize=10
            )

            db = cls.client[database_name]

            # Test connection with ping
            await cls.client.admin.command('ping')
            logger.info(f"Connected to MongoDB: {database_name}")

            await cls.init_models(db)

        except Exception as e:
            logger.error(f"Error connecting to MongoDB: {e}")
            raise

    @classmethod
    async def init_models(cls, db):
        """
        Initialize Beanie ODM against a database handle.

        Args:
            db: Motor (or Motor-compatible) database object
        """
        from app.models.mongodb import WorkoutDocument

        await init_beanie(database=db, document_models=[WorkoutDocument])
        logger.info("Beanie ODM initialized with all models")
        cls._initialized = True

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            logger.info("MongoDB connection closed")
        cls.client = None
        cls._initialized = False

    @classmethod
    async def ping(cls) -> bool:
        """Test MongoDB connection."""
        if not cls.client:
            return False
        try:
            await cls.client.admin.command('ping')
            return True
        except Exception:
            return False

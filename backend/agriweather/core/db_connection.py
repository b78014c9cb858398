from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from agriweather.core.config import settings
from agriweather.core.errors import ConfigurationError
from agriweather.core.logger import logs
import logging

class AsyncDBConnection:
    """
    Lazily creates the shared MongoDB client for alert storage.
    Only used when STORAGE_MODE=mongodb
    """
    _client: AsyncIOMotorClient | None = None

    def get_database(self) -> AsyncIOMotorDatabase:
        if settings.STORAGE_MODE != "mongodb":
            logs.log(logging.ERROR, "MongoDB requested while STORAGE_MODE is not 'mongodb'")
            raise ConfigurationError()

        if AsyncDBConnection._client is None:
            # Motor client is non-blocking; no I/O happens until first query
            AsyncDBConnection._client = AsyncIOMotorClient(settings.MONGO_URI)
            logs.log(logging.INFO, "MongoDB connection initialized")

        return AsyncDBConnection._client[settings.MONGO_DB_NAME]

# Instantiate the connection manager
db_connection = AsyncDBConnection()

# Dependency for FastAPI
async def get_db() -> AsyncIOMotorDatabase:
    return db_connection.get_database()

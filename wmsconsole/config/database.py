from typing import Any, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from wmsconsole.utils import Logger
from .settings import Settings, settings as default_settings

logger = Logger("database")


class DatabaseManager:
    """
    Owns the motor client behind the mongodb session backend.

    The client is created on the first `session_collection()` call and
    checked with a ping; a failed ping closes it again and re-raises.
    """

    def __init__(self, client_factory: Callable[[str], Any] = AsyncIOMotorClient):
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._database_name: Optional[str] = None

    async def connect(self, settings: Settings = default_settings) -> None:
        if self._client is not None:
            return
        if not settings.mongodb_atlas_uri:
            raise RuntimeError("WMS_MONGODB_ATLAS_URI is required for the mongodb session backend")

        client = self._client_factory(settings.mongodb_atlas_uri)
        try:
            await client.admin.command("ping")
        except Exception as e:
            client.close()
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise
        self._client = client
        self._database_name = settings.database_name
        logger.info(f"Connected to MongoDB [{settings.database_name}]")

    async def session_collection(self, settings: Settings = default_settings) -> AsyncIOMotorCollection:
        await self.connect(settings)
        return self._client[self._database_name][settings.session_collection]

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._database_name = None
        logger.info("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        return self._client is not None


# ── Module-level singleton ──────────────────────────────────────
db_manager = DatabaseManager()

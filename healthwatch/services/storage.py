# durable key-value slots for the serialized report sequence
# file slot for single-device installs, mongodb slot (motor) for hosted ones
# slots raise on failure; ReportStore decides what to swallow

import asyncio
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from healthwatch.config import Settings

logger = logging.getLogger(__name__)


class KeyValueSlot(ABC):
    """a durable slot holding raw json text under a fixed key"""

    async def connect(self):
        pass

    async def close(self):
        pass

    @abstractmethod
    async def read(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        ...


class FileSlot(KeyValueSlot):
    """one json file per key inside a data directory.
    file i/o runs in a worker thread so the event loop keeps serving requests."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def read(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read_sync, key)

    async def write(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write_sync, key, value)

    def _read_sync(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write_sync(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # write beside the target then rename, so a crash never leaves half a file
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self.path_for(key))
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class MongoSlot(KeyValueSlot):
    """one document per key: {_id: key, value: json text, updated_at}"""

    def __init__(self, uri: str, database: str, collection: str = "key_value"):
        self.uri = uri
        self.database_name = database
        self.collection_name = collection
        self.client: Optional[AsyncIOMotorClient] = None
        self.collection: Optional[AsyncIOMotorCollection] = None

    async def connect(self):
        """establish connection to mongodb"""
        if self.client is not None:
            return

        logger.info(f"Connecting to MongoDB database: {self.database_name}")
        self.client = AsyncIOMotorClient(self.uri)
        self.collection = self.client[self.database_name][self.collection_name]

        # verify connection
        await self.client.admin.command("ping")
        logger.info("MongoDB connection established")

    async def close(self):
        """close mongodb connection"""
        if self.client:
            self.client.close()
            self.client = None
            self.collection = None
            logger.info("MongoDB connection closed")

    async def read(self, key: str) -> Optional[str]:
        doc = await self.collection.find_one({"_id": key})
        if not doc:
            return None
        return doc.get("value")

    async def write(self, key: str, value: str) -> None:
        await self.collection.update_one(
            {"_id": key},
            {"$set": {"value": value, "updated_at": datetime.now(timezone.utc).isoformat()}},
            upsert=True,
        )


def build_slot(settings: Settings) -> KeyValueSlot:
    """pick the slot backend named by STORAGE_BACKEND"""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "file":
        return FileSlot(settings.DATA_DIR)
    if backend == "mongo":
        return MongoSlot(settings.MONGODB_URI, settings.MONGODB_DATABASE, settings.MONGODB_COLLECTION)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r} (expected 'file' or 'mongo')")

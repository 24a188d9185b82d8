"""Cache records for generated feeds, stored on disk or in Redis."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from castfeed.config import Settings
from castfeed.errors import CacheReadFailure, CacheWriteFailure

from .models import PodcastFeedConfiguration

logger = logging.getLogger(__name__)


class CacheRecord(BaseModel):
    """Snapshot of a previous generation, used to skip redundant work."""

    config: PodcastFeedConfiguration
    feed: str
    item_count: int


def cache_file_name(target_path: str) -> str:
    """Derive the cache record name for a feed's target path."""
    return target_path.replace("/", "-").replace("\\", "-")


class CacheStore(ABC):
    """Abstract storage for feed cache records."""

    @abstractmethod
    async def load(self, name: str) -> CacheRecord | None:
        """
        Load a cache record.

        Args:
            name: Cache record name from cache_file_name()

        Returns:
            The stored record, or None if nothing is stored under that name

        Raises:
            CacheReadFailure: If a record exists but cannot be read or decoded
        """
        pass

    @abstractmethod
    async def save(self, name: str, record: CacheRecord) -> None:
        """
        Replace the cache record stored under a name.

        Args:
            name: Cache record name from cache_file_name()
            record: The record to store

        Raises:
            CacheWriteFailure: If the record cannot be persisted
        """
        pass


class FileCacheStore(CacheStore):
    """Cache records kept as JSON files in a cache directory."""

    def __init__(self, base_path: Path | str):
        self.base_path = Path(base_path)

    def path_for(self, name: str) -> Path:
        """Get the file path for a cache record name."""
        file_path = self.base_path / name

        # Ensure we're not reading or writing outside the cache directory
        if not file_path.resolve().is_relative_to(self.base_path.resolve()):
            raise ValueError(f"Invalid cache record name: {name}")

        return file_path

    async def load(self, name: str) -> CacheRecord | None:
        """Load a cache record from its JSON file."""
        file_path = self.path_for(name)

        if not file_path.exists():
            return None

        try:
            return CacheRecord.model_validate_json(file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise CacheReadFailure(f"Could not read cache record {file_path}") from e

    async def save(self, name: str, record: CacheRecord) -> None:
        """Write a cache record, replacing any previous file atomically."""
        file_path = self.path_for(name)
        tmp_path = file_path.with_name(f".{file_path.name}.tmp")

        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(record.model_dump_json(), encoding="utf-8")
            os.replace(tmp_path, file_path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise CacheWriteFailure(f"Could not write cache record {file_path}") from e

        logger.debug(f"Saved cache record to {file_path}")


class RedisCacheStore(CacheStore):
    """Cache records kept as JSON strings in Redis."""

    def __init__(self, redis: Redis, prefix: str = "castfeed:cache:"):
        self.redis = redis
        self.prefix = prefix

    def key(self, name: str) -> str:
        """Generate Redis key for a cache record."""
        return f"{self.prefix}{name}"

    async def load(self, name: str) -> CacheRecord | None:
        """Load a cache record from Redis."""
        try:
            cached_data = await self.redis.get(self.key(name))
        except RedisError as e:
            raise CacheReadFailure(f"Could not read cache record {self.key(name)}") from e

        if cached_data is None:
            return None

        try:
            return CacheRecord.model_validate_json(cached_data)
        except ValidationError as e:
            raise CacheReadFailure(f"Could not decode cache record {self.key(name)}") from e

    async def save(self, name: str, record: CacheRecord) -> None:
        """Store a cache record in Redis without expiry."""
        try:
            await self.redis.set(self.key(name), record.model_dump_json())
        except RedisError as e:
            raise CacheWriteFailure(f"Could not write cache record {self.key(name)}") from e

        logger.debug(f"Saved cache record to Redis key {self.key(name)}")


_redis_clients: dict[str, Redis] = {}


def get_redis(redis_url: str) -> Redis:
    """Get the shared Redis client for a URL, creating it on first use."""
    if redis_url not in _redis_clients:
        _redis_clients[redis_url] = Redis.from_url(redis_url)
    return _redis_clients[redis_url]


async def close_redis() -> None:
    """Close every shared Redis client."""
    while _redis_clients:
        _, client = _redis_clients.popitem()
        await client.aclose()


def get_cache_store(settings: Settings) -> CacheStore:
    """
    Factory function to get the configured cache store.

    Redis stores share one client per URL, so repeated generations reuse
    the same connection pool until close_redis() is called.

    Args:
        settings: Engine settings

    Returns:
        Configured cache store instance
    """
    if settings.cache_backend == "file":
        return FileCacheStore(settings.cache_dir)
    elif settings.cache_backend == "redis":
        return RedisCacheStore(
            get_redis(settings.redis_url), prefix=settings.cache_key_prefix
        )
    else:
        raise ValueError(f"Unknown cache backend: {settings.cache_backend}")

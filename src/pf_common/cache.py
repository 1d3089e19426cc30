"""Cache-aside store for read-heavy, rarely-changing queries.

fetch(key, loader, adapter):
  1. GET key: a value that decodes is returned without touching PostgreSQL
  2. absent or malformed → await loader()
  3. SET the encoded loader result (no expiry unless CACHE_TTL_SECONDS is set)
  4. return the loader result

Redis is an optimisation only. Lookup, populate and invalidate failures are
logged and degrade to the loader path; they never reach the caller. Loader
errors propagate unchanged.

There is no lock around miss → populate: two concurrent misses for one key
both load and both SET (last write wins, the values are equivalent).
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import redis.asyncio as aioredis
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError
from redis.exceptions import RedisError

from config.settings import settings
from src.pf_common.redis_client import get_redis

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Key prefixes: "<entity>:<filter>" + ":<id>"
TRANSACTIONS_BY_USER = "transactions:user"
TRANSACTIONS_BY_ACCOUNT = "transactions:account"
TRANSACTIONS_BY_CATEGORY = "transactions:category"

_MISS = object()


def cache_key(kind: str, param: int | str) -> str:
    """Deterministic key: cache_key("transactions:category", 7) -> "transactions:category:7"."""
    return f"{kind}:{param}"


class CacheAsideStore:
    """Wraps an optional Redis client. client=None means caching is disabled."""

    def __init__(
        self,
        client: aioredis.Redis | None,
        ttl_seconds: int | None = None,
        invalidate_on_write: bool = True,
    ) -> None:
        self._client = client
        self._ttl = ttl_seconds
        self._invalidate_on_write = invalidate_on_write

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def fetch(
        self,
        key: str,
        loader: Callable[[], Awaitable[T]],
        adapter: TypeAdapter[T],
    ) -> T:
        cached = await self._lookup(key, adapter)
        if cached is not _MISS:
            return cached  # type: ignore[return-value]

        value = await loader()
        await self._populate(key, value, adapter)
        return value

    async def invalidate(self, *keys: str) -> None:
        """Drop keys after a write. Best effort, like populate.

        With invalidate_on_write=False entries are only replaced on expiry
        (CACHE_TTL_SECONDS) or eviction, so readers may see stale listings.
        """
        if self._client is None or not self._invalidate_on_write or not keys:
            return
        try:
            await self._client.delete(*keys)
            logger.debug("Cache invalidated: %s", ", ".join(keys))
        except RedisError as exc:
            logger.warning("Cache invalidate failed for %s: %s", keys, exc)

    async def _lookup(self, key: str, adapter: TypeAdapter[T]) -> object:
        if self._client is None:
            return _MISS
        try:
            raw = await self._client.get(key)
        except RedisError as exc:
            logger.warning("Cache lookup failed for key=%s: %s", key, exc)
            return _MISS
        except UnicodeDecodeError:
            # Client decodes responses; bytes that are not UTF-8 never reach the adapter.
            logger.warning("Malformed cache entry ignored: key=%s", key)
            return _MISS

        if raw is None:
            logger.debug("Cache miss: key=%s", key)
            return _MISS

        try:
            value = adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Malformed cache entry ignored: key=%s", key)
            return _MISS

        logger.debug("Cache hit: key=%s", key)
        return value

    async def _populate(self, key: str, value: T, adapter: TypeAdapter[T]) -> None:
        if self._client is None:
            return
        try:
            payload = adapter.dump_json(value)
        except PydanticSerializationError as exc:
            logger.warning("Cache encode failed for key=%s: %s", key, exc)
            return
        try:
            await self._client.set(key, payload, ex=self._ttl)
            logger.debug("Cache populated: key=%s", key)
        except RedisError as exc:
            logger.warning("Cache populate failed for key=%s: %s", key, exc)


async def get_cache_store() -> CacheAsideStore:
    """FastAPI dependency: cache store over the shared Redis pool."""
    if not settings.CACHE_ENABLED:
        return CacheAsideStore(None)
    return CacheAsideStore(
        await get_redis(),
        settings.CACHE_TTL_SECONDS,
        settings.CACHE_INVALIDATE_ON_WRITE,
    )

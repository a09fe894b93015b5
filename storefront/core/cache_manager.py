"""
Tag-based cache for Storefront API read responses.

Every cached entry is associated with one or more cache tags. Invalidating
a tag bumps its generation counter and evicts every entry associated with
it. Inserts carry the generation snapshot taken before the network call
and are dropped when any of their tags moved on in the meantime, so no
reader observes data older than the last invalidation of its tags.

Backends:
- MemoryTagCache: in-process, default
- RedisTagCache: shared across workers (redis.asyncio)
- NullTagCache: caching disabled
"""

import hashlib
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from redis.exceptions import WatchError

from storefront.core.cache_tags import CacheTag, normalize_tags
from storefront.core.config import Settings, get_settings
from storefront.utils.error_handler import AppException, ErrorCode

logger = logging.getLogger(__name__)


def build_cache_key(document: str, variables: Optional[Dict[str, Any]] = None) -> str:
    """
    Build a stable cache key for a query document and its variables.

    Args:
        document: GraphQL document
        variables: Query variables

    Returns:
        str: Hex digest identifying the request
    """
    raw = json.dumps({"query": document, "variables": variables or {}}, sort_keys=True, default=str)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class TagCache(ABC):
    """Cache abstraction shared by the transport and the revalidation endpoint."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached body for key, or None."""

    @abstractmethod
    async def snapshot(self, tags: Iterable) -> Dict[str, int]:
        """Return the current generation of every tag."""

    @abstractmethod
    async def set(
        self,
        key: str,
        value: Any,
        tags: Iterable,
        snapshot: Dict[str, int],
        ttl_seconds: Optional[int] = None,
    ) -> bool:
        """Store value under key unless a tag was invalidated after snapshot."""

    @abstractmethod
    async def invalidate(self, tags: Iterable) -> int:
        """Evict every entry associated with tags. Returns evicted entry count."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop every entry and bump every tag generation."""

    @abstractmethod
    def stats(self) -> Dict[str, Any]:
        """Return backend statistics."""

    async def close(self) -> None:
        """Release backend resources."""
        return None


class MemoryTagCache(TagCache):
    """
    In-process tag cache.

    None of the methods await between reading and writing shared state,
    so each one runs atomically on the event loop.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._tag_keys: Dict[str, Set[str]] = {}
        self._generations: Dict[str, int] = {}
        self._hits = 0
        self._misses = 0
        self._dropped_inserts = 0

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        value, expires_at = entry
        if expires_at is not None and time.monotonic() > expires_at:
            self._evict(key)
            self._misses += 1
            return None

        self._hits += 1
        return value

    async def snapshot(self, tags: Iterable) -> Dict[str, int]:
        return {tag: self._generations.setdefault(tag, 0) for tag in normalize_tags(tags)}

    async def set(
        self,
        key: str,
        value: Any,
        tags: Iterable,
        snapshot: Dict[str, int],
        ttl_seconds: Optional[int] = None,
    ) -> bool:
        tag_list = normalize_tags(tags)
        if any(self._generations.get(tag, 0) != snapshot.get(tag, 0) for tag in tag_list):
            self._dropped_inserts += 1
            logger.debug(f"Dropping stale cache insert for key {key[:12]}")
            return False

        expires_at = time.monotonic() + ttl_seconds if ttl_seconds else None
        self._entries[key] = (value, expires_at)
        for tag in tag_list:
            self._tag_keys.setdefault(tag, set()).add(key)
        return True

    async def invalidate(self, tags: Iterable) -> int:
        evicted = 0
        for tag in normalize_tags(tags):
            self._generations[tag] = self._generations.get(tag, 0) + 1
            for key in self._tag_keys.pop(tag, set()):
                if key in self._entries:
                    self._evict(key)
                    evicted += 1
        return evicted

    async def clear(self) -> None:
        self._entries.clear()
        self._tag_keys.clear()
        for tag in self._generations:
            self._generations[tag] += 1

    def stats(self) -> Dict[str, Any]:
        return {
            "backend": "memory",
            "entries": len(self._entries),
            "tags": {tag: len(keys) for tag, keys in self._tag_keys.items()},
            "generations": dict(self._generations),
            "hits": self._hits,
            "misses": self._misses,
            "dropped_inserts": self._dropped_inserts,
        }

    def _evict(self, key: str) -> None:
        self._entries.pop(key, None)
        for keys in self._tag_keys.values():
            keys.discard(key)


class RedisTagCache(TagCache):
    """
    Redis-backed tag cache.

    Layout (all keys under the configured prefix):
        {prefix}:entry:{key}  JSON body
        {prefix}:tag:{tag}    set of entry keys
        {prefix}:gen:{tag}    generation counter

    Inserts WATCH the generation keys of their tags; a concurrent
    invalidation aborts the transaction and the insert is dropped.
    """

    def __init__(self, client, prefix: str = "storefront"):
        self.client = client
        self.prefix = prefix
        self._dropped_inserts = 0

    def _entry_key(self, key: str) -> str:
        return f"{self.prefix}:entry:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self.prefix}:tag:{tag}"

    def _gen_key(self, tag: str) -> str:
        return f"{self.prefix}:gen:{tag}"

    async def get(self, key: str) -> Optional[Any]:
        raw = await self.client.get(self._entry_key(key))
        if raw is None:
            return None
        return json.loads(raw)

    async def snapshot(self, tags: Iterable) -> Dict[str, int]:
        tag_list = normalize_tags(tags)
        if not tag_list:
            return {}
        values = await self.client.mget([self._gen_key(tag) for tag in tag_list])
        return {tag: int(value or 0) for tag, value in zip(tag_list, values)}

    async def set(
        self,
        key: str,
        value: Any,
        tags: Iterable,
        snapshot: Dict[str, int],
        ttl_seconds: Optional[int] = None,
    ) -> bool:
        tag_list = normalize_tags(tags)
        gen_keys = [self._gen_key(tag) for tag in tag_list]
        payload = json.dumps(value, default=str)

        async with self.client.pipeline(transaction=True) as pipe:
            try:
                if gen_keys:
                    await pipe.watch(*gen_keys)
                    current = await pipe.mget(gen_keys)
                    if any(int(v or 0) != snapshot.get(tag, 0) for tag, v in zip(tag_list, current)):
                        await pipe.unwatch()
                        self._dropped_inserts += 1
                        return False

                pipe.multi()
                pipe.set(self._entry_key(key), payload, ex=ttl_seconds)
                for tag in tag_list:
                    pipe.sadd(self._tag_key(tag), key)
                await pipe.execute()
                return True
            except WatchError:
                self._dropped_inserts += 1
                logger.debug(f"Cache insert for key {key[:12]} lost race with invalidation")
                return False

    async def invalidate(self, tags: Iterable) -> int:
        evicted = 0
        for tag in normalize_tags(tags):
            # Bump first so in-flight inserts fail their WATCH
            await self.client.incr(self._gen_key(tag))
            members = await self.client.smembers(self._tag_key(tag))
            if members:
                evicted += await self.client.delete(*[self._entry_key(member) for member in members])
            await self.client.delete(self._tag_key(tag))
        return evicted

    async def clear(self) -> None:
        # Generation keys are bumped, never deleted
        for tag in normalize_tags(CacheTag):
            await self.client.incr(self._gen_key(tag))

        for kind in ("entry", "tag"):
            cursor = 0
            while True:
                cursor, keys = await self.client.scan(cursor=cursor, match=f"{self.prefix}:{kind}:*", count=500)
                if keys:
                    await self.client.delete(*keys)
                if cursor == 0:
                    break

    def stats(self) -> Dict[str, Any]:
        return {"backend": "redis", "prefix": self.prefix, "dropped_inserts": self._dropped_inserts}

    async def close(self) -> None:
        from storefront.core.redis_client import close_redis

        await close_redis()


class NullTagCache(TagCache):
    """Cache that stores nothing."""

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def snapshot(self, tags: Iterable) -> Dict[str, int]:
        return {}

    async def set(self, key, value, tags, snapshot, ttl_seconds=None) -> bool:
        return False

    async def invalidate(self, tags: Iterable) -> int:
        return 0

    async def clear(self) -> None:
        return None

    def stats(self) -> Dict[str, Any]:
        return {"backend": "none"}


# Global cache instance
_tag_cache: Optional[TagCache] = None


def create_tag_cache(current: Optional[Settings] = None) -> TagCache:
    """
    Build the cache backend selected by CACHE_BACKEND.

    Args:
        current: Settings to use (defaults to get_settings())

    Returns:
        TagCache: Configured backend
    """
    current = current or get_settings()

    if current.CACHE_BACKEND == "redis":
        from storefront.core.redis_client import get_redis_client

        return RedisTagCache(get_redis_client(), prefix=current.CACHE_KEY_PREFIX)
    if current.CACHE_BACKEND == "none":
        return NullTagCache()
    return MemoryTagCache()


async def initialize_cache() -> TagCache:
    """
    Initialize the global tag cache.
    """
    global _tag_cache

    settings = get_settings()
    logger.info(f"Initializing tag cache (backend={settings.CACHE_BACKEND})")

    if settings.CACHE_BACKEND == "redis":
        from storefront.core.redis_client import test_redis_connection

        if not await test_redis_connection():
            raise AppException(
                message="Redis cache backend is not reachable",
                error_code=ErrorCode.CACHE_BACKEND_FAILED,
                status_code=503,
            )

    _tag_cache = create_tag_cache(settings)
    logger.info(f"✅ Tag cache ready: {type(_tag_cache).__name__}")
    return _tag_cache


def get_tag_cache() -> TagCache:
    """Return the global tag cache, creating an in-memory one if needed."""
    global _tag_cache

    if _tag_cache is None:
        _tag_cache = create_tag_cache()
    return _tag_cache


def set_tag_cache(cache: Optional[TagCache]) -> None:
    """Replace the global tag cache (used by tests and the lifespan)."""
    global _tag_cache
    _tag_cache = cache


async def close_cache() -> None:
    """Close the global cache backend."""
    global _tag_cache

    if _tag_cache is not None:
        await _tag_cache.close()
        _tag_cache = None
        logger.info("Tag cache closed")

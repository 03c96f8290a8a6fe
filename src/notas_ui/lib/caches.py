"""
Disk-based caching with TTL support.

Lookups that are expensive to repeat but change rarely (document
configurations for an invoice, for instance) are stored with the diskcache
library, which is thread-safe and process-safe.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

import diskcache

T = TypeVar("T")

_MISSING = object()


@dataclass
class CacheEntry:
    """
    Wrapper around a cached value.

    Attributes:
        value: The cached value.
        hit: True when the value came from disk rather than the loader.
    """

    value: Any
    hit: bool = False


class DiskCache:
    """
    Disk-based cache with per-key expiration.

    Attributes:
        cache_dir: Path to the cache directory.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self.cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(str(self.cache_dir))

    async def get_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[T]],
        expire: int | None = None,
    ) -> CacheEntry:
        """
        Return the cached value for `key`, awaiting `loader` on a miss.

        The loaded value is stored only when the loader returns normally, so
        a failed lookup is retried on the next call.

        Args:
            key: Cache key string.
            loader: Coroutine factory producing the value.
            expire: TTL in seconds. None means no expiration.
        """
        cached = self._cache.get(key, default=_MISSING)
        if cached is not _MISSING:
            return CacheEntry(value=cached, hit=True)

        value = await loader()
        self._cache.set(key, value, expire=expire)
        return CacheEntry(value=value)

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def close(self) -> None:
        self._cache.close()

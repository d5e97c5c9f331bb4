"""In-process, time-expiring plant name cache."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .keys import CacheKey

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300.0


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached name and the instant it was written."""

    name: str
    cached_at: float


class NameCache:
    """
    Time-expiring key -> name store shared by every in-flight resolution.

    Freshness is enforced on read: an entry whose age reaches the TTL is
    never returned, whether or not the sweep has removed it yet. The sweep
    only bounds memory for ids that are never asked for again.

    All operations are plain dict operations with no await inside, so they
    are atomic with respect to other coroutines on the same loop.

    Usage:
        async with NameCache(ttl=300) as cache:
            cache.put(CacheKeys.plant_name(8453, 42), "Sunflower")
            cache.get(CacheKeys.plant_name(8453, 42))
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float | None = None,
    ) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self._ttl = ttl
        self._clock = clock
        self._sweep_interval = sweep_interval if sweep_interval is not None else ttl
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._sweep_task: asyncio.Task[None] | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def is_running(self) -> bool:
        """Whether the periodic sweep is scheduled."""
        return self._sweep_task is not None and not self._sweep_task.done()

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.cached_at < self._ttl

    def get(self, key: CacheKey) -> str | None:
        """Get a name if present and younger than the TTL."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._is_fresh(entry, self._clock()):
            return None
        return entry.name

    def put(self, key: CacheKey, name: str) -> None:
        """Insert or replace the name for a key, stamped with the current time."""
        self._entries[key] = CacheEntry(name=name, cached_at=self._clock())

    def get_many(self, keys: Iterable[CacheKey]) -> dict[CacheKey, str]:
        """Get fresh names for several keys; missing or stale keys are omitted."""
        now = self._clock()
        result = {}
        for key in keys:
            entry = self._entries.get(key)
            if entry is not None and self._is_fresh(entry, now):
                result[key] = entry.name
        return result

    def put_many(self, mapping: dict[CacheKey, str]) -> None:
        """Set several names at once, all stamped with the same instant."""
        now = self._clock()
        for key, name in mapping.items():
            self._entries[key] = CacheEntry(name=name, cached_at=now)

    def delete(self, key: CacheKey) -> bool:
        """Delete a key from cache."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def sweep(self) -> int:
        """
        Remove every expired entry.

        Each entry is judged against its own timestamp at the moment it is
        inspected, so an entry refreshed by a concurrent write survives.

        Returns:
            Number of entries removed
        """
        removed = 0
        for key in list(self._entries):
            entry = self._entries.get(key)
            if entry is None:
                continue
            if not self._is_fresh(entry, self._clock()):
                del self._entries[key]
                removed += 1

        if removed:
            logger.info(
                f"Cleaned {removed} expired entries from plant name cache. "
                f"Cache size: {len(self._entries)}"
            )
        return removed

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                self.sweep()
            except Exception:
                logger.exception("Plant name cache sweep failed")

    def start(self) -> None:
        """Schedule the periodic sweep on the running event loop."""
        if self.is_running:
            return
        self._sweep_task = asyncio.get_running_loop().create_task(
            self._sweep_forever(),
            name="plant-name-cache-sweep",
        )
        logger.debug(f"Plant name cache sweep scheduled every {self._sweep_interval}s")

    async def close(self) -> None:
        """Stop the periodic sweep and drop every entry."""
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            try:
                await self._sweep_task
            except asyncio.CancelledError:
                pass
            self._sweep_task = None
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, CacheKey) and self.get(key) is not None

    async def __aenter__(self) -> NameCache:
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

"""In-memory cache for the parsed ECO move index.

Holds a single snapshot of the ECO table with TTL expiration. A miss or
an expired snapshot triggers one fetch + parse; concurrent callers share
that refresh and see the same snapshot or the same error.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from ..exceptions import CacheError, FetchFailedError, ParseFailedError
from ..models.eco import CacheStats, MoveIndex
from .table_parser import parse_eco_table

# Configure logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A published move index snapshot with its creation time."""
    index: MoveIndex
    created_at: float

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, now: float, ttl: float) -> bool:
        return self.age(now) >= ttl


class MoveIndexCache:
    """Single-slot TTL cache for the ECO move index.

    Slot states: empty, populating (a refresh task is in flight), fresh,
    and expired. An expired snapshot is dropped before refreshing and a
    failed refresh leaves the slot empty, so stale data is never served.
    """

    DEFAULT_TTL_SECONDS = 180  # 3 minutes

    def __init__(
        self,
        fetch: Callable[[], Awaitable[bytes]],
        parse: Callable[[bytes], MoveIndex] = parse_eco_table,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            fetch: Coroutine function returning the raw upstream document.
            parse: Converts the raw document into a move index.
            ttl_seconds: Time-to-live of a snapshot in seconds.
            clock: Monotonic time source.
        """
        self._fetch = fetch
        self._parse = parse
        self._ttl = ttl_seconds
        self._clock = clock
        self._entry: Optional[CacheEntry] = None
        self._refresh_task: Optional[asyncio.Task] = None
        self._hits = 0
        self._misses = 0
        self._refreshes = 0
        self._failed_refreshes = 0
        logger.info(f"Move index cache initialized with TTL={ttl_seconds}s")

    async def get(self) -> MoveIndex:
        """Get the current move index, refreshing it if empty or expired.

        Returns:
            The current immutable move index.

        Raises:
            CacheError: If the refresh failed (FetchFailedError or ParseFailedError).
        """
        entry = self._entry
        if entry is not None:
            now = self._clock()
            if not entry.is_expired(now, self._ttl):
                self._hits += 1
                logger.debug(f"Cache HIT: {len(entry.index)} codes (age={entry.age(now):.1f}s)")
                return entry.index
            logger.info(f"Cache EXPIRED: age={entry.age(now):.1f}s, discarding snapshot")
            self._entry = None

        self._misses += 1
        if self._refresh_task is None:
            logger.info("Cache MISS: refreshing move index from upstream")
            self._refresh_task = asyncio.create_task(self._refresh())
        else:
            logger.debug("Cache MISS: joining in-flight refresh")

        return await asyncio.shield(self._refresh_task)

    async def _refresh(self) -> MoveIndex:
        """Run the fetch + parse pipeline and publish the new snapshot."""
        try:
            try:
                raw = await self._fetch()
            except CacheError:
                raise
            except Exception as e:
                raise FetchFailedError("ECO table", repr(e)) from e

            try:
                index = self._parse(raw)
            except CacheError:
                raise
            except Exception as e:
                raise ParseFailedError(f"Unexpected error parsing ECO table: {e!r}") from e
        except CacheError as e:
            self._failed_refreshes += 1
            logger.error(f"Move index refresh failed: {e}")
            raise
        finally:
            # Waiters hold the task itself; the slot only admits new refreshes
            self._refresh_task = None

        self._entry = CacheEntry(index=index, created_at=self._clock())
        self._refreshes += 1
        logger.info(f"Cache SET: {len(index)} codes")
        return index

    def invalidate(self) -> bool:
        """Drop the current snapshot so the next get() refreshes.

        Returns:
            True if a snapshot was dropped.
        """
        dropped = self._entry is not None
        self._entry = None
        if dropped:
            logger.info("Cache invalidated")
        return dropped

    @property
    def is_refreshing(self) -> bool:
        """True while a refresh is in flight."""
        return self._refresh_task is not None

    @property
    def stats(self) -> CacheStats:
        """Get cache statistics."""
        entry = self._entry
        now = self._clock()
        if entry is not None and entry.is_expired(now, self._ttl):
            entry = None
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            refreshes=self._refreshes,
            failed_refreshes=self._failed_refreshes,
            populated=entry is not None,
            size=len(entry.index) if entry else 0,
            age_seconds=round(entry.age(now), 3) if entry else None,
            ttl_seconds=self._ttl,
        )

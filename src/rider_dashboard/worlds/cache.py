"""
Month-keyed cache for parsed world schedules.

Entries live for a fixed TTL and are never served once stale. Replacement is
a single assignment under a lock, so readers see either the old entry or the
new one. Concurrent refreshes for the same month are collapsed into one
upstream fetch.
"""

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


DEFAULT_TTL_SECONDS = 6 * 60 * 60

MonthKey = Tuple[int, int]
Schedule = Mapping[str, Tuple[str, ...]]
ScheduleLoader = Callable[[int, int], Awaitable[Mapping[str, List[str]]]]


@dataclass(frozen=True)
class ScheduleCacheEntry:
    fetched_at: float
    schedule: Schedule


def _freeze(schedule: Mapping[str, List[str]]) -> Schedule:
    return MappingProxyType({day: tuple(worlds) for day, worlds in schedule.items()})


class ScheduleCache:
    """
    Parsed schedules keyed by ``(year, month)``.

    Args:
        ttl_seconds: How long an entry stays fresh
        clock: Monotonic seconds source; inject a fake in tests
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[MonthKey, ScheduleCacheEntry] = {}
        self._lock = threading.Lock()
        self._refresh_locks: Dict[MonthKey, asyncio.Lock] = {}

    @staticmethod
    def cache_key(year: int, month: int) -> MonthKey:
        return (year, month)

    def _is_fresh(self, entry: ScheduleCacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self.ttl_seconds

    def get(self, year: int, month: int) -> Optional[Schedule]:
        """Return the cached schedule, or None when absent or stale."""
        entry = self._entries.get(self.cache_key(year, month))
        if entry is None or not self._is_fresh(entry):
            return None
        return entry.schedule

    def set(self, year: int, month: int, schedule: Mapping[str, List[str]]) -> Schedule:
        entry = ScheduleCacheEntry(fetched_at=self._clock(), schedule=_freeze(schedule))
        with self._lock:
            self._entries[self.cache_key(year, month)] = entry
        return entry.schedule

    def invalidate(self, year: Optional[int] = None, month: Optional[int] = None) -> None:
        """Drop one month, or everything when no month is given."""
        with self._lock:
            if year is None or month is None:
                self._entries.clear()
            else:
                self._entries.pop(self.cache_key(year, month), None)

    def __len__(self) -> int:
        return len(self._entries)

    def _refresh_lock(self, key: MonthKey) -> asyncio.Lock:
        with self._lock:
            lock = self._refresh_locks.get(key)
            if lock is None:
                lock = self._refresh_locks[key] = asyncio.Lock()
            return lock

    async def get_or_load(self, year: int, month: int, loader: ScheduleLoader) -> Schedule:
        """
        Return a fresh schedule, calling ``loader(year, month)`` on a miss.

        Callers waiting on the same month reuse the first caller's result.
        Loader errors propagate and leave the cache untouched.
        """
        cached = self.get(year, month)
        if cached is not None:
            return cached

        async with self._refresh_lock(self.cache_key(year, month)):
            cached = self.get(year, month)
            if cached is not None:
                return cached

            logger.info(f"Refreshing world schedule for {year}-{month:02d}")
            schedule = await loader(year, month)
            return self.set(year, month, schedule)

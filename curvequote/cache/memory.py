"""In-process account cache with per-entry TTL.

Last write wins; an expired entry reads as a miss and is dropped. Reads and
writes never await, so population cannot block a concurrent read.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from curvequote.models.state import AccountData

DEFAULT_CACHE_TTL_MS = 10_000


class AccountCache(Protocol):
    async def get(self, key: str) -> AccountData | None: ...

    async def set(self, key: str, value: AccountData, ttl_ms: int = DEFAULT_CACHE_TTL_MS) -> None: ...

    async def clear(self, key: str | None = None) -> None: ...


@dataclass(frozen=True)
class _Entry:
    value: AccountData
    expires_at: float


class MemoryAccountCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> AccountData | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._entries.pop(key, None)
            return None
        return entry.value

    async def set(self, key: str, value: AccountData, ttl_ms: int = DEFAULT_CACHE_TTL_MS) -> None:
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + ttl_ms / 1000)

    async def clear(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

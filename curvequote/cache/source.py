from loguru import logger

from curvequote.cache.memory import DEFAULT_CACHE_TTL_MS, AccountCache, MemoryAccountCache
from curvequote.models.state import AccountData
from curvequote.rpc.client import AccountDataSource


class CachedAccountSource:
    """Memoizing wrapper around an account data source.

    The cache is never the source of truth: ``force_refresh`` always goes
    to the wrapped source and overwrites the entry.
    """

    def __init__(
        self,
        source: AccountDataSource,
        cache: AccountCache | None = None,
        ttl_ms: int = DEFAULT_CACHE_TTL_MS,
    ) -> None:
        self._source = source
        self._cache = cache if cache is not None else MemoryAccountCache()
        self._ttl_ms = ttl_ms

    async def get_account(self, address: str, force_refresh: bool = False) -> AccountData:
        if not force_refresh:
            cached = await self._cache.get(address)
            if cached is not None:
                logger.debug(f"[CACHE] Hit {address[:12]}")
                return cached

        account = await self._source.get_account(address)
        await self._cache.set(address, account, self._ttl_ms)
        return account

    async def invalidate(self, address: str | None = None) -> None:
        await self._cache.clear(address)

"""Redis-backed account cache, shared across processes.

Entries are JSON (owner, lamports, base64 data) stored with ``PX`` expiry,
so Redis itself turns expired entries into misses.
"""

import base64
import json

from loguru import logger
from redis.asyncio import Redis

from curvequote.cache.memory import DEFAULT_CACHE_TTL_MS
from curvequote.models.state import AccountData

KEY_PREFIX = "curvequote:account:"


def create_redis(redis_url: str) -> Redis:
    """New client for ``redis_url``; the caller owns and closes it."""
    return Redis.from_url(redis_url, decode_responses=True)


class RedisAccountCache:
    def __init__(self, redis: Redis, prefix: str = KEY_PREFIX) -> None:
        self._redis = redis
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> AccountData | None:
        raw = await self._redis.get(self._key(key))
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
            return AccountData(
                address=key,
                owner=payload["owner"],
                data=base64.b64decode(payload["data"]),
                lamports=payload.get("lamports", 0),
            )
        except (ValueError, KeyError) as e:
            logger.warning(f"[CACHE] Corrupt entry for {key[:12]}, treating as miss: {e}")
            return None

    async def set(self, key: str, value: AccountData, ttl_ms: int = DEFAULT_CACHE_TTL_MS) -> None:
        payload = json.dumps(
            {
                "owner": value.owner,
                "lamports": value.lamports,
                "data": base64.b64encode(value.data).decode(),
            }
        )
        await self._redis.set(self._key(key), payload, px=ttl_ms)

    async def clear(self, key: str | None = None) -> None:
        if key is not None:
            await self._redis.delete(self._key(key))
            return
        keys = [k async for k in self._redis.scan_iter(match=f"{self._prefix}*")]
        if keys:
            await self._redis.delete(*keys)

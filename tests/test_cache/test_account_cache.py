"""Tests for in-memory and Redis account caches and the caching source."""

import base64
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from curvequote.cache.memory import MemoryAccountCache
from curvequote.cache.redis import KEY_PREFIX, RedisAccountCache
from curvequote.cache.source import CachedAccountSource
from curvequote.models.state import AccountData

from conftest import FakeAccountSource


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _account(data: bytes = b"\x01\x02\x03") -> AccountData:
    return AccountData(address="Acct", owner="Owner", data=data, lamports=5)


class TestMemoryCache:
    @pytest.mark.asyncio
    async def test_hit_before_expiry(self) -> None:
        clock = FakeClock()
        cache = MemoryAccountCache(clock=clock)
        await cache.set("Acct", _account(), ttl_ms=10_000)
        clock.now += 9.999
        assert await cache.get("Acct") == _account()

    @pytest.mark.asyncio
    async def test_miss_at_expiry(self) -> None:
        clock = FakeClock()
        cache = MemoryAccountCache(clock=clock)
        await cache.set("Acct", _account(), ttl_ms=10_000)
        clock.now += 10.0
        assert await cache.get("Acct") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_last_write_wins(self) -> None:
        cache = MemoryAccountCache()
        await cache.set("Acct", _account(b"\x01"))
        await cache.set("Acct", _account(b"\x02"))
        assert (await cache.get("Acct")).data == b"\x02"

    @pytest.mark.asyncio
    async def test_clear_one_and_all(self) -> None:
        cache = MemoryAccountCache()
        await cache.set("A", _account())
        await cache.set("B", _account())
        await cache.clear("A")
        assert await cache.get("A") is None
        assert await cache.get("B") is not None
        await cache.clear()
        assert len(cache) == 0


class TestRedisCache:
    @pytest.mark.asyncio
    async def test_set_uses_px_expiry(self) -> None:
        redis = AsyncMock()
        cache = RedisAccountCache(redis)
        await cache.set("Acct", _account(), ttl_ms=10_000)

        key, raw = redis.set.call_args.args
        assert key == f"{KEY_PREFIX}Acct"
        assert redis.set.call_args.kwargs["px"] == 10_000
        assert json.loads(raw)["data"] == base64.b64encode(b"\x01\x02\x03").decode()

    @pytest.mark.asyncio
    async def test_get_round_trip_payload(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = json.dumps(
            {"owner": "Owner", "lamports": 5, "data": base64.b64encode(b"\x01\x02\x03").decode()}
        )
        cache = RedisAccountCache(redis)
        assert await cache.get("Acct") == _account()

    @pytest.mark.asyncio
    async def test_miss(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = None
        assert await RedisAccountCache(redis).get("Acct") is None

    @pytest.mark.asyncio
    async def test_corrupt_entry_is_miss(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = "{not json"
        assert await RedisAccountCache(redis).get("Acct") is None

    @pytest.mark.asyncio
    async def test_clear_all_scans_prefix(self) -> None:
        async def _scan(match: str):
            for k in (f"{KEY_PREFIX}A", f"{KEY_PREFIX}B"):
                yield k

        redis = AsyncMock()
        redis.scan_iter = MagicMock(side_effect=_scan)
        await RedisAccountCache(redis).clear()
        redis.delete.assert_awaited_once_with(f"{KEY_PREFIX}A", f"{KEY_PREFIX}B")

    @pytest.mark.asyncio
    async def test_clear_one(self) -> None:
        redis = AsyncMock()
        await RedisAccountCache(redis).clear("Acct")
        redis.delete.assert_awaited_once_with(f"{KEY_PREFIX}Acct")


class TestCachedAccountSource:
    @pytest.mark.asyncio
    async def test_second_read_served_from_cache(self) -> None:
        raw = FakeAccountSource({"Acct": _account()})
        source = CachedAccountSource(raw)
        await source.get_account("Acct")
        await source.get_account("Acct")
        assert raw.calls == ["Acct"]

    @pytest.mark.asyncio
    async def test_force_refresh_overwrites(self) -> None:
        raw = FakeAccountSource({"Acct": _account(b"\x01")})
        source = CachedAccountSource(raw)
        await source.get_account("Acct")
        raw.accounts["Acct"] = _account(b"\x02")
        assert (await source.get_account("Acct")).data == b"\x01"
        assert (await source.get_account("Acct", force_refresh=True)).data == b"\x02"
        assert (await source.get_account("Acct")).data == b"\x02"

    @pytest.mark.asyncio
    async def test_expired_entry_refetched(self) -> None:
        clock = FakeClock()
        raw = FakeAccountSource({"Acct": _account()})
        source = CachedAccountSource(raw, MemoryAccountCache(clock=clock), ttl_ms=1_000)
        await source.get_account("Acct")
        clock.now += 1.0
        await source.get_account("Acct")
        assert len(raw.calls) == 2

    @pytest.mark.asyncio
    async def test_invalidate(self) -> None:
        raw = FakeAccountSource({"Acct": _account()})
        source = CachedAccountSource(raw)
        await source.get_account("Acct")
        await source.invalidate("Acct")
        await source.get_account("Acct")
        assert len(raw.calls) == 2

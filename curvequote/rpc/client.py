"""Solana JSON-RPC account data source (getAccountInfo over httpx).

The client is an explicit value owned by the caller: create one, pass it to
the fetch helpers, close it when done. There is no shared module-level
session.
"""

import asyncio
import base64
from typing import Protocol

import httpx
from loguru import logger
from pydantic import ValidationError

from curvequote.exceptions import AccountNotFoundError, RpcError
from curvequote.models.state import AccountData
from curvequote.rpc.rate_limiter import RateLimiter

MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]


class AccountDataSource(Protocol):
    async def get_account(self, address: str) -> AccountData: ...


class SolanaRpcClient:
    """Async JSON-RPC client returning raw account bytes and owner."""

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout: float = 10.0,
        max_rps: float = 10.0,
        max_retries: int = MAX_RETRIES,
        commitment: str = "confirmed",
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self._rpc_url = rpc_url
        self._max_retries = max_retries
        self._commitment = commitment
        self._rate_limiter = rate_limiter or RateLimiter(max_rps)
        self._client = httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "SolanaRpcClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get_account(self, address: str) -> AccountData:
        """Fetch one account. Raises AccountNotFoundError when it does not exist."""
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "getAccountInfo",
            "params": [
                address,
                {"encoding": "base64", "commitment": self._commitment},
            ],
        }
        data = await self._post(payload, address)

        if "error" in data:
            error = data["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RpcError(f"getAccountInfo {address}: {message}")

        result = data.get("result") or {}
        if not isinstance(result, dict):
            raise RpcError(f"Unexpected getAccountInfo result for {address}")
        value = result.get("value")
        if not value:
            raise AccountNotFoundError(address)
        if not isinstance(value, dict):
            raise RpcError(f"Unexpected account value for {address}")

        return _parse_account(address, value)

    async def _post(self, payload: dict, address: str) -> dict:
        for attempt in range(self._max_retries + 1):
            delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.post(self._rpc_url, json=payload)

                if resp.status_code == 429:
                    if attempt < self._max_retries:
                        logger.debug(f"[RPC] Rate limited, waiting {delay}s")
                        await asyncio.sleep(delay)
                        continue
                    raise RpcError(f"Rate limited fetching {address}")

                if resp.status_code != 200:
                    raise RpcError(f"HTTP {resp.status_code} fetching {address}")

                try:
                    body = resp.json()
                except ValueError as e:
                    raise RpcError(f"Invalid JSON response fetching {address}") from e
                if not isinstance(body, dict):
                    raise RpcError(f"Unexpected JSON-RPC response fetching {address}")
                return body

            except httpx.TransportError as e:
                if attempt < self._max_retries:
                    logger.debug(f"[RPC] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[RPC] Failed for {address[:12]}: {e}")
                    raise RpcError(f"{type(e).__name__} fetching {address}") from e

        raise RpcError(f"Retries exhausted fetching {address}")


def _parse_account(address: str, value: dict) -> AccountData:
    raw = value.get("data")
    b64_data = raw[0] if isinstance(raw, list) and raw else raw
    if not isinstance(b64_data, str):
        raise RpcError(f"Unexpected account data encoding for {address}")
    try:
        data = base64.b64decode(b64_data, validate=True)
    except ValueError as e:
        raise RpcError(f"Invalid base64 account data for {address}") from e
    try:
        return AccountData(
            address=address,
            owner=value.get("owner", ""),
            data=data,
            lamports=value.get("lamports", 0),
        )
    except ValidationError as e:
        raise RpcError(f"Malformed account info for {address}: {e}") from e

import asyncio

from loguru import logger


class RateLimiter:
    """Spaces RPC requests at least ``1 / max_rps`` seconds apart.

    A SolanaRpcClient creates its own by default. Pass one instance to
    several clients when they draw on the same endpoint quota.
    """

    def __init__(self, max_rps: float) -> None:
        if max_rps <= 0:
            raise ValueError(f"max_rps must be positive, got {max_rps}")
        self.min_interval = 1.0 / max_rps
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            loop = asyncio.get_running_loop()
            if self._last_request is not None:
                wait = self.min_interval - (loop.time() - self._last_request)
                if wait > 0:
                    logger.trace(f"[RPC] Throttled for {wait:.3f}s")
                    await asyncio.sleep(wait)
            self._last_request = loop.time()

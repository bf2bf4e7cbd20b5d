"""PoolQuoter: quotes against one CP-Swap pool with cached account reads."""

from collections.abc import Sequence
from decimal import Decimal

from config.settings import settings
from curvequote.cache.memory import AccountCache, MemoryAccountCache
from curvequote.cache.source import CachedAccountSource
from curvequote.fetchers import fetch_cpmm_pool, fetch_pool_reserves
from curvequote.layouts.cpmm import decode_cpmm_pool
from curvequote.models.results import QuoteMode, QuoteResult, SwapDirection
from curvequote.models.state import ReserveState
from curvequote.quote.calculator import (
    calculate_current_price,
    calculate_exact_input_quote,
    calculate_exact_output_quote,
    calculate_multiple_quotes,
)
from curvequote.rpc.client import AccountDataSource
from curvequote.utils.numeric import AmountLike, to_human_amount


class PoolQuoter:
    """Bound to a single pool; every call quotes against a fresh-or-cached snapshot.

    Base is the pool's mint A (the token), quote is mint B (usually SOL).
    """

    def __init__(
        self,
        source: AccountDataSource,
        pool_id: str,
        *,
        cache: AccountCache | None = None,
        cache_ttl_ms: int = settings.account_cache_ttl_ms,
    ) -> None:
        self.pool_id = pool_id
        self._cache = cache if cache is not None else MemoryAccountCache()
        self._source = CachedAccountSource(source, self._cache, cache_ttl_ms)
        # Config and vault addresses seen on any read, kept for clear_cache
        self._linked_accounts: set[str] = set()

    async def get_reserve_state(self, force_refresh: bool = False) -> ReserveState:
        pool = await fetch_cpmm_pool(self._source, self.pool_id, force_refresh=force_refresh)
        self._linked_accounts.update((pool.amm_config, pool.token_0_vault, pool.token_1_vault))
        return await fetch_pool_reserves(
            self._source, pool, self.pool_id, force_refresh=force_refresh
        )

    async def buy_with_exact_quote(
        self, quote_amount: AmountLike, slippage: AmountLike, force_refresh: bool = False
    ) -> QuoteResult:
        """Spend exactly ``quote_amount`` of the quote mint."""
        state = await self.get_reserve_state(force_refresh)
        return calculate_exact_input_quote(state, quote_amount, slippage, SwapDirection.QUOTE_TO_BASE)

    async def sell_exact_base(
        self, base_amount: AmountLike, slippage: AmountLike, force_refresh: bool = False
    ) -> QuoteResult:
        """Sell exactly ``base_amount`` of the base token."""
        state = await self.get_reserve_state(force_refresh)
        return calculate_exact_input_quote(state, base_amount, slippage, SwapDirection.BASE_TO_QUOTE)

    async def buy_exact_base(
        self, base_amount: AmountLike, slippage: AmountLike, force_refresh: bool = False
    ) -> QuoteResult:
        """Receive exactly ``base_amount`` of the base token."""
        state = await self.get_reserve_state(force_refresh)
        return calculate_exact_output_quote(state, base_amount, slippage, SwapDirection.QUOTE_TO_BASE)

    async def sell_for_exact_quote(
        self, quote_amount: AmountLike, slippage: AmountLike, force_refresh: bool = False
    ) -> QuoteResult:
        """Receive exactly ``quote_amount`` of the quote mint."""
        state = await self.get_reserve_state(force_refresh)
        return calculate_exact_output_quote(state, quote_amount, slippage, SwapDirection.BASE_TO_QUOTE)

    async def bulk_quotes(
        self,
        amounts: Sequence[AmountLike],
        slippage: AmountLike,
        direction: SwapDirection,
        mode: QuoteMode = QuoteMode.EXACT_INPUT,
        force_refresh: bool = False,
    ) -> list[QuoteResult]:
        state = await self.get_reserve_state(force_refresh)
        return calculate_multiple_quotes(state, amounts, slippage, direction, mode)

    async def current_price(self, force_refresh: bool = False) -> Decimal:
        state = await self.get_reserve_state(force_refresh)
        return calculate_current_price(state)

    async def reserves(self, force_refresh: bool = False) -> tuple[Decimal, Decimal]:
        """(base reserve, quote reserve) in human units."""
        state = await self.get_reserve_state(force_refresh)
        return (
            to_human_amount(state.base_reserve, state.mint_a_decimals),
            to_human_amount(state.quote_reserve, state.mint_b_decimals),
        )

    async def clear_cache(self) -> None:
        """Drop the cached pool account and every config / vault account it has referenced.

        Linked entries are cleared even when the pool entry itself has already
        expired.
        """
        addresses = {self.pool_id, *self._linked_accounts}
        cached = await self._cache.get(self.pool_id)
        if cached is not None:
            pool = decode_cpmm_pool(cached.data)
            addresses.update((pool.amm_config, pool.token_0_vault, pool.token_1_vault))
        for address in sorted(addresses):
            await self._source.invalidate(address)

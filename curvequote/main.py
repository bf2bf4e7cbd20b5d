"""Command-line entry point: inspect bonding curves and quote CP-Swap pools.

Usage:
    curvequote bonding-curve <address>
    curvequote launchpad <pool address>
    curvequote quote <pool id> --amount 1.5 --direction quote_to_base [--exact-output]
"""

import argparse
import asyncio
import sys
from decimal import Decimal

from loguru import logger

from config.settings import settings
from curvequote.cache.memory import AccountCache
from curvequote.cache.redis import RedisAccountCache, create_redis
from curvequote.exceptions import CurveQuoteError
from curvequote.fetchers import fetch_bonding_curve_info, fetch_launchpad_curve_info
from curvequote.formatters import format_bonding_curve_info, format_quote
from curvequote.models.results import QuoteMode, SwapDirection
from curvequote.quote.calculator import calculate_multiple_quotes
from curvequote.rpc.client import SolanaRpcClient
from curvequote.service import PoolQuoter
from curvequote.utils.logger import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="curvequote", description=__doc__.splitlines()[0])
    parser.add_argument("--rpc-url", default=settings.solana_rpc_url)
    sub = parser.add_subparsers(dest="command", required=True)

    bc = sub.add_parser("bonding-curve", help="Pump.fun bonding curve progress")
    bc.add_argument("address")

    lp = sub.add_parser("launchpad", help="LaunchLab pool progress and graduation")
    lp.add_argument("address")

    q = sub.add_parser("quote", help="Quote a swap against a CP-Swap pool")
    q.add_argument("pool_id")
    q.add_argument("--amount", action="append", required=True, help="Human amount; repeat for bulk")
    q.add_argument(
        "--direction",
        choices=[d.value for d in SwapDirection],
        default=SwapDirection.QUOTE_TO_BASE.value,
    )
    q.add_argument("--exact-output", action="store_true")
    q.add_argument("--slippage", type=Decimal, default=settings.default_slippage)
    return parser


async def _run(args: argparse.Namespace) -> None:
    cache: AccountCache | None = None
    redis = create_redis(settings.redis_url) if settings.redis_url else None
    if redis is not None:
        cache = RedisAccountCache(redis)

    async with SolanaRpcClient(
        args.rpc_url,
        timeout=settings.rpc_timeout_sec,
        max_rps=settings.rpc_max_rps,
        max_retries=settings.rpc_max_retries,
        commitment=settings.rpc_commitment,
    ) as client:
        try:
            if args.command == "bonding-curve":
                info = await fetch_bonding_curve_info(client, args.address)
                print(format_bonding_curve_info(info))
            elif args.command == "launchpad":
                info = await fetch_launchpad_curve_info(client, args.address)
                print(format_bonding_curve_info(info))
            else:
                quoter = PoolQuoter(
                    client, args.pool_id, cache=cache, cache_ttl_ms=settings.account_cache_ttl_ms
                )
                state = await quoter.get_reserve_state()
                mode = QuoteMode.EXACT_OUTPUT if args.exact_output else QuoteMode.EXACT_INPUT
                quotes = calculate_multiple_quotes(
                    state, args.amount, args.slippage, SwapDirection(args.direction), mode
                )
                for result in quotes:
                    for key, value in format_quote(result, state).items():
                        print(f"{key:>16}: {value}")
                    print()
        finally:
            if redis is not None:
                await redis.aclose()


def run() -> None:
    args = build_parser().parse_args()
    setup_logger()
    try:
        asyncio.run(_run(args))
    except CurveQuoteError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()

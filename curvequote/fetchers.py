"""Fetch, ownership-check and decode on-chain accounts.

Every helper verifies the account owner against the expected program before
the bytes are handed to a decoder; a mismatch raises without decoding.
"""

from loguru import logger

from curvequote.cache.source import CachedAccountSource
from curvequote.curve.economics import calculate_bonding_curve_info, calculate_launchpad_curve_info
from curvequote.exceptions import OwnershipMismatchError
from curvequote.layouts.constants import (
    CPMM_PROGRAM_ID,
    LAUNCHPAD_PROGRAM_ID,
    PUMPFUN_PROGRAM_ID,
    TOKEN_PROGRAM_IDS,
)
from curvequote.layouts.cpmm import (
    CpmmPool,
    build_reserve_state,
    decode_amm_config,
    decode_cpmm_pool,
    decode_token_amount,
)
from curvequote.layouts.launchpad import (
    decode_launchpad_config,
    decode_launchpad_pool_account,
)
from curvequote.layouts.pumpfun import decode_bonding_curve
from curvequote.models.results import BondingCurveInfo
from curvequote.models.state import (
    AccountData,
    BondingCurveState,
    LaunchpadConfig,
    LaunchpadPoolState,
    ReserveState,
)
from curvequote.rpc.client import AccountDataSource


async def fetch_account(
    source: AccountDataSource,
    address: str,
    expected_owner: str | frozenset[str],
    force_refresh: bool = False,
) -> AccountData:
    """Fetch an account and check it belongs to ``expected_owner``."""
    if force_refresh and isinstance(source, CachedAccountSource):
        account = await source.get_account(address, force_refresh=True)
    else:
        account = await source.get_account(address)

    allowed = {expected_owner} if isinstance(expected_owner, str) else expected_owner
    if account.owner not in allowed:
        logger.debug(f"[FETCH] Owner mismatch for {address[:12]}: {account.owner}")
        raise OwnershipMismatchError(
            address, " | ".join(sorted(allowed)), account.owner
        )
    return account


# ── Pump.fun ──


async def fetch_bonding_curve_state(
    source: AccountDataSource,
    address: str,
    program_id: str = PUMPFUN_PROGRAM_ID,
    force_refresh: bool = False,
) -> BondingCurveState:
    account = await fetch_account(source, address, program_id, force_refresh)
    return decode_bonding_curve(account.data)


async def fetch_bonding_curve_info(
    source: AccountDataSource,
    address: str,
    program_id: str = PUMPFUN_PROGRAM_ID,
    force_refresh: bool = False,
) -> BondingCurveInfo:
    curve = await fetch_bonding_curve_state(source, address, program_id, force_refresh)
    return calculate_bonding_curve_info(curve)


# ── LaunchLab ──


async def fetch_launchpad_config(
    source: AccountDataSource,
    address: str,
    program_id: str = LAUNCHPAD_PROGRAM_ID,
    force_refresh: bool = False,
) -> LaunchpadConfig:
    account = await fetch_account(source, address, program_id, force_refresh)
    return decode_launchpad_config(account.data)


async def fetch_launchpad_pool_state(
    source: AccountDataSource,
    address: str,
    program_id: str = LAUNCHPAD_PROGRAM_ID,
    force_refresh: bool = False,
) -> LaunchpadPoolState:
    """Fetch a pool account, then the config account it references."""
    account = await fetch_account(source, address, program_id, force_refresh)
    pool = decode_launchpad_pool_account(account.data)
    config = await fetch_launchpad_config(source, pool.config_id, program_id, force_refresh)
    return LaunchpadPoolState.from_accounts(pool, config)


async def fetch_launchpad_curve_info(
    source: AccountDataSource,
    address: str,
    program_id: str = LAUNCHPAD_PROGRAM_ID,
    force_refresh: bool = False,
) -> BondingCurveInfo:
    pool = await fetch_launchpad_pool_state(source, address, program_id, force_refresh)
    return calculate_launchpad_curve_info(pool)


# ── CP-Swap (constant product) ──


async def fetch_cpmm_pool(
    source: AccountDataSource,
    pool_id: str,
    program_id: str = CPMM_PROGRAM_ID,
    force_refresh: bool = False,
) -> CpmmPool:
    account = await fetch_account(source, pool_id, program_id, force_refresh)
    return decode_cpmm_pool(account.data)


async def fetch_pool_reserves(
    source: AccountDataSource,
    pool: CpmmPool,
    pool_id: str | None = None,
    program_id: str = CPMM_PROGRAM_ID,
    force_refresh: bool = False,
) -> ReserveState:
    """Read the AmmConfig and both vaults referenced by an already decoded pool."""
    config_account = await fetch_account(source, pool.amm_config, program_id, force_refresh)
    fees = decode_amm_config(config_account.data)

    vault_0 = await fetch_account(source, pool.token_0_vault, TOKEN_PROGRAM_IDS, force_refresh)
    vault_1 = await fetch_account(source, pool.token_1_vault, TOKEN_PROGRAM_IDS, force_refresh)

    return build_reserve_state(
        pool,
        fees,
        decode_token_amount(vault_0.data),
        decode_token_amount(vault_1.data),
        pool_id=pool_id,
    )


async def fetch_reserve_state(
    source: AccountDataSource,
    pool_id: str,
    program_id: str = CPMM_PROGRAM_ID,
    force_refresh: bool = False,
) -> ReserveState:
    """Build a ReserveState from pool, AmmConfig and both vault accounts."""
    pool = await fetch_cpmm_pool(source, pool_id, program_id, force_refresh)
    return await fetch_pool_reserves(source, pool, pool_id, program_id, force_refresh)

"""Decode Raydium LaunchLab pool and global-config accounts.

The pool account carries reserves, fundraising target and vesting data;
the curve type lives in the separate config account referenced by
``config_id``.
"""

from pydantic import ValidationError

from curvequote.exceptions import InvalidAccountStateError, UnknownCurveVariantError
from curvequote.layouts.codec import FieldKind, FieldSpec, Layout
from curvequote.models.state import (
    CurveVariant,
    LaunchpadConfig,
    LaunchpadPoolAccount,
    LaunchpadPoolState,
)

U8, U16, U64, PUBKEY = FieldKind.U8, FieldKind.U16, FieldKind.U64, FieldKind.PUBKEY

LAUNCHPAD_POOL_LAYOUT = Layout(
    "LaunchpadPool",
    (
        FieldSpec("epoch", 8, U64),
        FieldSpec("bump", 16, U8),
        FieldSpec("status", 17, U8),
        FieldSpec("mint_decimals_a", 18, U8),
        FieldSpec("mint_decimals_b", 19, U8),
        FieldSpec("migrate_type", 20, U8),
        FieldSpec("supply", 21, U64),
        FieldSpec("total_sell_a", 29, U64),
        FieldSpec("virtual_a", 37, U64),
        FieldSpec("virtual_b", 45, U64),
        FieldSpec("real_a", 53, U64),
        FieldSpec("real_b", 61, U64),
        FieldSpec("total_fund_raising_b", 69, U64),
        FieldSpec("protocol_fee", 77, U64),
        FieldSpec("platform_fee", 85, U64),
        FieldSpec("migrate_fee", 93, U64),
        # VestingSchedule
        FieldSpec("total_locked_amount", 101, U64),
        FieldSpec("cliff_period", 109, U64),
        FieldSpec("unlock_period", 117, U64),
        FieldSpec("start_time", 125, U64),
        FieldSpec("total_allocated_share", 133, U64),
        FieldSpec("config_id", 141, PUBKEY),
        FieldSpec("platform_id", 173, PUBKEY),
        FieldSpec("mint_a", 205, PUBKEY),
        FieldSpec("mint_b", 237, PUBKEY),
        FieldSpec("vault_a", 269, PUBKEY),
        FieldSpec("vault_b", 301, PUBKEY),
        FieldSpec("creator", 333, PUBKEY),
    ),
)

LAUNCHPAD_CONFIG_LAYOUT = Layout(
    "LaunchpadConfig",
    (
        FieldSpec("epoch", 8, U64),
        FieldSpec("curve_type", 16, U8),
        FieldSpec("index", 17, U16),
        FieldSpec("migrate_fee", 19, U64),
        FieldSpec("trade_fee_rate", 27, U64),
    ),
)

LAUNCHPAD_POOL_MIN_SIZE = LAUNCHPAD_POOL_LAYOUT.min_size  # 365
LAUNCHPAD_CONFIG_MIN_SIZE = LAUNCHPAD_CONFIG_LAYOUT.min_size  # 35


def parse_curve_variant(raw: int) -> CurveVariant:
    try:
        return CurveVariant(raw)
    except ValueError:
        raise UnknownCurveVariantError(raw) from None


def read_config_id(data: bytes) -> str:
    """Config address referenced by a pool, needed before the pool can be fully typed."""
    return LAUNCHPAD_POOL_LAYOUT.read(data, "config_id")


def decode_launchpad_pool_account(data: bytes) -> LaunchpadPoolAccount:
    fields = LAUNCHPAD_POOL_LAYOUT.decode(data)
    try:
        return LaunchpadPoolAccount(**fields)
    except ValidationError as e:
        raise InvalidAccountStateError(f"Invalid launchpad pool: {e}") from e


def decode_launchpad_config(data: bytes) -> LaunchpadConfig:
    fields = LAUNCHPAD_CONFIG_LAYOUT.decode(data)
    fields["curve_type"] = parse_curve_variant(fields["curve_type"])
    return LaunchpadConfig(**fields)


def decode_launchpad_pool(pool_data: bytes, config_data: bytes) -> LaunchpadPoolState:
    """Decode a pool account together with its config account."""
    pool = decode_launchpad_pool_account(pool_data)
    config = decode_launchpad_config(config_data)
    return LaunchpadPoolState.from_accounts(pool, config)

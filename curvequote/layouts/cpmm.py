"""Decode Raydium CP-Swap (CPMM) pool, AmmConfig and SPL token vault accounts.

Reserves are not stored in the pool account: they are the vault token
balances minus the protocol and fund fees accrued but not yet collected.
"""

from dataclasses import dataclass

from pydantic import ValidationError

from curvequote.exceptions import InvalidAccountStateError
from curvequote.layouts.codec import FieldKind, FieldSpec, Layout
from curvequote.models.state import ReserveState

U8, BOOL, U16, U64, PUBKEY = (
    FieldKind.U8,
    FieldKind.BOOL,
    FieldKind.U16,
    FieldKind.U64,
    FieldKind.PUBKEY,
)

CPMM_POOL_LAYOUT = Layout(
    "CpmmPool",
    (
        FieldSpec("amm_config", 8, PUBKEY),
        FieldSpec("pool_creator", 40, PUBKEY),
        FieldSpec("token_0_vault", 72, PUBKEY),
        FieldSpec("token_1_vault", 104, PUBKEY),
        FieldSpec("lp_mint", 136, PUBKEY),
        FieldSpec("token_0_mint", 168, PUBKEY),
        FieldSpec("token_1_mint", 200, PUBKEY),
        FieldSpec("status", 329, U8),
        FieldSpec("lp_mint_decimals", 330, U8),
        FieldSpec("mint_0_decimals", 331, U8),
        FieldSpec("mint_1_decimals", 332, U8),
        FieldSpec("lp_supply", 333, U64),
        FieldSpec("protocol_fees_token_0", 341, U64),
        FieldSpec("protocol_fees_token_1", 349, U64),
        FieldSpec("fund_fees_token_0", 357, U64),
        FieldSpec("fund_fees_token_1", 365, U64),
        FieldSpec("open_time", 373, U64),
    ),
)

AMM_CONFIG_LAYOUT = Layout(
    "CpmmAmmConfig",
    (
        FieldSpec("bump", 8, U8),
        FieldSpec("disable_create_pool", 9, BOOL),
        FieldSpec("index", 10, U16),
        FieldSpec("trade_fee_rate", 12, U64),
        FieldSpec("protocol_fee_rate", 20, U64),
        FieldSpec("fund_fee_rate", 28, U64),
    ),
)

# SPL Token account (no discriminator): mint, owner, amount
TOKEN_ACCOUNT_LAYOUT = Layout(
    "TokenAccount",
    (
        FieldSpec("mint", 0, PUBKEY),
        FieldSpec("owner", 32, PUBKEY),
        FieldSpec("amount", 64, U64),
    ),
)


@dataclass(frozen=True)
class CpmmPool:
    amm_config: str
    token_0_vault: str
    token_1_vault: str
    token_0_mint: str
    token_1_mint: str
    status: int
    mint_0_decimals: int
    mint_1_decimals: int
    protocol_fees_token_0: int
    protocol_fees_token_1: int
    fund_fees_token_0: int
    fund_fees_token_1: int
    open_time: int


@dataclass(frozen=True)
class CpmmFeeConfig:
    trade_fee_rate: int
    protocol_fee_rate: int
    fund_fee_rate: int


def decode_cpmm_pool(data: bytes) -> CpmmPool:
    f = CPMM_POOL_LAYOUT.decode(data)
    return CpmmPool(
        amm_config=f["amm_config"],
        token_0_vault=f["token_0_vault"],
        token_1_vault=f["token_1_vault"],
        token_0_mint=f["token_0_mint"],
        token_1_mint=f["token_1_mint"],
        status=f["status"],
        mint_0_decimals=f["mint_0_decimals"],
        mint_1_decimals=f["mint_1_decimals"],
        protocol_fees_token_0=f["protocol_fees_token_0"],
        protocol_fees_token_1=f["protocol_fees_token_1"],
        fund_fees_token_0=f["fund_fees_token_0"],
        fund_fees_token_1=f["fund_fees_token_1"],
        open_time=f["open_time"],
    )


def decode_amm_config(data: bytes) -> CpmmFeeConfig:
    f = AMM_CONFIG_LAYOUT.decode(data)
    return CpmmFeeConfig(
        trade_fee_rate=f["trade_fee_rate"],
        protocol_fee_rate=f["protocol_fee_rate"],
        fund_fee_rate=f["fund_fee_rate"],
    )


def decode_token_amount(data: bytes) -> int:
    return TOKEN_ACCOUNT_LAYOUT.read(data, "amount")


def build_reserve_state(
    pool: CpmmPool,
    fees: CpmmFeeConfig,
    vault_0_amount: int,
    vault_1_amount: int,
    pool_id: str | None = None,
) -> ReserveState:
    """Combine pool, fee config and vault balances into a ReserveState."""
    base_reserve = max(
        vault_0_amount - pool.protocol_fees_token_0 - pool.fund_fees_token_0, 0
    )
    quote_reserve = max(
        vault_1_amount - pool.protocol_fees_token_1 - pool.fund_fees_token_1, 0
    )
    try:
        return ReserveState(
            base_reserve=base_reserve,
            quote_reserve=quote_reserve,
            mint_a_decimals=pool.mint_0_decimals,
            mint_b_decimals=pool.mint_1_decimals,
            trade_fee_rate=fees.trade_fee_rate,
            protocol_fee_rate=fees.protocol_fee_rate,
            fund_fee_rate=fees.fund_fee_rate,
            pool_id=pool_id,
            mint_a=pool.token_0_mint,
            mint_b=pool.token_1_mint,
        )
    except ValidationError as e:
        raise InvalidAccountStateError(f"Invalid CPMM reserve state: {e}") from e

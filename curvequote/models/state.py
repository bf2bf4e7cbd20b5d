"""Pydantic v2 models for decoded on-chain account state.

All models are frozen: a changed account is re-fetched and re-decoded,
never patched in place.
"""

from enum import IntEnum

from pydantic import BaseModel, Field, model_validator

# Fee rates and slippage are parts-per-million
PPM_DECIMALS = 6
FEE_DENOMINATOR = 10**PPM_DECIMALS

U64_MAX = 2**64 - 1


class CurveVariant(IntEnum):
    """Launchpad curve type, as stored in the config account's discriminant byte."""

    CONSTANT_PRODUCT = 0
    FIXED_PRICE = 1
    LINEAR_PRICE = 2

    @property
    def label(self) -> str:
        return CURVE_VARIANT_LABELS[self]


CURVE_VARIANT_LABELS: dict[CurveVariant, str] = {
    CurveVariant.CONSTANT_PRODUCT: "Constant Product",
    CurveVariant.FIXED_PRICE: "Fixed Price",
    CurveVariant.LINEAR_PRICE: "Linear Price",
}


class AccountData(BaseModel):
    """Raw account bytes plus the program that owns them."""

    address: str
    owner: str
    data: bytes
    lamports: int = 0

    model_config = {"frozen": True}


class ReserveState(BaseModel):
    """Constant-product pool reserves and fee configuration.

    ``base`` is mint A (the traded token), ``quote`` is mint B.
    Fee rates are parts-per-million of ``FEE_DENOMINATOR``.
    """

    base_reserve: int = Field(ge=0)
    quote_reserve: int = Field(ge=0)
    mint_a_decimals: int = Field(ge=0, le=255)
    mint_b_decimals: int = Field(ge=0, le=255)
    trade_fee_rate: int = Field(default=0, ge=0, lt=FEE_DENOMINATOR)
    protocol_fee_rate: int = Field(default=0, ge=0, lt=FEE_DENOMINATOR)
    fund_fee_rate: int = Field(default=0, ge=0, lt=FEE_DENOMINATOR)
    pool_id: str | None = None
    mint_a: str | None = None
    mint_b: str | None = None

    model_config = {"frozen": True}


class BondingCurveState(BaseModel):
    """Pump.fun-style single-mint bonding curve account."""

    virtual_token_reserves: int = Field(ge=0, le=U64_MAX)
    virtual_sol_reserves: int = Field(ge=0, le=U64_MAX)
    real_token_reserves: int = Field(ge=0, le=U64_MAX)
    real_sol_reserves: int = Field(ge=0, le=U64_MAX)
    token_total_supply: int = Field(ge=0, le=U64_MAX)
    complete: bool

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _virtual_covers_real(self) -> "BondingCurveState":
        if self.virtual_token_reserves < self.real_token_reserves:
            raise ValueError(
                f"virtual_token_reserves ({self.virtual_token_reserves}) < "
                f"real_token_reserves ({self.real_token_reserves})"
            )
        return self


class LaunchpadConfig(BaseModel):
    """LaunchLab global config account: curve type and trade fee."""

    epoch: int = 0
    curve_type: CurveVariant
    index: int = 0
    migrate_fee: int = 0
    trade_fee_rate: int = 0

    model_config = {"frozen": True}


class LaunchpadPoolAccount(BaseModel):
    """LaunchLab dual-mint pool account, as stored on chain."""

    epoch: int = 0
    bump: int = 0
    status: int = 0
    mint_decimals_a: int = Field(ge=0, le=255)
    mint_decimals_b: int = Field(ge=0, le=255)
    migrate_type: int = 0
    supply: int = Field(ge=0)
    total_sell_a: int = Field(ge=0)
    virtual_a: int = Field(ge=0)
    virtual_b: int = Field(ge=0)
    real_a: int = Field(ge=0)
    real_b: int = Field(ge=0)
    total_fund_raising_b: int = Field(ge=0)
    protocol_fee: int = 0
    platform_fee: int = 0
    migrate_fee: int = 0
    # Vesting schedule
    total_locked_amount: int = 0
    cliff_period: int = 0
    unlock_period: int = 0
    start_time: int = 0
    total_allocated_share: int = 0
    config_id: str = ""
    platform_id: str = ""
    mint_a: str = ""
    mint_b: str = ""
    vault_a: str = ""
    vault_b: str = ""
    creator: str = ""

    model_config = {"frozen": True}


class LaunchpadPoolState(LaunchpadPoolAccount):
    """Pool account joined with the curve type from its config account."""

    curve_type: CurveVariant

    @classmethod
    def from_accounts(
        cls, pool: LaunchpadPoolAccount, config: LaunchpadConfig
    ) -> "LaunchpadPoolState":
        return cls(**pool.model_dump(), curve_type=config.curve_type)

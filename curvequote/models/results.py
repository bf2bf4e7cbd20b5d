"""Quote requests and computed results (immutable, produced once per call)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from curvequote.models.state import CurveVariant, ReserveState
from curvequote.utils.numeric import AmountLike


class SwapDirection(str, Enum):
    """Which side of the pool the trader pays in."""

    BASE_TO_QUOTE = "base_to_quote"  # sell base token for quote token
    QUOTE_TO_BASE = "quote_to_base"  # buy base token with quote token


class QuoteMode(str, Enum):
    EXACT_INPUT = "exact_input"
    EXACT_OUTPUT = "exact_output"


@dataclass(frozen=True)
class QuoteRequest:
    state: ReserveState
    amount: AmountLike  # human-readable units of the fixed side
    direction: SwapDirection
    slippage: AmountLike = Decimal("0.01")
    mode: QuoteMode = QuoteMode.EXACT_INPUT


@dataclass(frozen=True)
class QuoteResult:
    """Raw integer amounts plus Decimal prices (quote per base, human units)."""

    amount_in: int
    amount_out: int
    min_amount_out: int
    max_amount_in: int
    fee: int
    execution_price: Decimal
    current_price: Decimal
    price_impact: Decimal  # fraction, 0.01 = 1%
    direction: SwapDirection


@dataclass(frozen=True)
class BondingCurveInfo:
    """Curve progress and graduation economics, recomputed on every call."""

    curve_type: CurveVariant
    bonding_percentage: Decimal
    current_price: Decimal
    graduation_price: Decimal
    graduation_market_cap: Decimal
    total_fund_raising_target: Decimal
    raised_so_far: Decimal
    remaining_to_raise: Decimal
    complete: bool
    virtual_base_reserves: Decimal
    virtual_quote_reserves: Decimal
    real_base_reserves: Decimal
    real_quote_reserves: Decimal
    pool_status: int | None = None  # launchpad only
    migrate_type: str | None = None  # launchpad only: "amm" or "cpmm"

    @property
    def curve_type_label(self) -> str:
        return self.curve_type.label

from curvequote.models.results import (
    BondingCurveInfo,
    QuoteMode,
    QuoteRequest,
    QuoteResult,
    SwapDirection,
)
from curvequote.models.state import (
    CURVE_VARIANT_LABELS,
    FEE_DENOMINATOR,
    AccountData,
    BondingCurveState,
    CurveVariant,
    LaunchpadConfig,
    LaunchpadPoolAccount,
    LaunchpadPoolState,
    ReserveState,
)

__all__ = [
    "CURVE_VARIANT_LABELS",
    "FEE_DENOMINATOR",
    "AccountData",
    "BondingCurveInfo",
    "BondingCurveState",
    "CurveVariant",
    "LaunchpadConfig",
    "LaunchpadPoolAccount",
    "LaunchpadPoolState",
    "QuoteMode",
    "QuoteRequest",
    "QuoteResult",
    "ReserveState",
    "SwapDirection",
]

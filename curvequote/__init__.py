"""Decode Solana AMM / bonding-curve accounts; deterministic quotes and curve economics."""

from curvequote.curve.economics import (
    bonding_percentage,
    calculate_bonding_curve_info,
    calculate_launchpad_curve_info,
)
from curvequote.exceptions import (
    AccountNotFoundError,
    BufferTooShortError,
    CurveQuoteError,
    DecodeError,
    InsufficientReserveError,
    InvalidAccountStateError,
    InvalidQuoteRequestError,
    OwnershipMismatchError,
    QuoteError,
    RpcError,
    UnknownCurveVariantError,
)
from curvequote.layouts.launchpad import decode_launchpad_config, decode_launchpad_pool
from curvequote.layouts.pumpfun import decode_bonding_curve
from curvequote.quote.calculator import (
    calculate_exact_input_quote,
    calculate_exact_output_quote,
    calculate_multiple_quotes,
    quote,
)
from curvequote.utils.numeric import to_human_amount, to_raw_amount

__all__ = [
    "AccountNotFoundError",
    "BufferTooShortError",
    "CurveQuoteError",
    "DecodeError",
    "InsufficientReserveError",
    "InvalidAccountStateError",
    "InvalidQuoteRequestError",
    "OwnershipMismatchError",
    "QuoteError",
    "RpcError",
    "UnknownCurveVariantError",
    "bonding_percentage",
    "calculate_bonding_curve_info",
    "calculate_exact_input_quote",
    "calculate_exact_output_quote",
    "calculate_launchpad_curve_info",
    "calculate_multiple_quotes",
    "decode_bonding_curve",
    "decode_launchpad_config",
    "decode_launchpad_pool",
    "quote",
    "to_human_amount",
    "to_raw_amount",
]

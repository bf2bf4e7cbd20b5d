"""Decode the Pump.fun BondingCurve account.

Layout (8-byte discriminator, then packed little-endian):
   8  virtual_token_reserves (u64)
  16  virtual_sol_reserves (u64)
  24  real_token_reserves (u64)
  32  real_sol_reserves (u64)
  40  token_total_supply (u64)
  48  complete (bool)
"""

from pydantic import ValidationError

from curvequote.exceptions import InvalidAccountStateError
from curvequote.layouts.codec import FieldKind, FieldSpec, Layout
from curvequote.models.state import BondingCurveState

BONDING_CURVE_LAYOUT = Layout(
    "BondingCurve",
    (
        FieldSpec("virtual_token_reserves", 8, FieldKind.U64),
        FieldSpec("virtual_sol_reserves", 16, FieldKind.U64),
        FieldSpec("real_token_reserves", 24, FieldKind.U64),
        FieldSpec("real_sol_reserves", 32, FieldKind.U64),
        FieldSpec("token_total_supply", 40, FieldKind.U64),
        FieldSpec("complete", 48, FieldKind.BOOL),
    ),
)

BONDING_CURVE_MIN_SIZE = BONDING_CURVE_LAYOUT.min_size  # 49


def decode_bonding_curve(data: bytes) -> BondingCurveState:
    fields = BONDING_CURVE_LAYOUT.decode(data)
    try:
        return BondingCurveState(**fields)
    except ValidationError as e:
        raise InvalidAccountStateError(f"Invalid bonding curve state: {e}") from e

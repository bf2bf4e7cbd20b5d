"""Format quotes and curve info as human-readable text."""

from decimal import ROUND_HALF_UP, Decimal

from curvequote.models.results import BondingCurveInfo, QuoteResult, SwapDirection
from curvequote.models.state import ReserveState
from curvequote.utils.numeric import decimal_context, to_human_amount


def _fixed(value: Decimal, places: int) -> str:
    with decimal_context():
        return format(value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP), "f")


def format_quote(quote: QuoteResult, state: ReserveState) -> dict[str, str]:
    """Human amounts (6 dp), prices (9 dp) and impact as a percentage (4 dp)."""
    if quote.direction == SwapDirection.QUOTE_TO_BASE:
        input_decimals, output_decimals = state.mint_b_decimals, state.mint_a_decimals
    else:
        input_decimals, output_decimals = state.mint_a_decimals, state.mint_b_decimals

    return {
        "amount_in": _fixed(to_human_amount(quote.amount_in, input_decimals), 6),
        "amount_out": _fixed(to_human_amount(quote.amount_out, output_decimals), 6),
        "min_amount_out": _fixed(to_human_amount(quote.min_amount_out, output_decimals), 6),
        "max_amount_in": _fixed(to_human_amount(quote.max_amount_in, input_decimals), 6),
        "fee": _fixed(to_human_amount(quote.fee, input_decimals), 6),
        "price_impact": f"{_fixed(quote.price_impact * 100, 4)}%",
        "execution_price": _fixed(quote.execution_price, 9),
        "current_price": _fixed(quote.current_price, 9),
    }


def format_bonding_curve_info(info: BondingCurveInfo) -> str:
    status = "complete" if info.complete else "bonding"
    lines = [
        f"Curve: {info.curve_type_label} ({status})",
        f"Progress: {_fixed(info.bonding_percentage, 2)}%",
        f"Raised: {_fixed(info.raised_so_far, 4)} / {_fixed(info.total_fund_raising_target, 4)}"
        f" (remaining {_fixed(info.remaining_to_raise, 4)})",
        f"Current price: {_fixed(info.current_price, 12)}",
        f"Graduation price: {_fixed(info.graduation_price, 12)}",
        f"Graduation market cap: {_fixed(info.graduation_market_cap, 4)}",
    ]
    if info.migrate_type is not None:
        lines.append(f"Pool status: {info.pool_status}, migrates to {info.migrate_type}")
    return "\n".join(lines)

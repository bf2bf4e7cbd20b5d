"""Constant-product swap quotes with exact integer rounding.

Rounding is chosen so a quote never promises more than on-chain execution
delivers: outputs and fees round down, required inputs round up.

Prices are quote-token per base-token in human units for both directions,
so execution price and spot price are directly comparable.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from curvequote.exceptions import InsufficientReserveError, InvalidQuoteRequestError
from curvequote.models.results import QuoteMode, QuoteRequest, QuoteResult, SwapDirection
from curvequote.models.state import FEE_DENOMINATOR, PPM_DECIMALS, ReserveState
from curvequote.utils.numeric import (
    AmountLike,
    ceil_div,
    decimal_context,
    floor_div,
    pow10,
    to_decimal,
    to_human_amount,
    to_raw_amount,
    truncate_scaled,
)


@dataclass(frozen=True)
class _Sides:
    input_reserve: int
    output_reserve: int
    input_decimals: int
    output_decimals: int


def _sides(state: ReserveState, direction: SwapDirection) -> _Sides:
    if direction == SwapDirection.QUOTE_TO_BASE:
        return _Sides(
            input_reserve=state.quote_reserve,
            output_reserve=state.base_reserve,
            input_decimals=state.mint_b_decimals,
            output_decimals=state.mint_a_decimals,
        )
    return _Sides(
        input_reserve=state.base_reserve,
        output_reserve=state.quote_reserve,
        input_decimals=state.mint_a_decimals,
        output_decimals=state.mint_b_decimals,
    )


def calculate_fee(amount: int, fee_rate: int) -> int:
    """Fee charged on ``amount`` at ``fee_rate`` ppm. Floor."""
    return floor_div(amount * fee_rate, FEE_DENOMINATOR)


def calculate_swap_output(amount_in: int, input_reserve: int, output_reserve: int) -> int:
    """x*y=k output for a post-fee input. Floor."""
    return floor_div(amount_in * output_reserve, input_reserve + amount_in)


def calculate_swap_input(amount_out: int, input_reserve: int, output_reserve: int) -> int:
    """x*y=k input (before fee) needed to receive ``amount_out``. Ceiling."""
    return ceil_div(input_reserve * amount_out, output_reserve - amount_out)


def slippage_to_ppm(slippage: AmountLike) -> int:
    """Fractional slippage tolerance -> parts-per-million, floored."""
    try:
        value = to_decimal(slippage)
    except ValueError as e:
        raise InvalidQuoteRequestError(str(e)) from e
    if value < 0 or value >= 1:
        raise InvalidQuoteRequestError(f"Slippage must be in [0, 1), got {slippage}")
    return truncate_scaled(value, PPM_DECIMALS)


def calculate_current_price(state: ReserveState) -> Decimal:
    """Spot price before the trade. Zero when the base reserve is empty."""
    if state.base_reserve == 0:
        return Decimal(0)
    with decimal_context():
        return (
            Decimal(state.quote_reserve)
            / Decimal(state.base_reserve)
            * pow10(state.mint_a_decimals - state.mint_b_decimals)
        )


def _execution_price(
    raw_in: int, raw_out: int, sides: _Sides, direction: SwapDirection
) -> Decimal:
    if raw_in == 0 or raw_out == 0:
        return Decimal(0)
    with decimal_context():
        input_human = to_human_amount(raw_in, sides.input_decimals)
        output_human = to_human_amount(raw_out, sides.output_decimals)
        if direction == SwapDirection.QUOTE_TO_BASE:
            return input_human / output_human
        return output_human / input_human


def calculate_price_impact(current_price: Decimal, execution_price: Decimal) -> Decimal:
    if current_price == 0:
        return Decimal(0)
    if execution_price == 0:
        return Decimal(1)
    with decimal_context():
        return abs(execution_price - current_price) / current_price


def _raw_amount(amount: AmountLike, decimals: int) -> int:
    try:
        raw = to_raw_amount(amount, decimals)
    except ValueError as e:
        raise InvalidQuoteRequestError(str(e)) from e
    if raw <= 0:
        raise InvalidQuoteRequestError(
            f"Amount {amount} is below the smallest unit (decimals={decimals})"
        )
    return raw


def _require_liquidity(state: ReserveState) -> None:
    if state.base_reserve == 0 or state.quote_reserve == 0:
        raise InsufficientReserveError(
            f"Pool has no liquidity (base={state.base_reserve}, quote={state.quote_reserve})"
        )


def calculate_exact_input_quote(
    state: ReserveState,
    amount_in: AmountLike,
    slippage: AmountLike,
    direction: SwapDirection,
) -> QuoteResult:
    """Quote spending exactly ``amount_in`` (human units of the input mint)."""
    _require_liquidity(state)
    sides = _sides(state, direction)
    slippage_ppm = slippage_to_ppm(slippage)

    raw_amount_in = _raw_amount(amount_in, sides.input_decimals)
    fee = calculate_fee(raw_amount_in, state.trade_fee_rate)
    amount_in_after_fee = raw_amount_in - fee

    raw_amount_out = calculate_swap_output(
        amount_in_after_fee, sides.input_reserve, sides.output_reserve
    )
    min_amount_out = raw_amount_out - floor_div(raw_amount_out * slippage_ppm, FEE_DENOMINATOR)

    current_price = calculate_current_price(state)
    execution_price = _execution_price(raw_amount_in, raw_amount_out, sides, direction)

    return QuoteResult(
        amount_in=raw_amount_in,
        amount_out=raw_amount_out,
        min_amount_out=min_amount_out,
        max_amount_in=raw_amount_in,
        fee=fee,
        execution_price=execution_price,
        current_price=current_price,
        price_impact=calculate_price_impact(current_price, execution_price),
        direction=direction,
    )


def calculate_exact_output_quote(
    state: ReserveState,
    amount_out: AmountLike,
    slippage: AmountLike,
    direction: SwapDirection,
) -> QuoteResult:
    """Quote receiving exactly ``amount_out`` (human units of the output mint)."""
    _require_liquidity(state)
    sides = _sides(state, direction)
    slippage_ppm = slippage_to_ppm(slippage)

    raw_amount_out = _raw_amount(amount_out, sides.output_decimals)
    if raw_amount_out >= sides.output_reserve:
        raise InsufficientReserveError(
            f"Output amount ({raw_amount_out}) exceeds pool reserve ({sides.output_reserve})"
        )

    amount_in_before_fee = calculate_swap_input(
        raw_amount_out, sides.input_reserve, sides.output_reserve
    )
    raw_amount_in = ceil_div(
        amount_in_before_fee * FEE_DENOMINATOR, FEE_DENOMINATOR - state.trade_fee_rate
    )
    fee = raw_amount_in - amount_in_before_fee
    max_amount_in = raw_amount_in + ceil_div(raw_amount_in * slippage_ppm, FEE_DENOMINATOR)

    current_price = calculate_current_price(state)
    execution_price = _execution_price(raw_amount_in, raw_amount_out, sides, direction)

    return QuoteResult(
        amount_in=raw_amount_in,
        amount_out=raw_amount_out,
        min_amount_out=raw_amount_out,
        max_amount_in=max_amount_in,
        fee=fee,
        execution_price=execution_price,
        current_price=current_price,
        price_impact=calculate_price_impact(current_price, execution_price),
        direction=direction,
    )


def quote(request: QuoteRequest) -> QuoteResult:
    if request.mode == QuoteMode.EXACT_OUTPUT:
        return calculate_exact_output_quote(
            request.state, request.amount, request.slippage, request.direction
        )
    return calculate_exact_input_quote(
        request.state, request.amount, request.slippage, request.direction
    )


def calculate_multiple_quotes(
    state: ReserveState,
    amounts: Sequence[AmountLike],
    slippage: AmountLike,
    direction: SwapDirection,
    mode: QuoteMode = QuoteMode.EXACT_INPUT,
) -> list[QuoteResult]:
    """Quote each amount independently against the same pool snapshot."""
    return [
        quote(QuoteRequest(state=state, amount=a, direction=direction, slippage=slippage, mode=mode))
        for a in amounts
    ]

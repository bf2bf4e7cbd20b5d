"""Raw-integer / Decimal boundary.

Raw amounts are plain ``int`` (unbounded). Human amounts, prices and
percentages are ``Decimal`` evaluated under ``decimal_context()``.
Integer division helpers name their rounding mode explicitly.
"""

from contextlib import AbstractContextManager
from decimal import Decimal, InvalidOperation, localcontext

# Enough digits for u64 * u64 products and chained price ratios
PRECISION = 60

AmountLike = Decimal | int | str | float


def decimal_context() -> AbstractContextManager:
    return localcontext(prec=PRECISION)


def to_decimal(value: AmountLike) -> Decimal:
    """Coerce caller input to Decimal. Floats go through ``str`` so the typed literal is used."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Not a decimal amount: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return result


def pow10(exponent: int) -> Decimal:
    """Exact ``10 ** exponent`` as Decimal, negative exponents included."""
    return Decimal(1).scaleb(exponent)


def floor_div(numerator: int, denominator: int) -> int:
    return numerator // denominator


def ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def truncate_scaled(value: Decimal, exponent: int) -> int:
    """``value * 10 ** exponent`` truncated toward zero.

    The exponent is shifted on the digit tuple, so no context precision or
    rounding applies before the truncation.
    """
    sign, digits, exp = value.as_tuple()
    # int() of a Decimal truncates toward zero exactly
    return int(Decimal((sign, digits, exp + exponent)))


def to_raw_amount(amount: AmountLike, decimals: int) -> int:
    """Human amount -> raw integer units, truncating toward zero."""
    return truncate_scaled(to_decimal(amount), decimals)


def to_human_amount(raw: int, decimals: int) -> Decimal:
    with decimal_context():
        return Decimal(raw) / pow10(decimals)

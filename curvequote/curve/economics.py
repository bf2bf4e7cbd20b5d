"""Bonding-curve progress and graduation economics.

Two account families are covered:

* Pump.fun bonding curves: always constant product, with a fixed
  fundraising target (85 SOL by default).
* LaunchLab pools: curve variant comes from the config account and the
  target is stored in the pool itself.

FixedPrice and LinearPrice current prices reuse the constant-product
reserve ratio at the current reserve point, and LinearPrice graduation
uses the terminal reserve ratio. These are approximations of the true
fixed/linear curves, kept until the exact on-chain formulas are modelled.
"""

from decimal import Decimal

from config.settings import settings
from curvequote.exceptions import UnknownCurveVariantError
from curvequote.models.results import BondingCurveInfo
from curvequote.models.state import BondingCurveState, CurveVariant, LaunchpadPoolState
from curvequote.utils.numeric import decimal_context, pow10, to_human_amount

ZERO = Decimal(0)
HUNDRED = Decimal(100)


def bonding_percentage(raised: int, target: int) -> Decimal:
    """Share of the fundraising target already raised, 0-100 (not clamped).

    A zero target counts as fully raised.
    """
    if target == 0:
        return HUNDRED
    with decimal_context():
        return Decimal(raised) / Decimal(target) * HUNDRED


def reserve_ratio_price(
    quote_amount: int, base_amount: int, base_decimals: int, quote_decimals: int
) -> Decimal:
    """quote / base in human units; zero when the base side is not positive."""
    if base_amount <= 0:
        return ZERO
    with decimal_context():
        return (
            Decimal(quote_amount)
            / Decimal(base_amount)
            * pow10(base_decimals - quote_decimals)
        )


# ── Pump.fun bonding curve ──


def bonding_curve_current_price(
    curve: BondingCurveState,
    token_decimals: int = settings.pumpfun_token_decimals,
    sol_decimals: int = settings.sol_decimals,
) -> Decimal:
    return reserve_ratio_price(
        curve.virtual_sol_reserves + curve.real_sol_reserves,
        curve.virtual_token_reserves - curve.real_token_reserves,
        token_decimals,
        sol_decimals,
    )


def bonding_curve_graduation_price(
    curve: BondingCurveState,
    graduation_target: int = settings.pumpfun_graduation_target_lamports,
    token_decimals: int = settings.pumpfun_token_decimals,
    sol_decimals: int = settings.sol_decimals,
) -> Decimal:
    """Price when ``graduation_target`` lamports have been raised.

    Holds k = (vSOL + rSOL) * (vTok - rTok) constant and solves for the
    token reserve at terminal SOL reserve vSOL + target.
    """
    graduation_sol = curve.virtual_sol_reserves + graduation_target
    with decimal_context():
        k = Decimal(curve.virtual_sol_reserves + curve.real_sol_reserves) * Decimal(
            curve.virtual_token_reserves - curve.real_token_reserves
        )
        if graduation_sol == 0 or k == 0:
            return ZERO
        graduation_tokens = k / Decimal(graduation_sol)
        return (
            Decimal(graduation_sol)
            / graduation_tokens
            * pow10(token_decimals - sol_decimals)
        )


def calculate_bonding_curve_info(
    curve: BondingCurveState,
    graduation_target: int = settings.pumpfun_graduation_target_lamports,
    token_decimals: int = settings.pumpfun_token_decimals,
    sol_decimals: int = settings.sol_decimals,
) -> BondingCurveInfo:
    graduation_price = bonding_curve_graduation_price(
        curve, graduation_target, token_decimals, sol_decimals
    )
    with decimal_context():
        total_supply = to_human_amount(curve.token_total_supply, token_decimals)
        target = to_human_amount(graduation_target, sol_decimals)
        raised = to_human_amount(curve.real_sol_reserves, sol_decimals)
        return BondingCurveInfo(
            curve_type=CurveVariant.CONSTANT_PRODUCT,
            bonding_percentage=bonding_percentage(curve.real_sol_reserves, graduation_target),
            current_price=bonding_curve_current_price(curve, token_decimals, sol_decimals),
            graduation_price=graduation_price,
            graduation_market_cap=graduation_price * total_supply,
            total_fund_raising_target=target,
            raised_so_far=raised,
            remaining_to_raise=target - raised,
            complete=curve.complete,
            virtual_base_reserves=to_human_amount(curve.virtual_token_reserves, token_decimals),
            virtual_quote_reserves=to_human_amount(curve.virtual_sol_reserves, sol_decimals),
            real_base_reserves=to_human_amount(curve.real_token_reserves, token_decimals),
            real_quote_reserves=raised,
        )


# ── LaunchLab pool ──


def launchpad_current_price(pool: LaunchpadPoolState) -> Decimal:
    # All variants: reserve ratio at the current point
    return reserve_ratio_price(
        pool.virtual_b + pool.real_b,
        pool.virtual_a - pool.real_a,
        pool.mint_decimals_a,
        pool.mint_decimals_b,
    )


def launchpad_graduation_price(pool: LaunchpadPoolState) -> Decimal:
    if pool.curve_type == CurveVariant.FIXED_PRICE:
        return reserve_ratio_price(
            pool.virtual_b, pool.virtual_a, pool.mint_decimals_a, pool.mint_decimals_b
        )
    if pool.curve_type in (CurveVariant.CONSTANT_PRODUCT, CurveVariant.LINEAR_PRICE):
        # realA = total_sell_a, realB = total_fund_raising_b at graduation
        return reserve_ratio_price(
            pool.virtual_b + pool.total_fund_raising_b,
            pool.virtual_a - pool.total_sell_a,
            pool.mint_decimals_a,
            pool.mint_decimals_b,
        )
    raise UnknownCurveVariantError(int(pool.curve_type))


def calculate_launchpad_curve_info(pool: LaunchpadPoolState) -> BondingCurveInfo:
    current_price = launchpad_current_price(pool)
    graduation_price = launchpad_graduation_price(pool)
    dec_a, dec_b = pool.mint_decimals_a, pool.mint_decimals_b
    with decimal_context():
        total_supply = to_human_amount(pool.supply, dec_a)
        target = to_human_amount(pool.total_fund_raising_b, dec_b)
        raised = to_human_amount(pool.real_b, dec_b)
        return BondingCurveInfo(
            curve_type=pool.curve_type,
            bonding_percentage=bonding_percentage(pool.real_b, pool.total_fund_raising_b),
            current_price=current_price,
            graduation_price=graduation_price,
            graduation_market_cap=graduation_price * total_supply,
            total_fund_raising_target=target,
            raised_so_far=raised,
            remaining_to_raise=target - raised,
            complete=pool.status != 0 or pool.real_b >= pool.total_fund_raising_b,
            virtual_base_reserves=to_human_amount(pool.virtual_a, dec_a),
            virtual_quote_reserves=to_human_amount(pool.virtual_b, dec_b),
            real_base_reserves=to_human_amount(pool.real_a, dec_a),
            real_quote_reserves=raised,
            pool_status=pool.status,
            migrate_type="amm" if pool.migrate_type == 0 else "cpmm",
        )

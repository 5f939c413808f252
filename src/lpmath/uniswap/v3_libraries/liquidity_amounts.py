from lpmath.exceptions import DegenerateRange, NegativeAmount
from lpmath.types.aliases import Amount, Liquidity, SqrtPriceX96
from lpmath.uniswap.v3_libraries.constants import Q96_RESOLUTION
from lpmath.uniswap.v3_libraries.functions import to_uint128
from lpmath.uniswap.v3_libraries.sqrt_price_math import get_amount0_delta, get_amount1_delta

"""
Conversions between token amounts and liquidity over a price range.

ref: https://github.com/Uniswap/v3-periphery/blob/main/contracts/libraries/LiquidityAmounts.sol
"""


def _sorted_bounds(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
) -> tuple[SqrtPriceX96, SqrtPriceX96]:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 == sqrt_ratio_b_x96:
        raise DegenerateRange(sqrt_ratio_a_x96)
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def get_unbounded_liquidity_for_amount0(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    amount0: Amount,
) -> Liquidity:
    """
    The amount0 liquidity formula on arbitrary precision integers, with no uint128 limit on the
    result. The bounds must already be sorted and distinct.
    """

    intermediate = (sqrt_ratio_a_x96 * sqrt_ratio_b_x96) >> Q96_RESOLUTION
    return (amount0 * intermediate) // (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_unbounded_liquidity_for_amount1(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    amount1: Amount,
) -> Liquidity:
    return (amount1 << Q96_RESOLUTION) // (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_liquidity_for_amount0(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    amount0: Amount,
) -> Liquidity:
    """
    Calculate the liquidity supplied by `amount0` over the range,
    amount0 * (sqrt(upper) * sqrt(lower)) / (sqrt(upper) - sqrt(lower)).

    On Q64.96 values the product of the two prices carries an extra factor of 2^96, which is divided
    out before the final division.
    """

    if amount0 < 0:
        raise NegativeAmount("amount0", amount0)

    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sorted_bounds(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    return to_uint128(
        get_unbounded_liquidity_for_amount0(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0)
    )


def get_liquidity_for_amount1(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    amount1: Amount,
) -> Liquidity:
    """
    Calculate the liquidity supplied by `amount1` over the range,
    amount1 / (sqrt(upper) - sqrt(lower)).
    """

    if amount1 < 0:
        raise NegativeAmount("amount1", amount1)

    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sorted_bounds(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    return to_uint128(
        get_unbounded_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)
    )


def get_liquidity_for_amounts(
    sqrt_ratio_x96: SqrtPriceX96,
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    amount0: Amount,
    amount1: Amount,
) -> Liquidity:
    """
    Calculate the maximum liquidity that `amount0` and `amount1` can supply at the current price.

    Below the range the position holds only token0 and above it only token1, so a single amount
    decides the result. Inside the range, token0 covers the part of the range above the current
    price, token1 the part below it, and the smaller of the two liquidities is returned.
    """

    if amount0 < 0:
        raise NegativeAmount("amount0", amount0)
    if amount1 < 0:
        raise NegativeAmount("amount1", amount1)

    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sorted_bounds(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        return get_liquidity_for_amount0(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0)

    if sqrt_ratio_x96 < sqrt_ratio_b_x96:
        # Only the binding side has to fit in a uint128
        return to_uint128(
            min(
                get_unbounded_liquidity_for_amount0(sqrt_ratio_x96, sqrt_ratio_b_x96, amount0),
                get_unbounded_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_x96, amount1),
            )
        )

    return get_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)


def get_amount0_for_liquidity(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    liquidity: Liquidity,
    round_up: bool = False,
) -> Amount:
    return get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up)


def get_amount1_for_liquidity(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    liquidity: Liquidity,
    round_up: bool = False,
) -> Amount:
    return get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up)


def get_amounts_for_liquidity(
    sqrt_ratio_x96: SqrtPriceX96,
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    liquidity: Liquidity,
    round_up: bool = False,
) -> tuple[Amount, Amount]:
    """
    Calculate the token0 and token1 amounts held by `liquidity` at the current price.

    The periphery contract rounds down, which gives the value of an existing position. Set
    `round_up` to get the amounts the pool charges when the liquidity is minted.
    """

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        return (
            get_amount0_for_liquidity(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up),
            0,
        )

    if sqrt_ratio_x96 < sqrt_ratio_b_x96:
        return (
            get_amount0_for_liquidity(sqrt_ratio_x96, sqrt_ratio_b_x96, liquidity, round_up),
            get_amount1_for_liquidity(sqrt_ratio_a_x96, sqrt_ratio_x96, liquidity, round_up),
        )

    return (
        0,
        get_amount1_for_liquidity(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up),
    )

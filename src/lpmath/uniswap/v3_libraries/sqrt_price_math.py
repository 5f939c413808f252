import functools

from lpmath.exceptions import EVMRevertError, NegativeAmount
from lpmath.types.aliases import Amount, Liquidity, SqrtPriceX96
from lpmath.uniswap.v3_libraries._config import V3_LIB_CACHE_SIZE
from lpmath.uniswap.v3_libraries.constants import Q96, Q96_RESOLUTION
from lpmath.uniswap.v3_libraries.full_math import muldiv, muldiv_rounding_up
from lpmath.uniswap.v3_libraries.unsafe_math import div_rounding_up

"""
ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/SqrtPriceMath.sol
"""


@functools.lru_cache(maxsize=V3_LIB_CACHE_SIZE)
def get_amount0_delta(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    liquidity: Liquidity,
    round_up: bool,
) -> Amount:
    """
    Calculate the amount of token0 held by `liquidity` between two prices,
    liquidity * (sqrt(upper) - sqrt(lower)) / (sqrt(upper) * sqrt(lower)).

    The prices may be given in either order.
    """

    if liquidity < 0:
        raise NegativeAmount("liquidity", liquidity)

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if not (sqrt_ratio_a_x96 > 0):
        raise EVMRevertError(error="required: sqrt_ratio_a_x96 > 0")

    numerator1 = liquidity << Q96_RESOLUTION
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            muldiv_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96,
        )
    return muldiv(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


@functools.lru_cache(maxsize=V3_LIB_CACHE_SIZE)
def get_amount1_delta(
    sqrt_ratio_a_x96: SqrtPriceX96,
    sqrt_ratio_b_x96: SqrtPriceX96,
    liquidity: Liquidity,
    round_up: bool,
) -> Amount:
    """
    Calculate the amount of token1 held by `liquidity` between two prices,
    liquidity * (sqrt(upper) - sqrt(lower)).

    The prices may be given in either order.
    """

    if liquidity < 0:
        raise NegativeAmount("liquidity", liquidity)

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if round_up:
        return muldiv_rounding_up(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
    return muldiv(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)

import dataclasses
import math
from fractions import Fraction
from typing import Self

from lpmath.constants import MAX_UINT160
from lpmath.exceptions import InvalidRatio, InvalidSqrtPrice
from lpmath.types.aliases import SqrtPriceX96, Tick
from lpmath.uniswap.v3_libraries.constants import Q192
from lpmath.uniswap.v3_libraries.tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio

"""
Q64.96 square root prices.

ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/FixedPoint96.sol
"""


def encode_sqrt_ratio_x96(numerator: int, denominator: int) -> SqrtPriceX96:
    """
    Calculate floor(sqrt(numerator / denominator) * 2^96).

    The square root is taken on the scaled integer, so the result is exact and does not depend on
    the platform's floating point behavior.

    A zero or negative denominator raises `InvalidRatio`. Square root prices are strictly positive,
    so a zero numerator, or any ratio that floors to a zero price, raises it too.
    """

    if denominator == 0 or numerator < 0 or denominator < 0:
        raise InvalidRatio(numerator, denominator)

    sqrt_price_x96 = math.isqrt((numerator << 192) // denominator)
    if not (0 < sqrt_price_x96 <= MAX_UINT160):
        raise InvalidRatio(numerator, denominator)
    return sqrt_price_x96


@dataclasses.dataclass(slots=True, frozen=True, order=True)
class FixedPointPrice:
    """
    A square root price stored as an unsigned Q64.96 fixed point integer. Comparisons and
    subtraction operate on the raw scaled value.

    This is the validated value type for callers. `get_optimal_liquidity` orders and differences the
    range bounds through it, while the lower-level `v3_libraries` functions take raw Q64.96 ints
    like the contracts they mirror.
    """

    value: SqrtPriceX96

    def __post_init__(self) -> None:
        if not (0 < self.value <= MAX_UINT160):
            raise InvalidSqrtPrice(self.value)

    @classmethod
    def from_ratio(cls, numerator: int, denominator: int) -> Self:
        return cls(encode_sqrt_ratio_x96(numerator, denominator))

    @classmethod
    def from_tick(cls, tick: Tick) -> Self:
        return cls(get_sqrt_ratio_at_tick(tick))

    def __int__(self) -> int:
        return self.value

    def __sub__(self, other: "FixedPointPrice | int") -> int:
        return self.value - int(other)

    @property
    def price(self) -> Fraction:
        """
        The exact token1/token0 price, i.e. the square of the un-scaled value.
        """

        return Fraction(self.value**2, Q192)

    @property
    def tick(self) -> Tick:
        """
        The greatest tick with a square root price at or below this price.
        """

        return get_tick_at_sqrt_ratio(self.value)

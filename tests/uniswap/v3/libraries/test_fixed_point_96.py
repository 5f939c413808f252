from fractions import Fraction

import hypothesis
import hypothesis.strategies
import pytest

from lpmath.constants import MAX_UINT160
from lpmath.exceptions import InvalidRatio, InvalidSqrtPrice
from lpmath.uniswap.v3_libraries.constants import Q96
from lpmath.uniswap.v3_libraries.fixed_point_96 import FixedPointPrice, encode_sqrt_ratio_x96
from lpmath.uniswap.v3_libraries.tick_math import MAX_TICK, MIN_TICK


def test_from_ratio_exact_squares():
    assert FixedPointPrice.from_ratio(1, 1).value == Q96
    assert FixedPointPrice.from_ratio(4, 1).value == 2 * Q96
    assert FixedPointPrice.from_ratio(1, 4).value == Q96 // 2
    assert FixedPointPrice.from_ratio(121, 100).value == 11 * Q96 // 10


def test_from_ratio_rejects_invalid_ratios():
    with pytest.raises(InvalidRatio):
        FixedPointPrice.from_ratio(1, 0)

    with pytest.raises(InvalidRatio):
        encode_sqrt_ratio_x96(0, 0)

    with pytest.raises(InvalidRatio):
        encode_sqrt_ratio_x96(-1, 1)

    with pytest.raises(InvalidRatio):
        encode_sqrt_ratio_x96(1, -1)

    # a zero numerator gives a zero price, which is not a valid square root price
    with pytest.raises(InvalidRatio):
        encode_sqrt_ratio_x96(0, 1)

    # does not fit in a uint160
    with pytest.raises(InvalidRatio):
        encode_sqrt_ratio_x96(2**200, 1)


@hypothesis.given(
    numerator=hypothesis.strategies.integers(min_value=1, max_value=2**100),
    denominator=hypothesis.strategies.integers(min_value=1, max_value=2**100),
)
def test_from_ratio_rounds_down(numerator: int, denominator: int):
    sqrt_price_x96 = encode_sqrt_ratio_x96(numerator, denominator)
    assert sqrt_price_x96**2 * denominator <= numerator << 192
    assert (sqrt_price_x96 + 1) ** 2 * denominator > numerator << 192


def test_value_bounds():
    for invalid_value in (0, -1, MAX_UINT160 + 1):
        with pytest.raises(InvalidSqrtPrice):
            FixedPointPrice(invalid_value)

    assert FixedPointPrice(MAX_UINT160).value == MAX_UINT160


def test_comparison_and_difference():
    low = FixedPointPrice.from_tick(-300)
    high = FixedPointPrice.from_tick(300)

    assert low < high
    assert high > low
    assert low == FixedPointPrice(low.value)
    assert max(high, low) is high
    assert high - low == high.value - low.value
    assert high - low.value == high.value - low.value
    assert int(high) == high.value


def test_price_and_tick():
    assert FixedPointPrice(Q96).price == Fraction(1)
    assert FixedPointPrice(2 * Q96).price == Fraction(4)
    assert FixedPointPrice.from_ratio(1, 4).price == Fraction(1, 4)

    for tick in (MIN_TICK, -300, 0, 300, MAX_TICK - 1):
        assert FixedPointPrice.from_tick(tick).tick == tick


def test_is_immutable():
    price = FixedPointPrice(Q96)
    with pytest.raises(AttributeError):
        price.value = 1  # type: ignore[misc]


def test_from_ratio_rejects_ratio_that_floors_to_zero():
    # sqrt(1 / 2**193) * 2**96 is below 1
    with pytest.raises(InvalidRatio):
        FixedPointPrice.from_ratio(1, 2**193)
    assert FixedPointPrice.from_ratio(1, 2**192).value == 1

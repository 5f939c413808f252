import hypothesis
import hypothesis.strategies
import pytest

from lpmath.exceptions import InvalidRange, InvalidTickSpacing, TickOutOfBounds
from lpmath.uniswap.v3_libraries.tick import (
    is_aligned,
    max_usable_tick,
    min_usable_tick,
    snap_tick,
    snap_to_spacing,
    validate_tick_range,
)
from lpmath.uniswap.v3_libraries.tick_math import MAX_TICK, MIN_TICK
from lpmath.uniswap.v3_types import TickRange

tick_spacings = hypothesis.strategies.sampled_from([1, 10, 60, 200])


def test_snap_aligned_range_is_unchanged():
    assert snap_to_spacing(-300, 300, 60) == TickRange(lower=-300, upper=300)


def test_snap_rounds_toward_negative_infinity():
    assert snap_tick(-301, 60) == -360
    assert snap_tick(-1, 60) == -60
    assert snap_tick(59, 60) == 0
    assert snap_tick(301, 60) == 300
    assert snap_to_spacing(-301, 301, 60) == TickRange(lower=-360, upper=300)
    assert snap_to_spacing(-1, 61, 60) == TickRange(lower=-60, upper=60)


def test_snap_rejects_collapsed_range():
    with pytest.raises(InvalidRange):
        snap_to_spacing(0, 59, 60)

    with pytest.raises(InvalidRange):
        snap_to_spacing(300, -300, 60)

    with pytest.raises(InvalidRange):
        snap_to_spacing(-300, -300, 60)


def test_snap_rejects_invalid_spacing():
    for tick_spacing in (0, -60):
        with pytest.raises(InvalidTickSpacing):
            snap_to_spacing(-300, 300, tick_spacing)


@hypothesis.given(
    tick_spacing=tick_spacings,
    multiple=hypothesis.strategies.integers(min_value=-4400, max_value=4400),
)
def test_snap_is_idempotent(tick_spacing: int, multiple: int):
    tick = multiple * tick_spacing
    tick_range = snap_to_spacing(tick, tick + tick_spacing, tick_spacing)
    assert tick_range == TickRange(lower=tick, upper=tick + tick_spacing)
    assert snap_to_spacing(tick_range.lower, tick_range.upper, tick_spacing) == tick_range


@hypothesis.given(
    tick_spacing=tick_spacings,
    raw_lower=hypothesis.strategies.integers(min_value=MIN_TICK, max_value=MAX_TICK),
    extra_width=hypothesis.strategies.integers(min_value=0, max_value=100_000),
)
def test_snap_never_rounds_up(tick_spacing: int, raw_lower: int, extra_width: int):
    raw_upper = raw_lower + tick_spacing + extra_width
    tick_range = snap_to_spacing(raw_lower, raw_upper, tick_spacing)

    assert tick_range.lower <= raw_lower
    assert tick_range.upper <= raw_upper
    assert raw_lower - tick_range.lower < tick_spacing
    assert raw_upper - tick_range.upper < tick_spacing
    assert is_aligned(tick_range.lower, tick_spacing)
    assert is_aligned(tick_range.upper, tick_spacing)


def test_validate_tick_range():
    validate_tick_range(TickRange(lower=-300, upper=300), 60)
    validate_tick_range(TickRange(lower=min_usable_tick(60), upper=max_usable_tick(60)), 60)

    with pytest.raises(InvalidRange, match="not a multiple of spacing 60"):
        validate_tick_range(TickRange(lower=-300, upper=301), 60)

    with pytest.raises(InvalidRange, match="lower bound must be below the upper bound"):
        validate_tick_range(TickRange(lower=300, upper=-300), 60)

    with pytest.raises(InvalidRange):
        validate_tick_range(TickRange(lower=300, upper=300), 60)

    # Floor snapping of the minimum tick lands outside the protocol limits
    with pytest.raises(TickOutOfBounds):
        validate_tick_range(snap_to_spacing(MIN_TICK, 0, 60), 60)


def test_usable_ticks():
    assert max_usable_tick(1) == MAX_TICK
    assert min_usable_tick(1) == MIN_TICK
    assert max_usable_tick(10) == 887270
    assert min_usable_tick(10) == -887270
    assert max_usable_tick(60) == 887220
    assert min_usable_tick(60) == -887220
    assert max_usable_tick(200) == 887200
    assert min_usable_tick(200) == -887200

    with pytest.raises(InvalidTickSpacing):
        max_usable_tick(0)


def test_tick_range_width():
    assert TickRange(lower=-300, upper=300).width == 600

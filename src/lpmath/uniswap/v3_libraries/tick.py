from lpmath.exceptions import InvalidRange, InvalidTickSpacing, TickOutOfBounds
from lpmath.types.aliases import Tick, TickSpacing
from lpmath.uniswap.v3_libraries.tick_math import MAX_TICK, MIN_TICK
from lpmath.uniswap.v3_types import TickRange


def _check_tick_spacing(tick_spacing: TickSpacing) -> None:
    if tick_spacing <= 0:
        raise InvalidTickSpacing(tick_spacing)


def snap_tick(tick: Tick, tick_spacing: TickSpacing) -> Tick:
    """
    Round the tick down to the nearest multiple of the spacing. Python's floor division rounds
    toward negative infinity, so negative ticks also move down, e.g. -301 -> -360 for spacing 60.
    """

    _check_tick_spacing(tick_spacing)
    return (tick // tick_spacing) * tick_spacing


def snap_to_spacing(raw_lower: Tick, raw_upper: Tick, tick_spacing: TickSpacing) -> TickRange:
    """
    Align both bounds to the tick spacing grid, never rounding a bound upward. Snapping an aligned
    range returns it unchanged.
    """

    tick_range = TickRange(
        lower=snap_tick(raw_lower, tick_spacing),
        upper=snap_tick(raw_upper, tick_spacing),
    )
    if tick_range.lower >= tick_range.upper:
        raise InvalidRange(
            tick_range.lower,
            tick_range.upper,
            reason="snapped lower bound must be below the snapped upper bound",
        )
    return tick_range


def is_aligned(tick: Tick, tick_spacing: TickSpacing) -> bool:
    _check_tick_spacing(tick_spacing)
    return tick % tick_spacing == 0


def validate_tick_range(tick_range: TickRange, tick_spacing: TickSpacing) -> None:
    """
    Check that the range can be minted: both bounds inside the protocol limits and aligned to the
    spacing, with the lower bound strictly below the upper bound.
    """

    for tick in (tick_range.lower, tick_range.upper):
        if not (MIN_TICK <= tick <= MAX_TICK):
            raise TickOutOfBounds(tick)
        if not is_aligned(tick, tick_spacing):
            raise InvalidRange(
                tick_range.lower,
                tick_range.upper,
                reason=f"tick {tick} is not a multiple of spacing {tick_spacing}",
            )

    if tick_range.lower >= tick_range.upper:
        raise InvalidRange(
            tick_range.lower,
            tick_range.upper,
            reason="lower bound must be below the upper bound",
        )


def max_usable_tick(tick_spacing: TickSpacing) -> Tick:
    """
    Given a tick spacing, compute the maximum usable tick
    """

    _check_tick_spacing(tick_spacing)
    return (MAX_TICK // tick_spacing) * tick_spacing


def min_usable_tick(tick_spacing: TickSpacing) -> Tick:
    """
    Given a tick spacing, compute the minimum usable tick. The protocol truncates toward zero here,
    so the result stays inside the tick limits.
    """

    _check_tick_spacing(tick_spacing)
    return -max_usable_tick(tick_spacing)

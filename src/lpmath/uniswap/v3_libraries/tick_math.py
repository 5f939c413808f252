import functools

from lpmath.constants import MAX_UINT256
from lpmath.exceptions import InvalidSqrtPrice, TickOutOfBounds
from lpmath.types.aliases import SqrtPriceX96, Tick
from lpmath.uniswap.v3_libraries._config import V3_LIB_CACHE_SIZE
from lpmath.uniswap.v3_libraries.constants import Q128

"""
ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/TickMath.sol
"""

MIN_TICK = -887272
MAX_TICK = -MIN_TICK
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

# Q128.128 values of 1/sqrt(1.0001)^(2^n), keyed by the tick bit they apply to. The value for bit
# 0 is the starting ratio for odd ticks.
_TICK_BIT_RATIOS = (
    (0x1, 340265354078544963557816517032075149313),
    (0x2, 340248342086729790484326174814286782778),
    (0x4, 340214320654664324051920982716015181260),
    (0x8, 340146287995602323631171512101879684304),
    (0x10, 340010263488231146823593991679159461444),
    (0x20, 339738377640345403697157401104375502016),
    (0x40, 339195258003219555707034227454543997025),
    (0x80, 338111622100601834656805679988414885971),
    (0x100, 335954724994790223023589805789778977700),
    (0x200, 331682121138379247127172139078559817300),
    (0x400, 323299236684853023288211250268160618739),
    (0x800, 307163716377032989948697243942600083929),
    (0x1000, 277268403626896220162999269216087595045),
    (0x2000, 225923453940442621947126027127485391333),
    (0x4000, 149997214084966997727330242082538205943),
    (0x8000, 66119101136024775622716233608466517926),
    (0x10000, 12847376061809297530290974190478138313),
    (0x20000, 485053260817066172746253684029974020),
    (0x40000, 691415978906521570653435304214168),
    (0x80000, 1404880482679654955896180642),
)

# Bounds on the error of the log_sqrt10001 approximation, valid for the full range of supported
# prices. The true tick is one of the two candidates they produce.
_LOG_ERROR_LOWER = 3402992956809132418596140100660247210
_LOG_ERROR_UPPER = 291339464771989622907027621153398088495

# log_sqrt(1.0001)(2) as a Q64.64 number
_LOG_SQRT10001_OF_2 = 255738958999603826347141


@functools.lru_cache(maxsize=V3_LIB_CACHE_SIZE)
def get_sqrt_ratio_at_tick(tick: Tick) -> SqrtPriceX96:
    """
    Calculate sqrt(1.0001^tick) * 2^96, the Q64.96 square root price at the given tick.

    The ratio for |tick| is built by binary exponentiation over the precomputed reciprocal powers in
    Q128.128 form, so no floating point value is involved. The reciprocal is taken for positive
    ticks, which keeps the prices at `tick` and `-tick` inverse to each other within one unit of
    rounding. The final shift to Q64.96 rounds up, so `get_tick_at_sqrt_ratio` of the output always
    returns the input tick.
    """

    abs_tick = abs(tick)
    if abs_tick > MAX_TICK:
        raise TickOutOfBounds(tick)

    ratio = Q128
    for tick_bit, ratio_multiplier in _TICK_BIT_RATIOS:
        if abs_tick & tick_bit:
            ratio = (ratio * ratio_multiplier) >> 128

    if tick > 0:
        ratio = MAX_UINT256 // ratio

    # Q128.128 -> Q64.96, rounding up. The result always fits within 160 bits because of the tick
    # bounds.
    return (ratio >> 32) + (ratio % (1 << 32) != 0)


@functools.lru_cache(maxsize=V3_LIB_CACHE_SIZE)
def get_tick_at_sqrt_ratio(sqrt_price_x96: SqrtPriceX96) -> Tick:
    """
    Calculate the greatest tick such that get_sqrt_ratio_at_tick(tick) <= sqrt_price_x96.
    """

    if not (MIN_SQRT_RATIO <= sqrt_price_x96 < MAX_SQRT_RATIO):
        raise InvalidSqrtPrice(sqrt_price_x96)

    ratio = sqrt_price_x96 << 32

    # Normalize the ratio to 128 significant bits
    msb = ratio.bit_length() - 1
    r = ratio >> (msb - 127) if msb >= 128 else ratio << (127 - msb)  # noqa: PLR2004

    # Integer part of log2, then 14 fractional bits by repeated squaring
    log_2 = (msb - 128) << 64
    for bit in range(63, 49, -1):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << bit
        r >>= f

    log_sqrt10001 = log_2 * _LOG_SQRT10001_OF_2

    tick_low = (log_sqrt10001 - _LOG_ERROR_LOWER) >> 128
    tick_high = (log_sqrt10001 + _LOG_ERROR_UPPER) >> 128

    if tick_low == tick_high:
        return tick_low
    return tick_high if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96 else tick_low

from fractions import Fraction

from eth_abi.packed import encode_packed
from eth_typing import ChecksumAddress
from eth_utils.address import is_address, to_checksum_address
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from lpmath.exceptions import (
    DegenerateRange,
    InvalidSqrtPrice,
    LpMathTypeError,
    LpMathValueError,
    NegativeAmount,
    TickOutOfBounds,
)
from lpmath.types.aliases import Amount, Liquidity, SqrtPriceX96, Tick
from lpmath.uniswap.v3_libraries.constants import Q192
from lpmath.uniswap.v3_libraries.fixed_point_96 import FixedPointPrice
from lpmath.uniswap.v3_libraries.liquidity_amounts import (
    get_unbounded_liquidity_for_amount0,
    get_unbounded_liquidity_for_amount1,
)
from lpmath.uniswap.v3_libraries.tick_math import MAX_TICK, MIN_TICK
from lpmath.uniswap.v3_types import TickRange


def exchange_rate_from_sqrt_price_x96(sqrt_price_x96: SqrtPriceX96) -> Fraction:
    # ref: https://blog.uniswap.org/uniswap-v3-math-primer
    return Fraction(sqrt_price_x96**2, Q192)


def get_optimal_liquidity(
    amount0_desired: Amount,
    amount1_desired: Amount,
    current_sqrt_price_x96: SqrtPriceX96,
    tick_range: TickRange,
) -> Liquidity:
    """
    Calculate the liquidity that can be minted over `tick_range` without requiring more than the
    desired amount of either token.

    Both partial liquidities are measured over the whole range and the smaller one is returned, which
    treats the current price as lying inside the range. The current price is validated but does not
    select a formula. Use `get_liquidity_for_amounts` for the protocol's three-region calculation.

    Liquidity has arbitrary precision here: neither partial liquidity is limited to a uint128, so a
    very large non-binding amount never fails the calculation.
    """

    if amount0_desired < 0:
        raise NegativeAmount("amount0_desired", amount0_desired)
    if amount1_desired < 0:
        raise NegativeAmount("amount1_desired", amount1_desired)
    if current_sqrt_price_x96 <= 0:
        raise InvalidSqrtPrice(current_sqrt_price_x96)

    # The formulas are order-sensitive
    price_lower, price_upper = sorted(
        (FixedPointPrice.from_tick(tick_range.lower), FixedPointPrice.from_tick(tick_range.upper))
    )
    if price_upper - price_lower == 0:
        raise DegenerateRange(price_lower.value)

    return min(
        get_unbounded_liquidity_for_amount0(price_lower.value, price_upper.value, amount0_desired),
        get_unbounded_liquidity_for_amount1(price_lower.value, price_upper.value, amount1_desired),
    )


def _to_owner_address(owner: str | bytes) -> ChecksumAddress:
    if isinstance(owner, bytes):
        owner = HexBytes(owner).to_0x_hex()
    if not isinstance(owner, str):
        raise LpMathTypeError(message=f"Owner must be an address string or bytes, got {owner!r}")
    if not is_address(owner):
        raise LpMathValueError(message=f"{owner} is not a valid address")
    return to_checksum_address(owner)


def get_position_key(
    owner: ChecksumAddress | str | bytes,
    tick_lower: Tick,
    tick_upper: Tick,
) -> HexBytes:
    """
    Generate the key a V3 pool uses to store a position,
    keccak256(abi.encodePacked(owner, tickLower, tickUpper)).

    The packed encoding is the 20 byte address followed by each tick as a 3 byte, big-endian, two's
    complement integer.

    Adapted from https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/Position.sol
    """

    owner_address = _to_owner_address(owner)

    for tick in (tick_lower, tick_upper):
        if not (MIN_TICK <= tick <= MAX_TICK):
            raise TickOutOfBounds(tick)

    return HexBytes(
        keccak(
            encode_packed(
                ("address", "int24", "int24"),
                (owner_address, tick_lower, tick_upper),
            )
        )
    )


def get_position_key_for_range(
    owner: ChecksumAddress | str | bytes,
    tick_range: TickRange,
) -> HexBytes:
    return get_position_key(owner, tick_range.lower, tick_range.upper)

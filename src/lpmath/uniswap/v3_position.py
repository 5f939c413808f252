from collections.abc import Iterable
from weakref import WeakSet

from eth_typing import ChecksumAddress
from eth_utils.address import to_checksum_address
from web3.types import BlockIdentifier

from lpmath.config import settings
from lpmath.exceptions import InvalidSqrtPrice, InvalidTickSpacing, NegativeAmount
from lpmath.logging import logger
from lpmath.types.aliases import Amount, SqrtPriceX96, Tick, TickSpacing
from lpmath.types.concrete import PublisherMixin, Subscriber
from lpmath.uniswap.v3_functions import get_optimal_liquidity, get_position_key_for_range
from lpmath.uniswap.v3_libraries.functions import to_uint128
from lpmath.uniswap.v3_libraries.liquidity_amounts import (
    get_amounts_for_liquidity,
    get_liquidity_for_amounts,
)
from lpmath.uniswap.v3_libraries.sqrt_price_math import get_amount0_delta, get_amount1_delta
from lpmath.uniswap.v3_libraries.tick import snap_to_spacing, validate_tick_range
from lpmath.uniswap.v3_libraries.tick_math import get_sqrt_ratio_at_tick
from lpmath.uniswap.v3_pool_reader import UniswapV3PoolReader
from lpmath.uniswap.v3_types import UniswapV3PositionPlan, UniswapV3PositionPlanned


class UniswapV3PositionPlanner(PublisherMixin):
    """
    Computes the parameters for minting a position in a pool with a given tick spacing.

    The requested bounds are snapped to the spacing, converted to square root prices, and the
    liquidity for the desired amounts is calculated along with the amounts it consumes and the
    position key. By default the liquidity is the smaller of the two single-token liquidities over
    the whole range; set `protocol_exact` to use the three-region calculation that depends on where
    the current price sits relative to the range.

    Each plan is published to subscribers as a `UniswapV3PositionPlanned` message. The planner holds
    no pool state, so a plan is only valid for the price it was computed with. Slippage limits
    for the mint call are the caller's responsibility.
    """

    def __init__(
        self,
        tick_spacing: TickSpacing,
        *,
        protocol_exact: bool | None = None,
        subscribers: Iterable[Subscriber] | None = None,
    ) -> None:
        if tick_spacing <= 0:
            raise InvalidTickSpacing(tick_spacing)
        if tick_spacing not in settings.liquidity.tick_spacings:
            logger.warning(
                f"Tick spacing {tick_spacing} is not one of the configured spacings "
                f"{settings.liquidity.tick_spacings}"
            )

        self.tick_spacing = tick_spacing
        self.protocol_exact = (
            settings.liquidity.protocol_exact if protocol_exact is None else protocol_exact
        )

        self._subscribers: WeakSet[Subscriber] = WeakSet()
        for subscriber in subscribers or ():
            self.subscribe(subscriber)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(tick_spacing={self.tick_spacing}, "
            f"protocol_exact={self.protocol_exact})"
        )

    def plan(
        self,
        owner: ChecksumAddress | str,
        tick_lower: Tick,
        tick_upper: Tick,
        amount0_desired: Amount,
        amount1_desired: Amount,
        sqrt_price_x96: SqrtPriceX96,
    ) -> UniswapV3PositionPlan:
        if amount0_desired < 0:
            raise NegativeAmount("amount0_desired", amount0_desired)
        if amount1_desired < 0:
            raise NegativeAmount("amount1_desired", amount1_desired)
        if sqrt_price_x96 <= 0:
            raise InvalidSqrtPrice(sqrt_price_x96)

        tick_range = snap_to_spacing(tick_lower, tick_upper, self.tick_spacing)
        validate_tick_range(tick_range, self.tick_spacing)

        sqrt_price_lower_x96 = get_sqrt_ratio_at_tick(tick_range.lower)
        sqrt_price_upper_x96 = get_sqrt_ratio_at_tick(tick_range.upper)

        if self.protocol_exact:
            liquidity = get_liquidity_for_amounts(
                sqrt_price_x96,
                sqrt_price_lower_x96,
                sqrt_price_upper_x96,
                amount0_desired,
                amount1_desired,
            )
            amount0, amount1 = get_amounts_for_liquidity(
                sqrt_price_x96,
                sqrt_price_lower_x96,
                sqrt_price_upper_x96,
                liquidity,
                round_up=True,
            )
        else:
            # The pool stores liquidity as a uint128
            liquidity = to_uint128(
                get_optimal_liquidity(
                    amount0_desired,
                    amount1_desired,
                    sqrt_price_x96,
                    tick_range,
                )
            )
            amount0 = get_amount0_delta(
                sqrt_price_lower_x96, sqrt_price_upper_x96, liquidity, round_up=True
            )
            amount1 = get_amount1_delta(
                sqrt_price_lower_x96, sqrt_price_upper_x96, liquidity, round_up=True
            )

        position_key = get_position_key_for_range(owner, tick_range)

        plan = UniswapV3PositionPlan(
            owner=to_checksum_address(owner),
            tick_range=tick_range,
            tick_spacing=self.tick_spacing,
            sqrt_price_x96=sqrt_price_x96,
            sqrt_price_lower_x96=sqrt_price_lower_x96,
            sqrt_price_upper_x96=sqrt_price_upper_x96,
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
            position_key=position_key,
        )
        logger.debug(
            f"{self}: planned liquidity {liquidity} over ({tick_range.lower}, {tick_range.upper}) "
            f"using amounts ({amount0}, {amount1}) of ({amount0_desired}, {amount1_desired})"
        )

        self._notify_subscribers(
            UniswapV3PositionPlanned(
                plan=plan,
                amount0_desired=amount0_desired,
                amount1_desired=amount1_desired,
            )
        )
        return plan


def plan_position_for_pool(
    reader: UniswapV3PoolReader,
    owner: ChecksumAddress | str,
    tick_lower: Tick,
    tick_upper: Tick,
    amount0_desired: Amount,
    amount1_desired: Amount,
    *,
    protocol_exact: bool | None = None,
    subscribers: Iterable[Subscriber] | None = None,
    block_identifier: BlockIdentifier | None = None,
) -> UniswapV3PositionPlan:
    """
    Plan a position using the tick spacing and current price read from a deployed pool.
    """

    planner = UniswapV3PositionPlanner(
        tick_spacing=reader.tick_spacing(block_identifier=block_identifier),
        protocol_exact=protocol_exact,
        subscribers=subscribers,
    )
    return planner.plan(
        owner=owner,
        tick_lower=tick_lower,
        tick_upper=tick_upper,
        amount0_desired=amount0_desired,
        amount1_desired=amount1_desired,
        sqrt_price_x96=reader.slot0(block_identifier=block_identifier).sqrt_price_x96,
    )

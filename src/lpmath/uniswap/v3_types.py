import dataclasses

from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from lpmath.types.aliases import Amount, Liquidity, SqrtPriceX96, Tick, TickSpacing
from lpmath.types.concrete import AbstractPublisherMessage


@dataclasses.dataclass(slots=True, frozen=True)
class TickRange:
    """
    The bounds of a liquidity position. A usable range has `lower < upper` with both bounds
    aligned to the pool's tick spacing, which `snap_to_spacing` and `validate_tick_range` enforce.
    """

    lower: Tick
    upper: Tick

    @property
    def width(self) -> int:
        return self.upper - self.lower


@dataclasses.dataclass(slots=True, frozen=True)
class UniswapV3PoolSlot:
    """
    The price fields of a pool's `slot0`.
    """

    sqrt_price_x96: SqrtPriceX96
    tick: Tick


@dataclasses.dataclass(slots=True, frozen=True)
class UniswapV3PositionInfo:
    """
    Stored state of a position, as returned by the pool's `positions` getter.
    """

    liquidity: Liquidity
    fee_growth_inside0_last_x128: int
    fee_growth_inside1_last_x128: int
    tokens_owed0: int
    tokens_owed1: int


@dataclasses.dataclass(slots=True, frozen=True)
class UniswapV3PositionPlan:
    """
    The parameters for minting a position: the aligned range, the liquidity to request, the token
    amounts that liquidity consumes (rounded up, as the pool charges them), and the key used to
    look the position up after the mint is confirmed.
    """

    owner: ChecksumAddress
    tick_range: TickRange
    tick_spacing: TickSpacing
    sqrt_price_x96: SqrtPriceX96
    sqrt_price_lower_x96: SqrtPriceX96
    sqrt_price_upper_x96: SqrtPriceX96
    liquidity: Liquidity
    amount0: Amount
    amount1: Amount
    position_key: HexBytes = dataclasses.field(compare=False)


@dataclasses.dataclass(slots=True, frozen=True)
class UniswapV3PositionPlanned(AbstractPublisherMessage):
    """
    A message notifying that the publisher (a position planner) has computed a new plan.
    """

    plan: UniswapV3PositionPlan
    amount0_desired: Amount
    amount1_desired: Amount

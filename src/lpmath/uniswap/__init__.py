from .v3_types import (
    TickRange,
    UniswapV3PoolSlot,
    UniswapV3PositionInfo,
    UniswapV3PositionPlan,
    UniswapV3PositionPlanned,
)

# isort: split

from . import v3_libraries
from .v3_functions import (
    exchange_rate_from_sqrt_price_x96,
    get_optimal_liquidity,
    get_position_key,
    get_position_key_for_range,
)
from .v3_pool_reader import UniswapV3PoolReader
from .v3_position import UniswapV3PositionPlanner, plan_position_for_pool

__all__ = (
    "TickRange",
    "UniswapV3PoolReader",
    "UniswapV3PoolSlot",
    "UniswapV3PositionInfo",
    "UniswapV3PositionPlan",
    "UniswapV3PositionPlanned",
    "UniswapV3PositionPlanner",
    "exchange_rate_from_sqrt_price_x96",
    "get_optimal_liquidity",
    "get_position_key",
    "get_position_key_for_range",
    "plan_position_for_pool",
    "v3_libraries",
)

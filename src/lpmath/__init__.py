from .config import settings
from .version import __version__

# isort: split

from .logging import logger
from .uniswap import (
    TickRange,
    UniswapV3PoolReader,
    UniswapV3PositionPlan,
    UniswapV3PositionPlanner,
    get_optimal_liquidity,
    get_position_key,
    plan_position_for_pool,
)
from .uniswap.v3_libraries.fixed_point_96 import FixedPointPrice, encode_sqrt_ratio_x96
from .uniswap.v3_libraries.tick import snap_to_spacing
from .uniswap.v3_libraries.tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio

__all__ = (
    "FixedPointPrice",
    "TickRange",
    "UniswapV3PoolReader",
    "UniswapV3PositionPlan",
    "UniswapV3PositionPlanner",
    "__version__",
    "cli",
    "constants",
    "encode_sqrt_ratio_x96",
    "exceptions",
    "functions",
    "get_optimal_liquidity",
    "get_position_key",
    "get_sqrt_ratio_at_tick",
    "get_tick_at_sqrt_ratio",
    "logger",
    "plan_position_for_pool",
    "settings",
    "snap_to_spacing",
    "types",
    "uniswap",
    "validation",
)

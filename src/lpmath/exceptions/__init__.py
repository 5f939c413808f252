from lpmath.exceptions.base import LpMathError, LpMathTypeError, LpMathValueError
from lpmath.exceptions.evm import EVMRevertError
from lpmath.exceptions.liquidity import (
    DegenerateRange,
    InvalidRange,
    InvalidRatio,
    InvalidSqrtPrice,
    InvalidTickSpacing,
    LiquidityMathError,
    NegativeAmount,
    TickOutOfBounds,
)
from lpmath.exceptions.pool import PoolReaderError, UnexpectedPoolResponse

from . import evm, liquidity, pool

__all__ = (
    "DegenerateRange",
    "EVMRevertError",
    "InvalidRange",
    "InvalidRatio",
    "InvalidSqrtPrice",
    "InvalidTickSpacing",
    "LiquidityMathError",
    "LpMathError",
    "LpMathTypeError",
    "LpMathValueError",
    "NegativeAmount",
    "PoolReaderError",
    "TickOutOfBounds",
    "UnexpectedPoolResponse",
    "evm",
    "liquidity",
    "pool",
)

from . import fixed_point_96 as FixedPoint96
from . import full_math as FullMath
from . import liquidity_amounts as LiquidityAmounts
from . import sqrt_price_math as SqrtPriceMath
from . import tick as Tick
from . import tick_math as TickMath
from . import unsafe_math as UnsafeMath

__all__ = (
    "FixedPoint96",
    "FullMath",
    "LiquidityAmounts",
    "SqrtPriceMath",
    "Tick",
    "TickMath",
    "UnsafeMath",
)

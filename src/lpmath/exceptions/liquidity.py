from typing import Any

from lpmath.exceptions.base import LpMathValueError


class LiquidityMathError(LpMathValueError):
    """
    Exception raised inside the tick, price and liquidity helpers.
    """


class InvalidRatio(LiquidityMathError):
    """
    A price ratio cannot be converted to a square root price, e.g. the denominator is zero.
    """

    def __init__(self, numerator: int, denominator: int) -> None:
        self.numerator = numerator
        self.denominator = denominator
        super().__init__(message=f"Invalid price ratio {numerator}/{denominator}")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.numerator, self.denominator)


class InvalidSqrtPrice(LiquidityMathError):
    """
    A square root price is zero, negative, or outside the range supported by the tick math.
    """

    def __init__(self, sqrt_price_x96: int) -> None:
        self.sqrt_price_x96 = sqrt_price_x96
        super().__init__(message=f"Invalid sqrt price {sqrt_price_x96}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.sqrt_price_x96,)


class TickOutOfBounds(LiquidityMathError):
    def __init__(self, tick: int) -> None:
        """
        Raised when the magnitude of a tick exceeds the protocol limit.
        """

        self.tick = tick
        super().__init__(message=f"Tick {tick} is outside the valid range")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.tick,)


class InvalidTickSpacing(LiquidityMathError):
    def __init__(self, tick_spacing: int) -> None:
        """
        Raised when a tick spacing is not a positive integer.
        """

        self.tick_spacing = tick_spacing
        super().__init__(message=f"Tick spacing {tick_spacing} must be positive")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.tick_spacing,)


class InvalidRange(LiquidityMathError):
    """
    Raised when a tick range does not have a lower bound strictly below its upper bound, or when its
    bounds are not aligned to the tick spacing.
    """

    def __init__(self, tick_lower: int, tick_upper: int, reason: str | None = None) -> None:
        self.tick_lower = tick_lower
        self.tick_upper = tick_upper
        self.reason = reason
        message = f"Invalid tick range ({tick_lower}, {tick_upper})"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message=message)

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.tick_lower, self.tick_upper, self.reason)


class DegenerateRange(LiquidityMathError):
    """
    Raised when both bounds of a price range have the same square root price, which would divide by
    zero in the liquidity formulas.
    """

    def __init__(self, sqrt_price_x96: int) -> None:
        self.sqrt_price_x96 = sqrt_price_x96
        super().__init__(message=f"Price range is empty, both bounds are at {sqrt_price_x96}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.sqrt_price_x96,)


class NegativeAmount(LiquidityMathError):
    """
    Raised when a token amount or a liquidity input is negative.
    """

    def __init__(self, name: str, amount: int) -> None:
        self.name = name
        self.amount = amount
        super().__init__(message=f"{name} must be non-negative, got {amount}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.name, self.amount)

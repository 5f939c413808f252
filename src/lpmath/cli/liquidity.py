import click

from lpmath.cli import cli
from lpmath.cli.utils import echo_fields, reported_errors
from lpmath.uniswap.v3_functions import get_optimal_liquidity
from lpmath.uniswap.v3_libraries.liquidity_amounts import (
    get_amounts_for_liquidity,
    get_liquidity_for_amounts,
)
from lpmath.uniswap.v3_libraries.sqrt_price_math import get_amount0_delta, get_amount1_delta
from lpmath.uniswap.v3_libraries.tick_math import get_sqrt_ratio_at_tick
from lpmath.uniswap.v3_types import TickRange


@cli.group()
def liquidity() -> None:
    """
    Liquidity sizing commands
    """


@liquidity.command("optimal")
@click.option("--amount0", type=int, required=True, help="Desired amount of token0, in wei")
@click.option("--amount1", type=int, required=True, help="Desired amount of token1, in wei")
@click.option("--lower", type=int, required=True, help="Lower tick of the range")
@click.option("--upper", type=int, required=True, help="Upper tick of the range")
@click.option("--sqrt-price-x96", type=int, help="Current Q64.96 square root price")
@click.option("--tick", "current_tick", type=int, help="Current tick, used if no price is given")
@click.option(
    "--exact",
    is_flag=True,
    help="Use the three-region formula that depends on the current price",
)
def liquidity_optimal(
    amount0: int,
    amount1: int,
    lower: int,
    upper: int,
    sqrt_price_x96: int | None,
    current_tick: int | None,
    exact: bool,
) -> None:
    """
    Calculate the liquidity that the desired amounts can mint over a tick range, and the token
    amounts that liquidity consumes.
    """

    if sqrt_price_x96 is None and current_tick is None:
        raise click.UsageError("One of --sqrt-price-x96 or --tick is required.")

    with reported_errors():
        if sqrt_price_x96 is None:
            sqrt_price_x96 = get_sqrt_ratio_at_tick(current_tick)

        if exact:
            sqrt_price_lower_x96 = get_sqrt_ratio_at_tick(lower)
            sqrt_price_upper_x96 = get_sqrt_ratio_at_tick(upper)
            result = get_liquidity_for_amounts(
                sqrt_price_x96, sqrt_price_lower_x96, sqrt_price_upper_x96, amount0, amount1
            )
            required0, required1 = get_amounts_for_liquidity(
                sqrt_price_x96, sqrt_price_lower_x96, sqrt_price_upper_x96, result, round_up=True
            )
        else:
            result = get_optimal_liquidity(
                amount0, amount1, sqrt_price_x96, TickRange(lower=lower, upper=upper)
            )
            sqrt_price_lower_x96 = get_sqrt_ratio_at_tick(lower)
            sqrt_price_upper_x96 = get_sqrt_ratio_at_tick(upper)
            required0 = get_amount0_delta(
                sqrt_price_lower_x96, sqrt_price_upper_x96, result, round_up=True
            )
            required1 = get_amount1_delta(
                sqrt_price_lower_x96, sqrt_price_upper_x96, result, round_up=True
            )

    echo_fields({"liquidity": result, "amount0": required0, "amount1": required1})

import click

from lpmath.cli import cli
from lpmath.cli.utils import echo_fields, reported_errors
from lpmath.uniswap.v3_functions import exchange_rate_from_sqrt_price_x96
from lpmath.uniswap.v3_libraries.fixed_point_96 import FixedPointPrice
from lpmath.uniswap.v3_libraries.tick import snap_to_spacing


@cli.group()
def tick() -> None:
    """
    Tick and price conversion commands
    """


@tick.command("price")
@click.argument("tick_index", metavar="TICK", type=int)
def tick_price(tick_index: int) -> None:
    """
    Show the Q64.96 square root price at a tick.
    """

    with reported_errors():
        sqrt_price = FixedPointPrice.from_tick(tick_index)

    echo_fields(
        {
            "tick": tick_index,
            "sqrt_price_x96": sqrt_price.value,
            "price": float(sqrt_price.price),
        }
    )


@tick.command("at-price")
@click.argument("sqrt_price_x96", type=int)
def tick_at_price(sqrt_price_x96: int) -> None:
    """
    Show the greatest tick at or below a Q64.96 square root price.
    """

    with reported_errors():
        sqrt_price = FixedPointPrice(sqrt_price_x96)
        tick_index = sqrt_price.tick

    echo_fields(
        {
            "sqrt_price_x96": sqrt_price_x96,
            "tick": tick_index,
            "price": float(exchange_rate_from_sqrt_price_x96(sqrt_price_x96)),
        }
    )


@tick.command("snap")
@click.argument("lower", type=int)
@click.argument("upper", type=int)
@click.option("--spacing", type=int, required=True, help="Tick spacing of the pool")
def tick_snap(lower: int, upper: int, spacing: int) -> None:
    """
    Round a tick range down to the spacing grid.
    """

    with reported_errors():
        tick_range = snap_to_spacing(lower, upper, spacing)

    echo_fields({"lower": tick_range.lower, "upper": tick_range.upper})

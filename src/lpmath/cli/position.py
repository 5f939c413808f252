import click

from lpmath.cli import cli
from lpmath.cli.utils import reported_errors
from lpmath.uniswap.v3_functions import get_position_key


@cli.group()
def position() -> None:
    """
    Position lookup commands
    """


@position.command("key")
@click.argument("owner")
@click.argument("lower", type=int)
@click.argument("upper", type=int)
def position_key(owner: str, lower: int, upper: int) -> None:
    """
    Show the storage key a pool uses for OWNER's position between LOWER and UPPER.
    """

    with reported_errors():
        key = get_position_key(owner, lower, upper)

    click.echo(key.to_0x_hex())

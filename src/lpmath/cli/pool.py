import click

from lpmath.cli import cli
from lpmath.cli.utils import echo_fields, get_web3_from_config, reported_errors
from lpmath.uniswap.v3_pool_reader import UniswapV3PoolReader
from lpmath.uniswap.v3_position import plan_position_for_pool


@cli.group()
def pool() -> None:
    """
    Read-only pool commands, using the RPC endpoints in the configuration file
    """


@pool.command("state")
@click.argument("address")
@click.option("--chain-id", type=int, default=1, show_default=True)
def pool_state(address: str, chain_id: int) -> None:
    """
    Show the tokens, price and tick spacing of the pool at ADDRESS.
    """

    reader = UniswapV3PoolReader(address=address, w3=get_web3_from_config(chain_id=chain_id))

    with reported_errors():
        slot0 = reader.slot0()
        echo_fields(
            {
                "pool": reader.address,
                "token0": reader.token0(),
                "token1": reader.token1(),
                "tick_spacing": reader.tick_spacing(),
                "liquidity": reader.liquidity(),
                "sqrt_price_x96": slot0.sqrt_price_x96,
                "tick": slot0.tick,
            }
        )


@pool.command("plan")
@click.argument("address")
@click.option("--chain-id", type=int, default=1, show_default=True)
@click.option("--owner", required=True, help="Address that will own the position")
@click.option("--lower", type=int, required=True, help="Requested lower tick")
@click.option("--upper", type=int, required=True, help="Requested upper tick")
@click.option("--amount0", type=int, required=True, help="Desired amount of token0, in wei")
@click.option("--amount1", type=int, required=True, help="Desired amount of token1, in wei")
@click.option(
    "--exact",
    is_flag=True,
    default=None,
    help="Use the three-region formula that depends on the current price",
)
def pool_plan(
    address: str,
    chain_id: int,
    owner: str,
    lower: int,
    upper: int,
    amount0: int,
    amount1: int,
    exact: bool | None,
) -> None:
    """
    Compute the mint parameters for a position in the pool at ADDRESS, and show any liquidity
    already stored for that position.
    """

    reader = UniswapV3PoolReader(address=address, w3=get_web3_from_config(chain_id=chain_id))

    with reported_errors():
        plan = plan_position_for_pool(
            reader,
            owner=owner,
            tick_lower=lower,
            tick_upper=upper,
            amount0_desired=amount0,
            amount1_desired=amount1,
            protocol_exact=exact,
        )
        existing = reader.position(plan.position_key)

    echo_fields(
        {
            "owner": plan.owner,
            "tick_lower": plan.tick_range.lower,
            "tick_upper": plan.tick_range.upper,
            "sqrt_price_x96": plan.sqrt_price_x96,
            "liquidity": plan.liquidity,
            "amount0": plan.amount0,
            "amount1": plan.amount1,
            "position_key": plan.position_key.to_0x_hex(),
            "existing_liquidity": existing.liquidity,
        }
    )

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

import click
from pydantic import HttpUrl, WebsocketUrl
from web3 import HTTPProvider, IPCProvider, LegacyWebSocketProvider, Web3

from lpmath.config import CONFIG_FILE, settings
from lpmath.exceptions import LpMathError


def get_web3_from_config(*, chain_id: int) -> Web3:
    match endpoint := settings.rpc.get(chain_id):
        case HttpUrl():
            w3 = Web3(HTTPProvider(str(endpoint)))
        case WebsocketUrl():
            w3 = Web3(LegacyWebSocketProvider(str(endpoint)))
        case Path():
            w3 = Web3(IPCProvider(str(endpoint)))
        case None:
            msg = f"Chain ID {chain_id} does not have an RPC defined in config file {CONFIG_FILE}"
            raise click.ClickException(msg)

    if w3.eth.chain_id != chain_id:
        msg = (
            f"The chain ID ({w3.eth.chain_id}) at endpoint {endpoint} does not match "
            f"the chain ID ({chain_id}) defined in the config file."
        )
        raise click.ClickException(msg)

    return w3


@contextmanager
def reported_errors() -> Iterator[None]:
    """
    Report package exceptions as console errors instead of tracebacks.
    """

    try:
        yield
    except LpMathError as exc:
        raise click.ClickException(exc.message or str(exc)) from exc


def echo_fields(fields: dict[str, object], formatter: Callable[[object], str] = str) -> None:
    width = max(len(name) for name in fields)
    for name, value in fields.items():
        click.echo(f"{name:<{width}}  {formatter(value)}")

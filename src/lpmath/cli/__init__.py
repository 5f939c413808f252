import click


@click.group()
@click.version_option(package_name="lpmath")
def cli() -> None: ...


from . import config, liquidity, pool, position, tick  # noqa: F401, E402

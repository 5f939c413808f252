from typing import Literal

import click
import tomlkit
from pydantic import TypeAdapter

from lpmath.cli import cli
from lpmath.config import CONFIG_FILE, Settings, save_config_to_file, settings


@cli.group()
def config() -> None:
    """
    Configuration commands
    """


@config.command("show")
@click.option(
    "--json",
    "output_format",
    flag_value="json",
    type=str,
    help="Show configuration in JSON format",
)
@click.option(
    "--toml",
    "output_format",
    flag_value="toml",
    type=str,
    help="Show configuration in TOML format (default)",
    default=True,
)
def config_show(output_format: Literal["json", "toml"]) -> None:
    """
    Show the active configuration.
    """

    match output_format:
        case "json":
            click.echo(
                TypeAdapter(dict).dump_json(
                    settings.model_dump(mode="json"),
                    indent=2,
                ),
            )
        case "toml":
            click.echo(
                tomlkit.dumps(
                    settings.model_dump(mode="json"),
                ),
            )


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
def config_init(force: bool) -> None:
    """
    Write a configuration file with default values.
    """

    if CONFIG_FILE.exists() and not force:
        raise click.ClickException(f"A configuration file already exists at {CONFIG_FILE}.")

    save_config_to_file(Settings(), CONFIG_FILE)
    click.echo(f"Created a configuration file at {CONFIG_FILE}.")

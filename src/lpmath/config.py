import tomllib
from pathlib import Path
from typing import Annotated, Literal

import tomlkit
from pydantic import BaseModel, HttpUrl, PlainSerializer, WebsocketUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lpmath.logging import logger
from lpmath.types.aliases import ChainId
from lpmath.validation.evm_values import ValidatedTickSpacing

CONFIG_DIR = Path.home() / ".config" / "lpmath"
CONFIG_FILE = CONFIG_DIR / "config.toml"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class LiquiditySettings(BaseModel):
    # Tick spacings used by the known fee tiers. Planning a position for any other spacing is
    # allowed, but logged.
    tick_spacings: tuple[ValidatedTickSpacing, ...] = (1, 10, 60, 200)

    # Select the three-region liquidity formula instead of the in-range minimum of both amounts
    protocol_exact: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LPMATH_",
        env_nested_delimiter="__",
    )

    logging: LoggingSettings = LoggingSettings()
    liquidity: LiquiditySettings = LiquiditySettings()
    rpc: dict[
        ChainId,
        HttpUrl
        | WebsocketUrl
        | Annotated[
            Path,
            # Serialize the path as a string representation of the absolute path
            PlainSerializer(lambda path: str(path.absolute()), return_type=str),
        ],
    ] = {}

    @field_validator("rpc", mode="after")
    def validate_paths(
        cls,  # noqa: N805
        rpc_dict: dict[ChainId, HttpUrl | WebsocketUrl | Path],
    ) -> dict[ChainId, HttpUrl | WebsocketUrl | Path]:
        """
        Validate the endpoints.

        This will convert all file paths to an absolute reference, leaving HTTP and WS URLs as-is.
        """

        return {
            chain_id: endpoint.expanduser().absolute() if isinstance(endpoint, Path) else endpoint
            for chain_id, endpoint in rpc_dict.items()
        }


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(mode="json"),
        ),
    )
    logger.info(f"Saved configuration to {config_path}.")


settings = load_config_from_file(CONFIG_FILE) if CONFIG_FILE.exists() else Settings()
logger.setLevel(settings.logging.level)

import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

_CONFIG_PATH = os.getenv("MCLOG_CONFIG", "config.toml")
_ENV_PATH = os.getenv("MCLOG_ENV", ".env")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MCLOG_",
        env_nested_delimiter="__",
        toml_file=_CONFIG_PATH,
        env_file=_ENV_PATH,
        extra="ignore",
    )

    client: str = "vanilla"
    dir: Optional[str] = None
    from_beginning: bool = False
    update_interval: int = Field(default=50, gt=0, description="Poll interval (ms)")

    log_level: str = "INFO"
    logs_dir: Optional[Path] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Source order: init args > OS env > .env > config.toml > secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(**overrides) -> Settings:
    """Load settings from all configured sources, with keyword overrides on top."""
    return Settings(**overrides)

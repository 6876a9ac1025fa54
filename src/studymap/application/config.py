from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from studymap.application.heatmap.grid_builder import validate_thresholds
from studymap.domain.constants import ACTIVITY_LEVEL_THRESHOLDS, REQUEST_TIMEOUT

CONFIG_FILES = (
    Path.home() / ".config/studymap/config.toml",
    Path.home() / ".studymap.toml",
)


class AppConfig(BaseSettings):
    """
    Configuration model for studymap.
    Supports loading from:
    1. Environment variables (STUDYMAP_*)
    2. Config file (~/.config/studymap/config.toml or ~/.studymap.toml)
    3. Manual overrides (CLI / server requests)
    """

    model_config = SettingsConfigDict(
        env_prefix="STUDYMAP_",
        extra="ignore",
    )

    # Activity source
    source: Literal["file", "http"] = "file"
    activity_file: Path | None = None
    activity_url: str = "http://localhost:3210/api/study-activity"
    request_timeout: float = REQUEST_TIMEOUT

    # Heatmap
    level_thresholds: tuple[int, int, int] = ACTIVITY_LEVEL_THRESHOLDS

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing config file wins; init > env > file.
        toml_file = next((f for f in CONFIG_FILES if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("activity_file", mode="before")
    @classmethod
    def resolve_activity_file(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()

    @field_validator("level_thresholds")
    @classmethod
    def check_thresholds(cls, v: tuple[int, int, int]) -> tuple[int, int, int]:
        return validate_thresholds(v)


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/studymap/config.toml (if exists)
    3. Environment variables (STUDYMAP_*)
    4. cli_overrides (None values are ignored)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Process-level settings read from the environment and an optional ``.env``.

    Structured configuration lives in ``config.yaml``; these are the values
    needed before that file can be located and expanded.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    app_environment: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"
    config_file: str = Field(default="config.yaml", validation_alias="CATALOG_CONFIG_FILE")

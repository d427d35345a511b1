"""Configuration for the demo API server."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings for the demo API.

    The container image and the Terraform stubs both expect port 3000.
    """

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT", gt=0, le=65535)

    app_version: str = Field(
        default="1.0.0",
        validation_alias="APP_VERSION",
        description="Version reported by GET /",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - asset_url_prefix always starts with "/"
    - asset_output_dir defaults to the system temp directory
"""

import tempfile

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Assets
    asset_config_path: str = "assets.ini"
    asset_url_prefix: str = "/asset/"
    asset_output_dir: str = Field(default_factory=tempfile.gettempdir)
    # Development convenience: pick up edits to the INI without a restart
    asset_reload_config: bool = False

    @field_validator("asset_url_prefix")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        if not v.startswith("/"):
            return "/" + v
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""
Configuration management for GUOBA Data.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables prefixed with GUOBA_,
e.g. GUOBA_DATA_DIR=/srv/guoba/data.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import DEFAULT_PERCENTILES, UNAFFILIATED

Percentile = Annotated[float, Field(ge=0, le=100)]


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    List values are read as JSON: GUOBA_DEFAULT_PERCENTILES="[10, 50, 90]"
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GUOBA_",
        extra="ignore",
    )

    # ==========================================================================
    # Application Metadata
    # ==========================================================================
    app_name: str = "GUOBA Data"
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")

    # ==========================================================================
    # Data Files
    # ==========================================================================
    data_dir: Path = Field(default=Path("data"), description="Directory holding the exported data")
    experiments_file: str = "experiments.json"
    users_file: str = "users.json"
    output_dir: str = Field(default="output", description="Per-experiment results, relative to data_dir")

    @computed_field
    @property
    def experiments_path(self) -> Path:
        return self.data_dir / self.experiments_file

    @computed_field
    @property
    def users_path(self) -> Path:
        return self.data_dir / self.users_file

    @computed_field
    @property
    def output_path(self) -> Path:
        return self.data_dir / self.output_dir

    # ==========================================================================
    # Presentation Defaults
    # ==========================================================================
    default_percentiles: list[Percentile] = Field(default_factory=lambda: list(DEFAULT_PERCENTILES))
    anonymous_prefix: str = "Anonymous #"
    unaffiliated_label: str = UNAFFILIATED


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

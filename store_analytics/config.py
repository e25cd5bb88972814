"""
Configuration settings for Alura Store Analytics.

Uses Pydantic Settings to load environment variables for logging, ingestion
limits, sample generation and the scoring constants. Every field can be set
through its alias in the environment or in a local `.env` file.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")
    results_dir: str = Field("results", alias="RESULTS_DIR")

    # Ingestion
    csv_delimiter: str = Field(",", alias="CSV_DELIMITER")
    max_upload_bytes: int = Field(5_000_000, alias="MAX_UPLOAD_BYTES")
    sample_size: int = Field(8, alias="SAMPLE_SIZE")
    random_seed: Optional[int] = Field(None, alias="RANDOM_SEED")

    # Scoring
    network_seed: int = Field(973, alias="NETWORK_SEED")
    ai_strategies: str = Field(
        "regression,clustering,classification,anomaly", alias="AI_STRATEGIES"
    )
    entanglement: float = Field(0.973, alias="ENTANGLEMENT")
    coherence: float = Field(0.997, alias="COHERENCE")

    # Realtime feed
    feed_interval_seconds: float = Field(5.0, alias="FEED_INTERVAL_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def ai_strategy_names(self) -> List[str]:
        """Strategy names from the comma-separated AI_STRATEGIES value."""
        return [name.strip() for name in self.ai_strategies.split(",") if name.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]

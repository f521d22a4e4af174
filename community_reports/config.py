"""
Application configuration using Pydantic Settings
"""
import os
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "Community Report System"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Storage
    data_dir: str = "./data"
    reports_filename: str = "reports.json"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def reports_file(self) -> str:
        return os.path.join(self.data_dir, self.reports_filename)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

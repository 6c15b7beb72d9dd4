"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class PropertyServiceConfig(BaseSettings):
    url: str = "http://localhost:8082"
    timeout_seconds: float = 5.0

    model_config = {"env_prefix": "PROPERTY_SERVICE_"}


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/rental_agreements.db"
    log_level: str = "INFO"
    property_service: PropertyServiceConfig = Field(default_factory=PropertyServiceConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Build Settings: config.yaml values first, then env vars, then defaults."""
    y = _yaml
    overrides: dict = {}
    if "database" in y and "url" in y["database"]:
        overrides["database_url"] = y["database"]["url"]
    if "log_level" in y:
        overrides["log_level"] = y["log_level"]
    ps = PropertyServiceConfig(**y.get("property_service", {}))
    return Settings(property_service=ps, **overrides)

"""
Centralized configuration using pydantic-settings.
Loads from .env file and provides typed access to all constants.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class SimulationSettings(BaseSettings):
    """Quarter engine parameters."""

    seed: Optional[int] = Field(
        default=None, description="Seed for the injected random source (None = nondeterministic)"
    )
    random_event_probability: float = Field(
        default=0.2, ge=0.0, le=1.0, description="Chance of a random market event per quarter"
    )
    crisis_decision_probability: float = Field(
        default=0.2, ge=0.0, le=1.0, description="Chance of an urgent crisis/opportunity decision"
    )
    setup_event_probability: float = Field(
        default=0.3, ge=0.0, le=1.0, description="Chance of a market shock at setup / bulk submission"
    )
    advice_min_items: int = Field(default=2, ge=0)
    advice_max_items: int = Field(default=3, ge=0)

    model_config = {"env_prefix": "SIM_", "env_file": ".env", "extra": "ignore"}


class ApiSettings(BaseSettings):
    """HTTP layer configuration."""

    title: str = Field(default="Startup Quarter Simulator API")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    model_config = {"env_prefix": "API_", "env_file": ".env", "extra": "ignore"}


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Root log level")

    model_config = {"env_prefix": "LOG_", "env_file": ".env", "extra": "ignore"}


class Settings(BaseSettings):
    """Root settings aggregator."""

    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None

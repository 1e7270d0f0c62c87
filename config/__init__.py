from config.log_setup import setup_logging
from config.settings import (
    ApiSettings,
    LogSettings,
    Settings,
    SimulationSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "ApiSettings",
    "LogSettings",
    "Settings",
    "SimulationSettings",
    "get_settings",
    "setup_logging",
    "reset_settings",
]

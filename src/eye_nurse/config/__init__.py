"""Configuration package for the Eye Nurse reminder."""

from .loader import load_config
from .models import Config, ControllerConfig, LoggingConfig, TimingConfig, UiConfig

__all__ = [
    "Config",
    "ControllerConfig",
    "LoggingConfig",
    "TimingConfig",
    "UiConfig",
    "load_config",
]

"""Configuration loader utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .models import Config, ControllerConfig, LoggingConfig, TimingConfig, UiConfig


def _normalize_path(path: Path | str) -> Path:
    return path if isinstance(path, Path) else Path(path)


def _load_raw_config(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as stream:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(stream) or {}
        if suffix == ".json":
            return json.load(stream)
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(config_path: Path | str) -> Config:
    """Load configuration file and construct Config dataclass."""

    config_path = _normalize_path(config_path)
    raw = _load_raw_config(config_path)
    if not isinstance(raw, dict):
        raise ValueError(f"Config root in {config_path} must be a mapping.")

    timing = _load_timing_config(_section(raw, "timing"))
    controller = _load_controller_config(_section(raw, "controller"))
    ui = _load_ui_config(_section(raw, "ui"))

    logging_config = _load_logging_config(_section(raw, "logging"), config_path)

    return Config(timing=timing, controller=controller, ui=ui, logging=logging_config)


def _section(raw_root: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = raw_root.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping.")
    return dict(section)


def _load_timing_config(raw_timing: Dict[str, Any]) -> TimingConfig:
    timing = TimingConfig(**{key: float(value) for key, value in raw_timing.items()})
    for name in ("work_seconds", "rest_seconds", "delay_seconds"):
        if getattr(timing, name) < 0:
            raise ValueError(f"timing.{name} must not be negative.")
    return timing


def _load_controller_config(raw_controller: Dict[str, Any]) -> ControllerConfig:
    controller = ControllerConfig(**raw_controller)
    if controller.poll_interval_ms <= 0:
        raise ValueError("controller.poll_interval_ms must be positive.")
    if controller.timer_join_timeout_ms < 0:
        raise ValueError("controller.timer_join_timeout_ms must not be negative.")
    return controller


def _load_ui_config(raw_ui: Dict[str, Any]) -> UiConfig:
    ui = UiConfig(**raw_ui)
    if ui.tick_interval_ms <= 0:
        raise ValueError("ui.tick_interval_ms must be positive.")
    return ui


def _load_logging_config(raw_logging: Dict[str, Any], config_path: Path) -> LoggingConfig:
    log_path = raw_logging.get("filepath")
    if log_path:
        # Relative log paths follow the config file, not the working directory.
        raw_logging["filepath"] = (config_path.parent / log_path).resolve()
    library_levels = raw_logging.get("library_levels")
    if library_levels is not None and not isinstance(library_levels, dict):
        raise ValueError("logging.library_levels must be a mapping of logger name to level.")
    logging_config = LoggingConfig(**raw_logging)

    names = [logging_config.level, *logging_config.library_levels.values()]
    if logging_config.console_level:
        names.append(logging_config.console_level)
    for name in names:
        if not isinstance(logging.getLevelName(str(name).upper()), int):
            raise ValueError(f"Unknown log level in logging section: {name!r}")
    return logging_config

"""Dataclass definitions for application configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Literal, Optional


@dataclass(frozen=True)
class TimingConfig:
    """Lengths of the work, rest and delay intervals in seconds."""

    work_seconds: float = 45 * 60
    rest_seconds: float = 5 * 60
    delay_seconds: float = 5 * 60


@dataclass(frozen=True)
class ControllerConfig:
    """State controller behaviour switches."""

    fast_start: bool = True
    strict: bool = True
    poll_interval_ms: int = 500
    timer_join_timeout_ms: int = 1000


@dataclass(frozen=True)
class UiConfig:
    """Console collaborator settings."""

    countdown: bool = True
    tick_interval_ms: int = 1000


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    filepath: Path = Path("logs/eye_nurse.log")
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5
    console: bool = True
    # Console threshold; falls back to ``level`` when unset.
    console_level: Optional[str] = None
    library_levels: Dict[str, str] = field(default_factory=lambda: {"statemachine": "WARNING"})

    def resolved_path(self) -> Path:
        path = self.filepath if isinstance(self.filepath, Path) else Path(self.filepath)
        return path.expanduser().resolve()


@dataclass(frozen=True)
class Config:
    """Root configuration object."""

    timing: TimingConfig = field(default_factory=TimingConfig)
    controller: ControllerConfig = field(default_factory=ControllerConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

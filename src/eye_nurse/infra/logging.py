"""Logging setup for the reminder: rotating log file plus optional console echo."""

from __future__ import annotations

import logging
import logging.handlers
import sys

from eye_nurse.config.models import LoggingConfig

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(config: LoggingConfig) -> None:
    """Install the reminder's handlers on the root logger.

    The file always records at ``config.level``. The console handler writes
    to stderr so it does not interleave with the reminder prompts on stdout,
    and may use a stricter ``console_level``. Third-party loggers listed in
    ``library_levels`` are clamped to their own level.
    """

    file_level = _parse_level(config.level)
    handlers: list[logging.Handler] = [_file_handler(config, file_level)]
    if config.console:
        console_level = _parse_level(config.console_level) if config.console_level else file_level
        handlers.append(_console_handler(console_level))

    logging.captureWarnings(True)
    logging.basicConfig(level=min(handler.level for handler in handlers), handlers=handlers, force=True)

    for name, level in config.library_levels.items():
        logging.getLogger(name).setLevel(_parse_level(level))


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def _file_handler(config: LoggingConfig, level: int) -> logging.Handler:
    log_path = config.resolved_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=log_path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="%(levelname)-8s %(name)s: %(message)s"))
    return handler

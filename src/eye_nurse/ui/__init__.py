"""Console user interface for the reminder."""

from .console import COMMANDS, ConsolePresenter, parse_command
from .countdown import RestCountdown, format_remaining

__all__ = ["COMMANDS", "ConsolePresenter", "RestCountdown", "format_remaining", "parse_command"]

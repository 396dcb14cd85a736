"""Application entrypoint for the Eye Nurse console reminder."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import threading
from pathlib import Path
from typing import Optional, Sequence

from eye_nurse.config import Config, load_config
from eye_nurse.infra import configure_logging, install_exception_hook
from eye_nurse.state_machine import ReminderOptions, StateController
from eye_nurse.ui import ConsolePresenter

logger = logging.getLogger("app.main")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Periodic work/rest reminder (console).")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML/JSON configuration file.",
    )
    parser.add_argument("--work-seconds", type=float, default=None, help="Override the work interval.")
    parser.add_argument("--rest-seconds", type=float, default=None, help="Override the rest interval.")
    parser.add_argument("--delay-seconds", type=float, default=None, help="Override the delay interval.")
    parser.add_argument(
        "--no-countdown",
        action="store_true",
        help="Do not print the remaining rest time.",
    )
    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Return ``config`` with command-line overrides applied."""
    timing_overrides = {
        name: value
        for name, value in (
            ("work_seconds", args.work_seconds),
            ("rest_seconds", args.rest_seconds),
            ("delay_seconds", args.delay_seconds),
        )
        if value is not None
    }
    for name, value in timing_overrides.items():
        if value < 0:
            raise ValueError(f"--{name.replace('_', '-')} must not be negative")
    timing = dataclasses.replace(config.timing, **timing_overrides)
    ui = dataclasses.replace(config.ui, countdown=False) if args.no_countdown else config.ui
    return dataclasses.replace(config, timing=timing, ui=ui)


def build_controller(config: Config, presenter_stream=None) -> tuple[StateController, ConsolePresenter]:
    """Wire the controller and console presenter together."""

    options = ReminderOptions(
        work_seconds=config.timing.work_seconds,
        rest_seconds=config.timing.rest_seconds,
        delay_seconds=config.timing.delay_seconds,
        fast_start=config.controller.fast_start,
        strict=config.controller.strict,
        poll_interval_s=config.controller.poll_interval_ms / 1000.0,
        timer_join_timeout_s=config.controller.timer_join_timeout_ms / 1000.0,
    )
    controller = StateController(options)
    presenter = ConsolePresenter(
        submit=controller.submit_event,
        rest_seconds=config.timing.rest_seconds,
        stream=presenter_stream,
        countdown=config.ui.countdown,
        tick_interval_s=config.ui.tick_interval_ms / 1000.0,
    )
    # Registered before run(), so the presenter sees the first state.
    controller.add_listener(presenter.on_state_change)
    return controller, presenter


def bootstrap(config: Config) -> int:
    install_exception_hook()

    controller, presenter = build_controller(config)
    timing = config.timing
    logger.info(
        "Reminder configured: work=%.0fs rest=%.0fs delay=%.0fs",
        timing.work_seconds,
        timing.rest_seconds,
        timing.delay_seconds,
    )

    controller_thread = threading.Thread(target=controller.run, name="ReminderController", daemon=True)
    controller_thread.start()
    threading.Thread(target=presenter.read_commands, name="ConsoleInput", daemon=True).start()

    try:
        while controller_thread.is_alive():
            controller_thread.join(timeout=0.5)
    except KeyboardInterrupt:
        logger.info("Interrupted by user (Ctrl+C).")
        controller.shutdown("interrupted")
        controller.wait_closed(timeout=5.0)
    finally:
        presenter.close()
        logger.info("Shutdown complete.")

    return 1 if controller.fault is not None else 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        config = load_config(args.config) if args.config is not None else Config()
        config = apply_overrides(config, args)
    except Exception as exc:
        print(f"Unable to read configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.logging)
    if args.config is not None:
        logger.info("Configuration loaded from %s", args.config)
    sys.exit(bootstrap(config))


if __name__ == "__main__":
    main()

# src/laneboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the expiration monitor in a
background thread, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from rich.console import Console

from ..board.monitor import start_monitor_in_background
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import make_board_renderer, run_console_loop
from ..logging_setup import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    console = Console(no_color=not settings.console_color)
    log_file = setup_logging(
        log_dir=settings.data_dir,
        console=console,
        console_level=level_from_name(settings.log_level),
    )
    logger.info("Starting %s (log file: %s)", settings.app_name, log_file)

    state = create_initial_state(settings=settings, console=console)
    state.store.subscribe(make_board_renderer(console))

    state.monitor_runner = start_monitor_in_background(
        state.monitor,
        interval_seconds=settings.monitor_interval_seconds,
    )

    try:
        run_console_loop(state, console)
    finally:
        if state.monitor_runner is not None:
            state.monitor_runner.stop()
            state.monitor_runner.join(timeout=5.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()

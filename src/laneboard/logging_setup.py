# src/laneboard/logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FILE_NAME = "laneboard.log"

# Background components that would interleave with the prompt.
_QUIET_LOGGERS = ("laneboard.board.monitor",)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive board readable:
    - laneboard logs pass, except the expiration monitor below WARNING
    - anything else (third-party, 'py.warnings') only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("laneboard."):
            return record.levelno >= logging.ERROR
        if name.startswith(_QUIET_LOGGERS):
            return record.levelno >= logging.WARNING
        return True


def level_from_name(name: str | None, default: int = logging.INFO) -> int:
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    *,
    log_dir: str | Path,
    console: Console | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to the board console (filtered) and to <log_dir>/laneboard.log (everything).

    Pass the same rich Console the board renders on so log lines do not tear
    the prompt. Call once, before the monitor thread starts. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    ch = RichHandler(
        console=console or Console(stderr=True),
        level=console_level,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    # Thread name tells the monitor's records apart from the REPL's.
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file

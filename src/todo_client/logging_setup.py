# src/todo_client/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


# Minimum level for console output, by logger prefix. Longest prefix wins.
# The log file gets everything regardless.
CONSOLE_THRESHOLDS: dict[str, int] = {
    "todo_client": logging.NOTSET,
    # httpx logs every request at INFO; only its warnings are worth a console line.
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    # Unretrieved task exceptions / slow callbacks in the event loop.
    "asyncio": logging.WARNING,
}


def console_threshold(logger_name: str) -> int:
    """Threshold for a logger name; unknown third-party loggers get ERROR."""
    best = ""
    for prefix in CONSOLE_THRESHOLDS:
        if (logger_name == prefix or logger_name.startswith(prefix + ".")) and len(prefix) > len(best):
            best = prefix
    return CONSOLE_THRESHOLDS[best] if best else logging.ERROR


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the interactive console readable: app logs pass, libraries only when they matter."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_threshold(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure logging with:
    - Console handler: readable + filtered for interactive use
    - File handler: full logs for debugging

    Call this ONCE, very early (before first logger.info).
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "todo.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

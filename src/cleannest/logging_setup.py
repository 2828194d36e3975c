# src/cleannest/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "cleannest.log"

# The REPL prints replies on stdout while logs go to stderr on the same
# terminal; per-command INFO lines from the connector would interleave with them.
_QUIET_PREFIXES: dict[str, int] = {
    "cleannest.connectors.": logging.WARNING,
}


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console-only filter. cleannest loggers pass at the handler level,
    except the prefixes in _QUIET_PREFIXES. Everything else (py.warnings,
    third-party libraries) needs ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("cleannest."):
            return record.levelno >= logging.ERROR

        for prefix, min_level in _QUIET_PREFIXES.items():
            if name.startswith(prefix):
                return record.levelno >= min_level
        return True


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    *,
    log_dir: str | Path = ".local/cleannest",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send filtered logs to stderr and the full log to <log_dir>/cleannest.log.

    Replaces handlers already on the root logger, so calling it twice is safe.
    Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleNoiseFilter())

    # Mutation logs (ids, changed fields) are DEBUG; only the file keeps them.
    logfile = logging.FileHandler(str(log_file), encoding="utf-8")
    logfile.setLevel(file_level)

    for handler in (console, logfile):
        handler.setFormatter(_formatter())
        root.addHandler(handler)

    # Deprecation warnings from dependencies arrive as 'py.warnings'.
    logging.captureWarnings(True)
    return log_file

"""
Logging configuration — one call from the CLI before any probe runs.

Console level comes from the CLI flags, then GETPLATFORM_LOG_LEVEL,
then WARNING. GETPLATFORM_LOG_FILE adds a file handler that may run
at its own level (GETPLATFORM_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import sys

_FMT_ADVISORY = "%(levelname)s: %(message)s"
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

# Adapter loggers print one line per spawned command
_NOISY_LOGGERS = ("get_platform.adapters",)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_probes: bool = True,
) -> None:
    """Install the console (and optional file) handler on the root logger.

    Below DEBUG the console shows advisories only; at DEBUG every line
    carries its origin. With ``quiet_probes`` the adapter loggers stay
    at INFO unless the console itself is at DEBUG.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    if console_level <= logging.DEBUG:
        console.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt="%H:%M:%S"))
    else:
        console.setFormatter(logging.Formatter(_FMT_ADVISORY))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if quiet_probes and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.INFO)


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING

"""
Logging configuration — set up once by the ``alterforge`` click group.

Modules log through ``logging.getLogger(__name__)``; what reaches the
terminal depends on the level chosen here:

    --debug  >  --verbose  >  --quiet  >  ALTERFORGE_LOG_LEVEL  >  WARNING

Scaffolding output meant for the user goes through ``click.secho``, so at
the default level the console only shows warnings (a failed npm install,
a missing compose file) without any decoration. ALTERFORGE_LOG_FILE adds a
detailed log file, with its own level in ALTERFORGE_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

LOG_LEVEL_ENV = "ALTERFORGE_LOG_LEVEL"
LOG_FILE_ENV = "ALTERFORGE_LOG_FILE"
LOG_FILE_LEVEL_ENV = "ALTERFORGE_LOG_FILE_LEVEL"

# level threshold → (format, datefmt), first match wins
_CONSOLE_FORMATS: list[tuple[int, str, str | None]] = [
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
]

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Console level name from the global CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter("%(message)s")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with alterforge's.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file to append to.
        log_file_level: Level for the log file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(console_level)

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root.setLevel(min(console_level, file_level))

    # handlers may outlive the stream they were given
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else logging.WARNING
    return numeric if isinstance(numeric, int) else logging.WARNING

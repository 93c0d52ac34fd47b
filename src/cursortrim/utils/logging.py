"""Logging bootstrap for the cursortrim command-line front end.

Diagnostics always go to stderr because stdout may carry the trimmed file.
A rotating log file under ``~/.cursortrim/logs`` (or ``CURSORTRIM_LOG_DIR``)
is only opened for debug runs.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

__all__ = ["LOG_FILE_NAME", "setup_logging"]

LOG_FILE_NAME = "cursortrim.log"
_DEFAULT_LOG_DIR = Path.home() / ".cursortrim" / "logs"
_CONSOLE_FORMAT = "cursortrim: %(levelname)s: %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_QUIET_LOGGERS: tuple[str, ...] = ("asyncio", "PySide6")
_configured = False


def setup_logging(
    level: int = logging.WARNING,
    *,
    log_file: bool = False,
    log_dir: Path | str | None = None,
    force: bool = False,
) -> Path | None:
    """Install the stderr handler and, when ``log_file`` is set, a rotating file.

    Returns the log file path, or ``None`` when only stderr is used. Repeated
    calls are ignored unless ``force`` is given.
    """

    global _configured
    if _configured and not force:
        return None

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    handlers: list[logging.Handler] = [console]

    log_path: Path | None = None
    if log_file:
        target_dir = Path(log_dir or os.environ.get("CURSORTRIM_LOG_DIR") or _DEFAULT_LOG_DIR).expanduser()
        target_dir.mkdir(parents=True, exist_ok=True)
        log_path = target_dir / LOG_FILE_NAME
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=512_000, backupCount=2, encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _configured = True
    return log_path

"""
Logging setup for the Travel Planner API.

``setup_logging`` is called once by ``main.create_app``.  It attaches a
console handler to the root logger and, when ``LOG_FILE`` is set, a
file handler that rotates at 5 MB and keeps five old files.

Handlers installed here carry a name, so a second call (tests build
many applications) neither duplicates them nor touches handlers that
the server or the test runner installed on their own.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_HANDLER = "travel_planner.console"
FILE_HANDLER = "travel_planner.file"


def _installed(root: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in root.handlers)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File to log to in addition to the console.  Missing parent
        directories are created.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if not _installed(root, CONSOLE_HANDLER):
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER)
        console.setFormatter(formatter)
        root.addHandler(console)

    if logfile and not _installed(root, FILE_HANDLER):
        path = Path(logfile).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8")
        rotating.set_name(FILE_HANDLER)
        rotating.setFormatter(formatter)
        root.addHandler(rotating)

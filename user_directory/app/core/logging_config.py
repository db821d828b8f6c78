"""
Logging configuration for the directory service.

``setup_logging`` attaches a console handler (and, when ``LOG_FILE``
is set, a file handler) to the root logger.  Service modules log
through ``logging.getLogger(__name__)`` and inherit this setup.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        Optional path of a UTF‑8 log file, resolved against the current
        working directory.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured, e.g. by pytest or a repeated create_app().
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

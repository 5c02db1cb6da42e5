"""
Logging configuration for the registry service.

Every module logs through ``logging.getLogger(__name__)`` so records
carry the module name.  ``setup_logging`` owns two kinds of handler on
the root logger: one console handler and one file handler per log file.
Both are tagged with a name so that calling ``setup_logging`` again
(one call per ``create_app``) never stacks duplicates.  Handlers that
something else installed, such as pytest's capture handler, are left
alone, but the requested level is always applied.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "pace-registry-console"
FILE_HANDLER_PREFIX = "pace-registry-file:"


def _has_handler(logger: logging.Logger, name: str) -> bool:
    return any(h.get_name() == name for h in logger.handlers)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the service.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.  Applied on
        every call, even if the root logger already has handlers.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted or empty, no
        file handler is added.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not _has_handler(root, CONSOLE_HANDLER_NAME):
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        name = FILE_HANDLER_PREFIX + str(log_path)
        if not _has_handler(root, name):
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.set_name(name)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

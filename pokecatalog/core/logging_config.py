"""
Central logging setup for PokeCatalog.

``setup_logging`` installs one console handler (and optionally a file handler)
on the root logger and applies per-module levels. Modules never configure
handlers themselves; they call ``get_logger(__name__)``.

Environment:
    POKECATALOG_LOG_LEVEL  console level (via settings), default INFO
    LOG_FORMAT             simple | detailed | json, default detailed
    LOG_FILE_DIR           directory of pokecatalog.log, default ./logs
    ENABLE_FILE_LOGGING    also write DEBUG records to the log file
"""

import logging
import os
from pathlib import Path
from typing import Optional


def _initial_level() -> str:
    # settings are imported lazily: config modules log through this module
    try:
        from pokecatalog.server.core.config import settings

        return settings.log_level.upper()
    except Exception:
        return os.getenv("POKECATALOG_LOG_LEVEL", "INFO").upper()


LOG_LEVEL = _initial_level()
LOG_FORMAT = os.getenv("LOG_FORMAT", "detailed")
LOG_FILE_DIR = os.getenv("LOG_FILE_DIR", "logs")
ENABLE_FILE_LOGGING = os.getenv("ENABLE_FILE_LOGGING", "false").lower() in ("true", "1", "yes")

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

_FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}

MODULE_LOG_LEVELS = {
    "pokecatalog.catalog": "DEBUG",
    "pokecatalog.catalog.enrichment": "INFO",
    "pokecatalog.auth": "INFO",
    "pokecatalog.core.database": "INFO",
    "pokecatalog.seed": "INFO",
    "pokecatalog.server": "INFO",
    "pokecatalog.server.api": "DEBUG",
    "pokecatalog.server.core": "INFO",
    # noisy third-party loggers
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    (Re)configure the root logger.

    Existing root handlers are replaced, so calling this twice is safe.

    Args:
        log_level: Console level, defaults to ``LOG_LEVEL``
        log_format: simple, detailed or json; unknown names fall back to detailed
        enable_file: Allow the file handler; it is only added when
            ``ENABLE_FILE_LOGGING`` is also set
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = logging.Formatter(_FORMATS.get(fmt, DETAILED_FORMAT), datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger()
    # handlers filter by level; the root passes everything through
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "pokecatalog.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(module_level)

    root.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (normally the caller's ``__name__``)."""
    return logging.getLogger(name)

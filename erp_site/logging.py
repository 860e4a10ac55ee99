"""Rotating file log for the ERP WSGI process.

Console output comes from ``LOGGING`` in ``erp_site.settings``; this module
only adds the on-disk log that the procurement and stock services write to,
and prunes rotated copies of it.

Environment variables, read when :func:`configure_logging` runs:

``LOG_FILE``
    Path of the active log file. An empty value disables the file log.
``LOG_LEVEL``
    Root level name, ``INFO`` when unset or unknown.
``LOG_RETENTION_DAYS``
    Age after which rotated files are deleted. ``0`` keeps them all.
"""

import logging
import os
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LOG_FILE = "erp_site.log"
DEFAULT_RETENTION_DAYS = 30
MAX_BYTES = 1_000_000
BACKUP_COUNT = 3

logger = logging.getLogger(__name__)


def configure_logging(
    log_file: Union[str, Path, None] = None,
    level: Optional[str] = None,
    retention_days: Optional[int] = None,
) -> Optional[RotatingFileHandler]:
    """Attach a rotating file handler to the root logger.

    Arguments override the environment. Calling again for a file that is
    already attached returns the existing handler, so the WSGI module can be
    re-imported safely. Returns ``None`` when file logging is disabled.
    """

    if log_file is None:
        log_file = os.getenv("LOG_FILE", DEFAULT_LOG_FILE)
    if not str(log_file):
        return None
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if retention_days is None:
        retention_days = int(os.getenv("LOG_RETENTION_DAYS", str(DEFAULT_RETENTION_DAYS)))

    log_path = Path(log_file).resolve()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root.handlers:
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_path:
            return handler

    handler = RotatingFileHandler(log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    removed = purge_old_logs(log_path, retention_days)
    if removed:
        logger.info("Removed %d rotated log file(s) older than %d days", len(removed), retention_days)
    return handler


def purge_old_logs(log_file: Union[str, Path], retention_days: int) -> List[Path]:
    """Delete rotated copies of ``log_file`` older than ``retention_days``.

    The active file is never touched. Returns the paths that were removed.
    """

    if retention_days <= 0:
        return []

    log_path = Path(log_file).resolve()
    cutoff = datetime.now() - timedelta(days=retention_days)
    removed = []
    for rotated in log_path.parent.glob(f"{log_path.name}.*"):
        try:
            if datetime.fromtimestamp(rotated.stat().st_mtime) >= cutoff:
                continue
            rotated.unlink()
        except FileNotFoundError:
            continue
        removed.append(rotated)
    return removed


__all__ = ["configure_logging", "purge_old_logs", "LOG_FORMAT"]

"""
Timestamped backups of user files.

A backup is a plain copy at ``PATH.backup_YYYYMMDD_HHMMSS``. Existing
backups are never overwritten: when two runs land in the same second
the name gets a ``_1``, ``_2``, ... suffix.
"""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_INFIX = ".backup_"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def backup_timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def backup_path_for(path: Path, now: datetime | None = None) -> Path:
    """First free backup name for ``path`` at ``now``."""
    base = f"{path.name}{BACKUP_INFIX}{backup_timestamp(now)}"
    candidate = path.with_name(base)
    n = 0
    while candidate.exists():
        n += 1
        candidate = path.with_name(f"{base}_{n}")
    return candidate


def backup_file(
    path: Path,
    *,
    now: datetime | None = None,
    dry_run: bool = False,
) -> Path | None:
    """Copy ``path`` to a timestamped sibling.

    Returns:
        The backup path, or None when ``path`` does not exist.
    """
    if not path.is_file():
        return None

    dest = backup_path_for(path, now)
    if dry_run:
        logger.info("Would back up %s → %s", path, dest)
        return dest

    shutil.copy2(path, dest)
    logger.info("Backed up %s → %s", path, dest)
    return dest


def list_backups(path: Path) -> list[Path]:
    """Existing backups of ``path``, oldest first."""
    if not path.parent.is_dir():
        return []
    return sorted(path.parent.glob(f"{path.name}{BACKUP_INFIX}*"))

"""
Config materializer — write generated files wholesale.

``write_config`` preserves whatever was there before as a timestamped
backup. ``write_fragment`` is for the helper scripts the installer owns
outright; they are replaced without a backup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from starship_setup.core.services.backup import backup_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of writing one generated file."""

    path: Path
    created: bool                   # no file existed before
    backup_path: Path | None = None
    dry_run: bool = False


def ensure_dir(path: Path, *, dry_run: bool = False) -> None:
    """mkdir -p; no error if it already exists."""
    if dry_run:
        if not path.is_dir():
            logger.info("Would create directory %s", path)
        return
    path.mkdir(parents=True, exist_ok=True)


def write_config(
    path: Path,
    content: str,
    *,
    now: datetime | None = None,
    dry_run: bool = False,
) -> WriteResult:
    """Back up any existing file at ``path``, then overwrite it with ``content``."""
    ensure_dir(path.parent, dry_run=dry_run)

    existed = path.is_file()
    backup = backup_file(path, now=now, dry_run=dry_run) if existed else None

    if dry_run:
        logger.info("Would write %s (%d bytes)", path, len(content.encode("utf-8")))
    else:
        _write_text(path, content)
        logger.info("Wrote %s", path)

    return WriteResult(path=path, created=not existed, backup_path=backup, dry_run=dry_run)


def write_fragment(path: Path, content: str, *, dry_run: bool = False) -> WriteResult:
    """Overwrite an installer-owned helper script."""
    ensure_dir(path.parent, dry_run=dry_run)
    existed = path.is_file()

    if dry_run:
        logger.info("Would write %s", path)
    else:
        _write_text(path, content)
        logger.info("Wrote %s", path)

    return WriteResult(path=path, created=not existed, dry_run=dry_run)


def _write_text(path: Path, content: str) -> None:
    # newline="" keeps template line endings byte-identical
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)

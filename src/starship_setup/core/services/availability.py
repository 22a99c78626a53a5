"""Availability checks — is a program resolvable on PATH?"""

from __future__ import annotations

import logging
import shutil

logger = logging.getLogger(__name__)


def is_available(program: str, search_path: str | None = None) -> bool:
    """Return True if ``program`` resolves to an executable.

    Args:
        program: Command name (``zsh``, ``starship``, ``fc-cache``).
        search_path: PATH string to search; None uses the process PATH.
    """
    if not program:
        return False
    found = shutil.which(program, path=search_path)
    logger.debug("which %s -> %s", program, found)
    return found is not None

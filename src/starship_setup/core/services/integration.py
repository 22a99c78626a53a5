"""
Shell integration writer — hook the prompt into the startup file.

Appends a sourcing block to ``~/.zshrc`` or ``~/.bashrc``. The block
starts with ``MARKER``; if the marker is already in the file the
append is skipped, so re-running never duplicates it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from starship_setup.core.services.backup import backup_file

logger = logging.getLogger(__name__)

MARKER = "# Starship Prompt Configuration"

# A hand-written ``eval "$(starship init zsh)"`` also means "configured"
LEGACY_MARKERS = ("starship init",)

DEFAULT_RC_SHELL = "bash"

_RC_FILES: dict[str, str] = {
    "bash": ".bashrc",
    "zsh": ".zshrc",
}

_PROMPT_BLOCK = """
{marker}
export SHELL_NAME="{shell_name}"
source "$HOME/{scripts_dir}/prompt.sh"
"""

_KUBECTL_BLOCK = """
# Kubectl helpers (optional - comment out if not needed)
source "$HOME/{scripts_dir}/kubectl.sh"
"""


@dataclass(frozen=True)
class IntegrationResult:
    startup_file: Path
    added: bool
    backup_path: Path | None = None
    matched_marker: str | None = None


def rc_shell_for(shell_name: str) -> str:
    """Shell the startup fragment targets; unknown shells fall back to bash."""
    if shell_name in _RC_FILES:
        return shell_name
    logger.warning("Unknown shell: %s, defaulting to .%src", shell_name, DEFAULT_RC_SHELL)
    return DEFAULT_RC_SHELL


def startup_file_for(rc_shell: str, home: Path) -> Path:
    return home / _RC_FILES.get(rc_shell, _RC_FILES[DEFAULT_RC_SHELL])


def render_fragment(
    shell_name: str,
    *,
    scripts_dir: str = ".shell_scripts",
    include_kubectl: bool = True,
) -> str:
    """The startup-file block, with the shell name substituted in."""
    fragment = _PROMPT_BLOCK.format(marker=MARKER, shell_name=shell_name, scripts_dir=scripts_dir)
    if include_kubectl:
        fragment += _KUBECTL_BLOCK.format(scripts_dir=scripts_dir)
    return fragment


def find_marker(text: str, markers: Sequence[str]) -> str | None:
    for marker in markers:
        if marker in text:
            return marker
    return None


def ensure_sourced(
    startup_file: Path,
    fragment: str,
    marker: str = MARKER,
    *,
    legacy_markers: Sequence[str] = LEGACY_MARKERS,
    now: datetime | None = None,
    dry_run: bool = False,
) -> IntegrationResult:
    """Append ``fragment`` to ``startup_file`` unless a marker is already present.

    The existing file (if any) is backed up first. The file is created
    when missing.
    """
    existing = ""
    backup = None
    if startup_file.is_file():
        backup = backup_file(startup_file, now=now, dry_run=dry_run)
        existing = startup_file.read_text(encoding="utf-8", errors="replace")

    matched = find_marker(existing, (marker, *legacy_markers))
    if matched:
        logger.info("Starship already configured in %s", startup_file)
        return IntegrationResult(
            startup_file=startup_file,
            added=False,
            backup_path=backup,
            matched_marker=matched,
        )

    if dry_run:
        logger.info("Would append starship block to %s", startup_file)
        return IntegrationResult(startup_file=startup_file, added=True, backup_path=backup)

    startup_file.parent.mkdir(parents=True, exist_ok=True)
    with open(startup_file, "a", encoding="utf-8") as f:
        if existing and not existing.endswith("\n"):
            f.write("\n")
        f.write(fragment)

    logger.info("Updated %s", startup_file)
    return IntegrationResult(startup_file=startup_file, added=True, backup_path=backup)

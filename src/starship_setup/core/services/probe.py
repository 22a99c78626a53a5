"""
Environment prober — operating system family and login shell.

Read-only. Reads ``platform.system()`` and the ``SHELL``/``HOME``/``PATH``
environment variables; never touches the filesystem.
"""

from __future__ import annotations

import logging
import os
import platform
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from starship_setup.core.errors import ProbeError
from starship_setup.core.models.context import OS_LINUX, OS_MAC, OS_UNKNOWN_PREFIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvironmentProbe:
    """Raw facts about the invoking environment."""

    os_raw: str
    os_tag: str
    shell_path: str
    shell_name: str
    home: Path
    search_path: str | None

    def to_dict(self) -> dict:
        return {
            "os_raw": self.os_raw,
            "os": self.os_tag,
            "shell_path": self.shell_path,
            "shell": self.shell_name,
            "home": str(self.home),
        }


def classify_os(raw: str) -> str:
    """Map a ``uname -s`` style identifier to an OS tag.

    >>> classify_os("Linux"), classify_os("Darwin"), classify_os("SomeOtherOS")
    ('Linux', 'Mac', 'Unknown:SomeOtherOS')
    """
    if raw.startswith("Linux"):
        return OS_LINUX
    if raw.startswith("Darwin"):
        return OS_MAC
    return f"{OS_UNKNOWN_PREFIX}{raw}"


def shell_name_from_path(shell_path: str) -> str:
    """Base name of the login shell path; empty when unset."""
    return os.path.basename(shell_path.rstrip("/")) if shell_path else ""


def probe_environment(
    environ: Mapping[str, str] | None = None,
    system: Callable[[], str] = platform.system,
) -> EnvironmentProbe:
    """Collect OS and shell identity.

    Raises:
        ProbeError: If the OS identifier cannot be determined.
    """
    env = os.environ if environ is None else environ

    os_raw = system()
    if not os_raw:
        raise ProbeError("Unable to determine the operating system")

    shell_path = env.get("SHELL", "")
    home = Path(env["HOME"]) if env.get("HOME") else Path.home()

    probe = EnvironmentProbe(
        os_raw=os_raw,
        os_tag=classify_os(os_raw),
        shell_path=shell_path,
        shell_name=shell_name_from_path(shell_path),
        home=home,
        search_path=env.get("PATH"),
    )
    logger.info("Detected OS=%s shell=%s", probe.os_tag, probe.shell_name or "<unset>")
    return probe

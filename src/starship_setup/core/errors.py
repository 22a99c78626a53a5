"""
Fatal error taxonomy.

Anything raised from here aborts the run with exit code 1. Recoverable
problems (a failed font download) never raise; they are logged and
recorded as a ``warning`` outcome instead.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for errors that abort an install run."""


class ProbeError(SetupError):
    """The operating system could not be identified."""


class ShellNotFoundError(SetupError):
    """The login shell does not resolve to an executable on PATH."""

    def __init__(self, shell_name: str):
        self.shell_name = shell_name
        label = shell_name or "$SHELL"
        super().__init__(f"{label} is not installed properly.")


class InstallError(SetupError):
    """The upstream installer for a tool failed."""


class ConfigError(SetupError):
    """Raised when the settings file is invalid or missing."""

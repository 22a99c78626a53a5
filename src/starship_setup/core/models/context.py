"""
InstallContext — the read-only classification every step works from.

Built once at startup from the environment probe and the settings,
then handed to every service. Nothing downstream mutates it.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

# ── OS tags ─────────────────────────────────────────────────────

OS_LINUX = "Linux"
OS_MAC = "Mac"
OS_UNKNOWN_PREFIX = "Unknown:"


class InstallPaths(BaseModel):
    """Every filesystem location the installer touches, under one home."""

    model_config = ConfigDict(frozen=True)

    home: Path
    config_dir: Path
    config_file: Path
    scripts_dir: Path
    prompt_script: Path
    kubectl_script: Path
    fonts_dir: Path
    font_file: Path
    startup_file: Path

    @classmethod
    def for_home(
        cls,
        home: Path,
        *,
        startup_file: Path,
        font_filename: str,
        scripts_dirname: str = ".shell_scripts",
    ) -> InstallPaths:
        config_dir = home / ".config"
        scripts_dir = home / scripts_dirname
        fonts_dir = home / ".local" / "share" / "fonts"
        return cls(
            home=home,
            config_dir=config_dir,
            config_file=config_dir / "starship.toml",
            scripts_dir=scripts_dir,
            prompt_script=scripts_dir / "prompt.sh",
            kubectl_script=scripts_dir / "kubectl.sh",
            fonts_dir=fonts_dir,
            font_file=fonts_dir / font_filename,
            startup_file=startup_file,
        )


class InstallContext(BaseModel):
    """Immutable run configuration: {os_tag, shell_name, paths, ...}."""

    model_config = ConfigDict(frozen=True)

    os_tag: str
    shell_name: str                 # detected login shell (base name)
    rc_shell: str                   # shell the startup fragment targets
    search_path: str | None = None  # PATH used for availability checks
    paths: InstallPaths
    variant: str
    dry_run: bool = False

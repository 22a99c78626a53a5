"""
Settings loader — reads the optional starship-setup.yml into a Settings model.

Every value has a default, so the file is optional. Lookup order:

    --config PATH  >  $STARSHIP_SETUP_CONFIG  >  ~/.config/starship-setup.yml

Example::

    variant: compact
    kubectl_helpers: false
    font:
      url: https://example.com/MyNerdFont.ttf
      filename: MyNerdFont.ttf
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from starship_setup.core.data import DEFAULT_VARIANT, get_catalog
from starship_setup.core.errors import ConfigError

logger = logging.getLogger(__name__)

SETTINGS_FILE = "starship-setup.yml"
SETTINGS_ENV_VAR = "STARSHIP_SETUP_CONFIG"

STARSHIP_INSTALL_URL = "https://starship.rs/install.sh"
ANONYMICE_FONT_URL = (
    "https://github.com/ChristianLempa/dotfiles/raw/main/Windows/Rainmeter/Skins/"
    "xcad/%40Resources/Fonts/Anonymice%20Nerd%20Font%20Complete.ttf"
)


class EngineSettings(BaseModel):
    """The prompt engine and its upstream installer."""

    model_config = ConfigDict(extra="forbid")

    name: str = "starship"
    install_url: str = STARSHIP_INSTALL_URL


class FontSettings(BaseModel):
    """The Nerd Font shipped with variants that bundle one."""

    model_config = ConfigDict(extra="forbid")

    name: str = "Anonymice Nerd Font"
    url: str = ANONYMICE_FONT_URL
    filename: str = "Anonymice_Nerd_Font_Complete.ttf"
    checksum: str = ""


class Settings(BaseModel):
    """User-tunable installer settings."""

    model_config = ConfigDict(extra="forbid")

    variant: str = DEFAULT_VARIANT
    install_font: bool | None = None    # None = follow the variant
    kubectl_helpers: bool = True
    assume_yes: bool = False
    scripts_dir: str = ".shell_scripts"
    engine: EngineSettings = Field(default_factory=EngineSettings)
    font: FontSettings = Field(default_factory=FontSettings)

    @field_validator("variant")
    @classmethod
    def _known_variant(cls, value: str) -> str:
        names = get_catalog().names()
        if value not in names:
            raise ValueError(f"unknown variant '{value}' (available: {', '.join(names)})")
        return value

    @field_validator("scripts_dir")
    @classmethod
    def _relative_to_home(cls, value: str) -> str:
        # the startup block sources "$HOME/<scripts_dir>/prompt.sh"
        path = PurePosixPath(value)
        if not value or value.startswith("~") or path.is_absolute() or ".." in path.parts:
            raise ValueError(f"scripts_dir must be a relative path inside $HOME, got '{value}'")
        return value

    @property
    def font_enabled(self) -> bool:
        if self.install_font is not None:
            return self.install_font
        return get_catalog().variant(self.variant).bundles_font

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with every non-None override applied and re-validated."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return Settings.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e


def find_settings_file(
    environ: Mapping[str, str],
    home: Path,
) -> Path | None:
    """Locate the settings file, or None when the user has none."""
    explicit = environ.get(SETTINGS_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()

    candidate = home / ".config" / SETTINGS_FILE
    if candidate.is_file():
        return candidate
    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Settings file. If None, defaults are returned.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        return Settings()

    if not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s (variant=%s)", path, settings.variant)
    return settings

"""
Tests for settings loading — starship-setup.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from starship_setup.core.config.settings import (
    SETTINGS_ENV_VAR,
    Settings,
    find_settings_file,
    load_settings,
)
from starship_setup.core.errors import ConfigError


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "starship-setup.yml"
    path.write_text(textwrap.dedent(content))
    return path


class TestLoadSettings:
    def test_defaults_without_file(self):
        settings = load_settings(None)
        assert settings.variant == "boxed"
        assert settings.kubectl_helpers is True
        assert settings.engine.name == "starship"
        assert settings.font.filename == "Anonymice_Nerd_Font_Complete.ttf"

    def test_full_file(self, tmp_path: Path):
        path = _write(tmp_path, """\
            variant: compact
            kubectl_helpers: false
            assume_yes: true
            font:
              url: https://example.com/Hack.ttf
              filename: Hack.ttf
        """)
        settings = load_settings(path)
        assert settings.variant == "compact"
        assert settings.kubectl_helpers is False
        assert settings.assume_yes is True
        assert settings.font.url == "https://example.com/Hack.ttf"
        assert settings.font.name == "Anonymice Nerd Font"

    def test_empty_file(self, tmp_path: Path):
        assert load_settings(_write(tmp_path, "")) == Settings()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(_write(tmp_path, "variant: [unclosed\n"))

    def test_not_a_mapping(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(_write(tmp_path, "- boxed\n- compact\n"))

    def test_unknown_variant(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="unknown variant"):
            load_settings(_write(tmp_path, "variant: rainbow\n"))

    def test_absolute_scripts_dir(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="scripts_dir"):
            load_settings(_write(tmp_path, "scripts_dir: /opt/prompt\n"))

    def test_unknown_key(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_settings(_write(tmp_path, "colour: blue\n"))


class TestSettings:
    def test_font_follows_variant(self):
        assert Settings(variant="boxed").font_enabled
        assert not Settings(variant="compact").font_enabled

    def test_font_override(self):
        assert not Settings(variant="boxed", install_font=False).font_enabled
        assert Settings(variant="compact", install_font=True).font_enabled

    def test_with_overrides_ignores_none(self):
        base = Settings(variant="compact", kubectl_helpers=False)
        updated = base.with_overrides(variant=None, kubectl_helpers=None, assume_yes=True)
        assert updated.variant == "compact"
        assert updated.kubectl_helpers is False
        assert updated.assume_yes is True

    def test_with_overrides_validates(self):
        with pytest.raises(ConfigError):
            Settings().with_overrides(variant="rainbow")

    @pytest.mark.parametrize("value", ["../outside", "a/../../b", "~/scripts", ""])
    def test_scripts_dir_must_stay_in_home(self, value):
        with pytest.raises(ConfigError):
            Settings().with_overrides(scripts_dir=value)

    def test_nested_scripts_dir(self):
        assert Settings(scripts_dir=".config/shell").scripts_dir == ".config/shell"


class TestFindSettingsFile:
    def test_env_var_wins(self, tmp_path: Path):
        explicit = tmp_path / "elsewhere.yml"
        found = find_settings_file({SETTINGS_ENV_VAR: str(explicit)}, tmp_path)
        assert found == explicit

    def test_home_config(self, tmp_path: Path):
        candidate = tmp_path / ".config" / "starship-setup.yml"
        candidate.parent.mkdir()
        candidate.write_text("variant: compact\n")
        assert find_settings_file({}, tmp_path) == candidate

    def test_none(self, tmp_path: Path):
        assert find_settings_file({}, tmp_path) is None

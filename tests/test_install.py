"""
Tests for the install pipeline, end to end against a temporary home.

The shell and download adapters are mocks, so nothing is fetched and
nothing is executed; everything the pipeline writes lands under the
``home`` fixture.
"""

from datetime import datetime
from pathlib import Path

import pytest

from starship_setup.core.config.settings import Settings
from starship_setup.core.data import get_catalog
from starship_setup.core.models.report import (
    STEP_CONFIG,
    STEP_ENGINE,
    STEP_FONT,
    STEP_INTEGRATION,
    STEP_SCRIPTS,
)
from starship_setup.core.services.backup import list_backups
from starship_setup.core.services.integration import MARKER
from starship_setup.core.services.probe import probe_environment
from starship_setup.core.use_cases.install import build_context, run_install

NOW = datetime(2026, 10, 19, 8, 30, 5)


def _linux() -> str:
    return "Linux"


@pytest.fixture
def install(registry, environ):
    """Run the pipeline with the shared mocks; keyword overrides pass through."""

    def _run(settings: Settings | None = None, **kwargs):
        kwargs.setdefault("environ", environ)
        kwargs.setdefault("system", _linux)
        kwargs.setdefault("now", NOW)
        return run_install(settings or Settings(), registry, **kwargs)

    return _run


# ── Happy path ───────────────────────────────────────────────────────


class TestFreshInstall:
    def test_writes_everything(self, install, home: Path):
        report = install()

        assert report.ok
        assert report.exit_code == 0
        assert report.os_tag == "Linux"
        assert report.shell_name == "zsh"
        assert [o.step for o in report.outcomes] == [
            STEP_ENGINE, STEP_FONT, STEP_CONFIG, STEP_SCRIPTS, STEP_INTEGRATION,
        ]

        config = home / ".config" / "starship.toml"
        assert config.read_text(encoding="utf-8") == get_catalog().config_text("boxed")
        assert (home / ".shell_scripts" / "prompt.sh").is_file()
        assert (home / ".shell_scripts" / "kubectl.sh").is_file()
        assert MARKER in (home / ".zshrc").read_text()
        assert (home / ".local" / "share" / "fonts").is_dir()

    def test_dispatches_engine_and_font(self, install, shell_mock, download_mock):
        install()
        assert shell_mock.action_ids == ["install-starship"]
        assert download_mock.action_ids == ["download-font"]

    def test_progress_lines(self, install):
        lines: list[str] = []
        install(progress=lines.append)
        assert lines[0] == "Detected OS: Linux"
        assert lines[1] == "Detected shell: zsh"

    def test_report_files(self, install, home: Path):
        report = install()
        assert report.files["config"] == str(home / ".config" / "starship.toml")
        assert report.files["startup"] == str(home / ".zshrc")
        assert "font" in report.files

    def test_to_dict(self, install):
        data = install().to_dict()
        assert data["ok"] is True
        assert data["variant"] == "boxed"
        assert len(data["steps"]) == 5
        assert "error" not in data


# ── Idempotence and backups ──────────────────────────────────────────


class TestRerun:
    def test_second_run_keeps_one_block(self, install, home: Path):
        install()
        second = install()

        rc = (home / ".zshrc").read_text()
        assert rc.count(MARKER) == 1
        assert second.outcome(STEP_INTEGRATION).status == "skipped"

    def test_engine_on_path_is_not_reinstalled(self, install, shell_mock, add_tool):
        add_tool("starship")
        report = install()
        assert report.outcome(STEP_ENGINE).status == "skipped"
        assert shell_mock.call_count == 0

    def test_font_present_is_not_downloaded(self, install, home: Path, download_mock):
        font = home / ".local" / "share" / "fonts" / "Anonymice_Nerd_Font_Complete.ttf"
        font.parent.mkdir(parents=True)
        font.write_bytes(b"ttf")

        report = install()
        assert report.outcome(STEP_FONT).status == "skipped"
        assert download_mock.call_count == 0

    def test_existing_config_is_backed_up(self, install, home: Path):
        config = home / ".config" / "starship.toml"
        config.parent.mkdir()
        config.write_text("# mine\n")

        report = install()

        outcome = report.outcome(STEP_CONFIG)
        assert outcome.detail == "Replaced"
        assert Path(outcome.backup_path).read_text() == "# mine\n"
        assert config.read_text(encoding="utf-8") == get_catalog().config_text("boxed")

    def test_same_second_reruns_keep_every_backup(self, install, home: Path):
        install()
        install()
        install()
        config = home / ".config" / "starship.toml"
        assert len(list_backups(config)) == 2
        assert len(list_backups(home / ".zshrc")) == 2


# ── Fatal and tolerated failures ─────────────────────────────────────


class TestFailures:
    def test_missing_shell_aborts_before_writing(self, install, environ, home: Path, registry):
        report = install(environ={**environ, "SHELL": "/usr/bin/fish"})

        assert not report.ok
        assert report.exit_code == 1
        assert report.error == "fish is not installed properly."
        assert list(home.iterdir()) == []
        assert registry.history == []

    def test_unset_shell(self, install, environ):
        env = {k: v for k, v in environ.items() if k != "SHELL"}
        report = install(environ=env)
        assert report.exit_code == 1
        assert "$SHELL" in report.error

    def test_empty_os_is_fatal(self, install, home: Path):
        report = install(system=lambda: "")
        assert report.exit_code == 1
        assert list(home.iterdir()) == []

    def test_engine_failure_is_fatal(self, install, shell_mock, home: Path):
        shell_mock.set_failure("install-starship", "network unreachable")
        report = install()

        assert report.exit_code == 1
        assert "network unreachable" in report.error
        assert not (home / ".config" / "starship.toml").exists()

    def test_font_failure_is_tolerated(self, install, download_mock, home: Path):
        download_mock.set_failure("download-font", "HTTP Error 404")
        report = install()

        assert report.ok
        assert report.outcome(STEP_FONT).status == "warning"
        assert (home / ".config" / "starship.toml").is_file()
        assert MARKER in (home / ".zshrc").read_text()


# ── Options ──────────────────────────────────────────────────────────


class TestOptions:
    def test_compact_variant_skips_font(self, install, home: Path, download_mock):
        report = install(Settings(variant="compact"))

        assert report.outcome(STEP_FONT).status == "skipped"
        assert download_mock.call_count == 0
        assert "font" not in report.files
        config = (home / ".config" / "starship.toml").read_text(encoding="utf-8")
        assert config == get_catalog().config_text("compact")

    def test_font_override(self, install, download_mock):
        install(Settings(variant="compact", install_font=True))
        assert download_mock.action_ids == ["download-font"]

    def test_without_kubectl(self, install, home: Path):
        install(Settings(kubectl_helpers=False))
        assert not (home / ".shell_scripts" / "kubectl.sh").exists()
        assert "kubectl" not in (home / ".zshrc").read_text()

    def test_assume_yes(self, install, shell_mock):
        install(Settings(assume_yes=True))
        assert shell_mock.call_log[0].action.params["command"].endswith("--yes")

    def test_unknown_shell_uses_bashrc(self, install, environ, home: Path, add_tool):
        add_tool("fish")
        report = install(environ={**environ, "SHELL": "/usr/bin/fish"})

        assert report.ok
        assert report.startup_file == str(home / ".bashrc")
        assert 'export SHELL_NAME="bash"' in (home / ".bashrc").read_text()

    def test_dry_run_writes_nothing(self, install, home: Path, shell_mock, download_mock):
        report = install(dry_run=True)

        assert report.ok
        assert report.dry_run
        assert list(home.iterdir()) == []
        assert shell_mock.call_count == 0
        assert download_mock.call_count == 0


class TestBuildContext:
    def test_paths(self, environ, home: Path):
        probe = probe_environment(environ, _linux)
        ctx = build_context(Settings(scripts_dir=".prompt"), probe)

        assert ctx.rc_shell == "zsh"
        assert ctx.paths.startup_file == home / ".zshrc"
        assert ctx.paths.prompt_script == home / ".prompt" / "prompt.sh"
        assert ctx.paths.font_file.name == "Anonymice_Nerd_Font_Complete.ttf"
        assert ctx.os_tag == "Linux"
        assert not ctx.dry_run

    def test_nested_scripts_dir_in_startup_block(self, install, home: Path):
        install(Settings(scripts_dir=".config/shell"))
        rc = (home / ".zshrc").read_text()
        assert 'source "$HOME/.config/shell/prompt.sh"' in rc
        assert "$HOME//" not in rc
        assert (home / ".config" / "shell" / "prompt.sh").is_file()

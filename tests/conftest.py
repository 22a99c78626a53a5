"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from starship_setup.adapters.mock import MockAdapter
from starship_setup.adapters.registry import AdapterRegistry
from starship_setup.core.models.context import InstallContext, InstallPaths


def make_executable(bin_dir: Path, name: str) -> Path:
    """Drop a no-op executable stub into ``bin_dir``."""
    path = bin_dir / name
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(0o755)
    return path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep the developer's own settings and log config out of tests."""
    for var in (
        "STARSHIP_SETUP_CONFIG",
        "STARSHIP_SETUP_LOG_FILE",
        "STARSHIP_SETUP_LOG_FILE_LEVEL",
        "STARSHIP_SETUP_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """An empty home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """A PATH directory holding only a ``zsh`` stub."""
    path = tmp_path / "bin"
    path.mkdir()
    make_executable(path, "zsh")
    return path


@pytest.fixture
def add_tool(bin_dir: Path):
    """Factory that puts another executable stub on the test PATH."""
    return lambda name: make_executable(bin_dir, name)


@pytest.fixture
def environ(home: Path, bin_dir: Path) -> dict[str, str]:
    return {"HOME": str(home), "SHELL": "/usr/bin/zsh", "PATH": str(bin_dir)}


@pytest.fixture
def shell_mock() -> MockAdapter:
    return MockAdapter(adapter_name="shell")


@pytest.fixture
def download_mock() -> MockAdapter:
    return MockAdapter(adapter_name="download")


@pytest.fixture
def registry(shell_mock: MockAdapter, download_mock: MockAdapter) -> AdapterRegistry:
    """Registry whose shell and download adapters only record calls."""
    reg = AdapterRegistry()
    reg.register(shell_mock)
    reg.register(download_mock)
    return reg


@pytest.fixture
def ctx(home: Path, bin_dir: Path) -> InstallContext:
    """A Linux/zsh install context rooted at the temporary home."""
    return InstallContext(
        os_tag="Linux",
        shell_name="zsh",
        rc_shell="zsh",
        search_path=str(bin_dir),
        paths=InstallPaths.for_home(
            home,
            startup_file=home / ".zshrc",
            font_filename="Anonymice_Nerd_Font_Complete.ttf",
        ),
        variant="boxed",
    )


@pytest.fixture
def dry_ctx(ctx: InstallContext) -> InstallContext:
    return ctx.model_copy(update={"dry_run": True})

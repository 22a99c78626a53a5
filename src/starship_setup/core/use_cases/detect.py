"""
Detection use case — report what an install run would find.

Read-only: probes the environment and inspects the target paths
without changing anything.
"""

from __future__ import annotations

import platform
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from starship_setup.core.config.settings import Settings
from starship_setup.core.errors import SetupError
from starship_setup.core.models.context import InstallContext
from starship_setup.core.services.availability import is_available
from starship_setup.core.services.backup import list_backups
from starship_setup.core.services.installer import FONT_CACHE_TOOL
from starship_setup.core.services.integration import LEGACY_MARKERS, MARKER, find_marker
from starship_setup.core.services.probe import EnvironmentProbe, probe_environment
from starship_setup.core.use_cases.install import build_context


@dataclass
class DetectResult:
    """Result of the detect use case."""

    probe: EnvironmentProbe | None = None
    context: InstallContext | None = None
    tools: dict[str, bool] = field(default_factory=dict)
    configured: bool = False
    config_exists: bool = False
    font_installed: bool = False
    config_backups: int = 0
    error: str | None = None

    @property
    def shell_available(self) -> bool:
        return bool(self.probe and self.tools.get(self.probe.shell_name))

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        assert self.probe is not None and self.context is not None
        result.update(self.probe.to_dict())
        result["shell_available"] = self.shell_available
        result["startup_file"] = str(self.context.paths.startup_file)
        result["tools"] = dict(self.tools)
        result["configured"] = self.configured
        result["config_exists"] = self.config_exists
        result["config_backups"] = self.config_backups
        result["font_installed"] = self.font_installed
        return result


def run_detect(
    settings: Settings,
    *,
    environ: Mapping[str, str] | None = None,
    system: Callable[[], str] = platform.system,
) -> DetectResult:
    result = DetectResult()

    try:
        probe = probe_environment(environ, system)
    except SetupError as e:
        result.error = str(e)
        return result

    ctx = build_context(settings, probe)
    result.probe = probe
    result.context = ctx

    for tool in (probe.shell_name, settings.engine.name, FONT_CACHE_TOOL):
        if tool:
            result.tools[tool] = is_available(tool, probe.search_path)

    paths = ctx.paths
    if paths.startup_file.is_file():
        text = paths.startup_file.read_text(encoding="utf-8", errors="replace")
        result.configured = find_marker(text, (MARKER, *LEGACY_MARKERS)) is not None

    result.config_exists = paths.config_file.is_file()
    result.config_backups = len(list_backups(paths.config_file))
    result.font_installed = paths.font_file.is_file()
    return result

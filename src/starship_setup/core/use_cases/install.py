"""
Install use case — the whole pipeline, top to bottom, once.

    probe → shell check → engine → font → starship.toml → helper
    scripts → startup file

Each step is guarded so a second run changes nothing but backups.
A missing login shell aborts before any file is touched.
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Callable, Mapping
from datetime import datetime
from pathlib import Path

from starship_setup.adapters.registry import AdapterRegistry
from starship_setup.core.config.settings import Settings
from starship_setup.core.data import get_catalog
from starship_setup.core.errors import SetupError, ShellNotFoundError
from starship_setup.core.models.context import InstallContext, InstallPaths
from starship_setup.core.models.report import (
    STEP_CONFIG,
    STEP_FONT,
    STEP_INTEGRATION,
    STEP_SCRIPTS,
    InstallReport,
    StepOutcome,
)
from starship_setup.core.services.availability import is_available
from starship_setup.core.services.installer import ensure_font, ensure_installed
from starship_setup.core.services.integration import (
    ensure_sourced,
    rc_shell_for,
    render_fragment,
    startup_file_for,
)
from starship_setup.core.services.materializer import write_config, write_fragment
from starship_setup.core.services.probe import EnvironmentProbe, probe_environment

logger = logging.getLogger(__name__)

Progress = Callable[[str], None]


def build_context(
    settings: Settings,
    probe: EnvironmentProbe,
    *,
    dry_run: bool = False,
) -> InstallContext:
    """Freeze the run configuration from the probe and settings."""
    rc_shell = rc_shell_for(probe.shell_name)
    paths = InstallPaths.for_home(
        probe.home,
        startup_file=startup_file_for(rc_shell, probe.home),
        font_filename=settings.font.filename,
        scripts_dirname=settings.scripts_dir,
    )
    return InstallContext(
        os_tag=probe.os_tag,
        shell_name=probe.shell_name,
        rc_shell=rc_shell,
        search_path=probe.search_path,
        paths=paths,
        variant=settings.variant,
        dry_run=dry_run,
    )


def run_install(
    settings: Settings,
    registry: AdapterRegistry,
    *,
    environ: Mapping[str, str] | None = None,
    system: Callable[[], str] = platform.system,
    dry_run: bool = False,
    now: datetime | None = None,
    progress: Progress | None = None,
) -> InstallReport:
    """Run the install pipeline.

    Fatal errors are captured in ``report.error`` rather than raised.

    Args:
        settings: Validated settings (variant, font, engine).
        registry: Adapter registry used for every external command.
        environ: Environment mapping (default: ``os.environ``).
        system: OS identifier source (default: ``platform.system``).
        dry_run: Log what would change without changing it.
        now: Clock override for backup names.
        progress: Callback for human-readable progress lines.
    """
    emit = progress or logger.info
    report = InstallReport(variant=settings.variant, dry_run=dry_run)

    try:
        probe = probe_environment(environ, system)
        report.os_tag = probe.os_tag
        report.shell_name = probe.shell_name
        report.home = str(probe.home)
        emit(f"Detected OS: {probe.os_tag}")
        emit(f"Detected shell: {probe.shell_name or '<unset>'}")

        if not is_available(probe.shell_name, probe.search_path):
            raise ShellNotFoundError(probe.shell_name)

        ctx = build_context(settings, probe, dry_run=dry_run)
        report.startup_file = str(ctx.paths.startup_file)
        report.files = {
            "config": str(ctx.paths.config_file),
            "startup": str(ctx.paths.startup_file),
            "scripts": str(ctx.paths.scripts_dir),
        }
        if settings.font_enabled:
            report.files["font"] = str(ctx.paths.font_file)
        _run_steps(report, ctx, settings, registry, now=now, emit=emit)
    except SetupError as e:
        logger.debug("Install aborted: %s", e)
        report.error = str(e)

    return report


def _run_steps(
    report: InstallReport,
    ctx: InstallContext,
    settings: Settings,
    registry: AdapterRegistry,
    *,
    now: datetime | None,
    emit: Progress,
) -> None:
    catalog = get_catalog()
    paths = ctx.paths

    # ── Prompt engine ───────────────────────────────────────────
    emit(f"📦 Installing {settings.engine.name}...")
    report.add(ensure_installed(settings.engine, ctx, registry, assume_yes=settings.assume_yes))

    # ── Font ────────────────────────────────────────────────────
    if settings.font_enabled:
        emit(f"📦 Installing {settings.font.name}...")
        report.add(
            ensure_font(
                settings.font.url,
                paths.font_file,
                ctx,
                registry,
                font_name=settings.font.name,
                checksum=settings.font.checksum,
            )
        )
    else:
        report.add(StepOutcome(step=STEP_FONT, status="skipped", detail="No font for this variant"))

    # ── starship.toml ───────────────────────────────────────────
    emit("📝 Creating Starship configuration...")
    written = write_config(
        paths.config_file,
        catalog.config_text(ctx.variant),
        now=now,
        dry_run=ctx.dry_run,
    )
    report.add(
        StepOutcome(
            step=STEP_CONFIG,
            status="done",
            detail="Created" if written.created else "Replaced",
            backup_path=_str(written.backup_path),
        )
    )

    # ── Helper scripts ──────────────────────────────────────────
    emit(f"📝 Creating helper scripts in {paths.scripts_dir}...")
    scripts = [write_fragment(paths.prompt_script, catalog.prompt_script, dry_run=ctx.dry_run)]
    if settings.kubectl_helpers:
        scripts.append(
            write_fragment(paths.kubectl_script, catalog.kubectl_script, dry_run=ctx.dry_run)
        )
    report.add(
        StepOutcome(
            step=STEP_SCRIPTS,
            status="done",
            detail=", ".join(s.path.name for s in scripts),
            metadata={"kubectl_helpers": settings.kubectl_helpers},
        )
    )

    # ── Startup file ────────────────────────────────────────────
    emit(f"📝 Updating {paths.startup_file}...")
    fragment = render_fragment(
        ctx.rc_shell,
        scripts_dir=settings.scripts_dir,
        include_kubectl=settings.kubectl_helpers,
    )
    sourced = ensure_sourced(paths.startup_file, fragment, now=now, dry_run=ctx.dry_run)
    report.add(
        StepOutcome(
            step=STEP_INTEGRATION,
            status="done" if sourced.added else "skipped",
            detail="Added" if sourced.added else "Already configured",
            backup_path=_str(sourced.backup_path),
        )
    )


def _str(path: Path | None) -> str | None:
    return str(path) if path is not None else None

"""
CLI reporter — human-readable summaries of install and detect runs.

Pure output. Next-step guidance branches only on the OS tag and on
whether the variant ships its own font.
"""

from __future__ import annotations

from pathlib import Path

import click

from starship_setup.core.config.settings import Settings
from starship_setup.core.data import get_catalog
from starship_setup.core.models.context import OS_LINUX, OS_MAC
from starship_setup.core.models.report import (
    STEP_CONFIG,
    STEP_ENGINE,
    STEP_FONT,
    STEP_INTEGRATION,
    InstallReport,
)
from starship_setup.core.use_cases.detect import DetectResult

_RULE = "═" * 64

_FONT_TERMINALS: dict[str, list[tuple[str, str]]] = {
    OS_LINUX: [
        ("GNOME Terminal", "Edit > Preferences > Profile > Text"),
        ("Tilix/Terminator", "Preferences > Profiles > General"),
    ],
    OS_MAC: [
        ("iTerm2", "Preferences > Profiles > Text > Font"),
        ("Terminal.app", "Preferences > Profiles > Text > Font"),
    ],
}


def _tilde(path: str, home: Path | None = None) -> str:
    home_str = str(home or Path.home())
    if path == home_str or path.startswith(home_str + "/"):
        return "~" + path[len(home_str):]
    return path


def print_install_report(report: InstallReport, settings: Settings, home: Path | None = None) -> None:
    """Print the end-of-run summary."""
    variant = get_catalog().variant(report.variant)
    files = {k: _tilde(v, home) for k, v in report.files.items()}
    rc = files.get("startup", report.startup_file)

    click.echo()
    click.secho(_RULE, fg="cyan")
    if report.dry_run:
        click.secho("🔍 Dry run complete — nothing was changed", fg="green", bold=True)
    else:
        click.secho("✅ Installation complete!", fg="green", bold=True)
    click.secho(_RULE, fg="cyan")
    click.echo()

    # ── What was done ───────────────────────────────────────────
    click.secho("What was done:", fg="yellow")

    engine = report.outcome(STEP_ENGINE)
    if engine:
        label = f"Installed {settings.engine.name}" if engine.done else engine.detail
        click.echo(f"  ✓ {label}")

    font = report.outcome(STEP_FONT)
    if font and font.status == "warning":
        click.secho(f"  ⚠ Could not download {settings.font.name} automatically", fg="yellow")
    elif font and font.done:
        click.echo(f"  ✓ Downloaded and installed {settings.font.name}")
    elif font and settings.font_enabled:
        click.echo(f"  ✓ {font.detail}")

    config = report.outcome(STEP_CONFIG)
    if config:
        action = "Created" if config.detail == "Created" else "Replaced"
        click.echo(f"  ✓ {action} {files.get('config', '')} with {variant.summary}")
        if config.backup_path:
            click.echo(f"    (previous version saved to {_tilde(config.backup_path, home)})")

    integration = report.outcome(STEP_INTEGRATION)
    if integration and integration.done:
        click.echo(f"  ✓ Updated {rc}")
    elif integration:
        click.secho(f"  ⚠ Starship already configured in {rc}", fg="yellow")

    if settings.kubectl_helpers:
        click.echo("  ✓ Added kubectl helper functions (k, h, kn, knd, ku)")
    click.echo()

    # ── Next steps ──────────────────────────────────────────────
    click.secho("Next steps:", fg="yellow")
    click.echo(f"  1. Restart your terminal or run: source {rc}")
    if settings.font_enabled:
        click.echo(f"  2. Configure your terminal to use '{settings.font.name}':")
        click.echo()
        for terminal, menu in _FONT_TERMINALS.get(report.os_tag, []):
            click.echo(f"     {terminal}:")
            click.echo(f"       - {menu}")
            click.echo(f"       - Select '{settings.font.name}'")
            click.echo()
    else:
        click.echo("  2. Make sure you have a Nerd Font installed for icons to display correctly")
        click.echo("     Download from: https://www.nerdfonts.com/")
        click.echo("     Recommended: FiraCode Nerd Font, CascadiaCode Nerd Font, or Hack Nerd Font")
        click.echo("  3. Configure your terminal to use the Nerd Font")
    click.echo()

    # ── Files ───────────────────────────────────────────────────
    click.secho("Configuration files:", fg="green")
    click.echo(f"  • Starship config: {files.get('config', '')}")
    click.echo(f"  • Shell config: {rc}")
    click.echo(f"  • Helper scripts: {files.get('scripts', '')}/")
    if "font" in files:
        click.echo(f"  • Font: {files['font']}")
    click.echo()

    preview = get_catalog().preview_lines(report.variant)
    if preview:
        click.secho("Your prompt will show:", fg="cyan")
        for line in preview:
            click.echo(f"  {line}")
        click.echo()

    click.secho(f"To customize your prompt, edit: {files.get('config', '')}", fg="cyan")
    click.echo()


def print_detect_result(result: DetectResult) -> None:
    """Print the read-only environment report."""
    assert result.probe is not None and result.context is not None
    probe = result.probe
    paths = result.context.paths

    click.secho("\n🔍 Environment", fg="cyan", bold=True)
    click.echo(f"   OS:           {probe.os_tag}")
    click.echo(f"   Shell:        {probe.shell_name or '<unset>'} ({probe.shell_path or 'SHELL not set'})")
    click.echo(f"   Startup file: {paths.startup_file}")
    click.echo()

    click.secho("   Tools:", fg="white", bold=True)
    for tool, available in result.tools.items():
        if available:
            click.secho(f"     ✓ {tool}", fg="green")
        else:
            click.secho(f"     ✗ {tool}", fg="red")
    click.echo()

    click.secho("   State:", fg="white", bold=True)
    click.echo(f"     starship.toml: {'present' if result.config_exists else 'missing'}"
               f" ({result.config_backups} backup(s))")
    click.echo(f"     font:          {'installed' if result.font_installed else 'missing'}")
    click.echo(f"     integration:   {'configured' if result.configured else 'not configured'}")
    click.echo()

"""
starship-setup — CLI entrypoint.

Usage:
    starship-setup --help
    starship-setup install
    starship-setup install --variant compact --dry-run
    starship-setup detect
"""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Mapping
from pathlib import Path

import click

from starship_setup import __version__
from starship_setup.core.config.settings import Settings, find_settings_file, load_settings
from starship_setup.core.data import get_catalog
from starship_setup.core.errors import ConfigError
from starship_setup.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="starship-setup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to starship-setup.yml (default: ~/.config/starship-setup.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """starship-setup — install and configure the Starship prompt."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("STARSHIP_SETUP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("STARSHIP_SETUP_LOG_FILE"),
        log_file_level=os.environ.get("STARSHIP_SETUP_LOG_FILE_LEVEL"),
    )


def _environ(home: str | None) -> dict[str, str]:
    environ = dict(os.environ)
    if home:
        environ["HOME"] = str(Path(home).expanduser().resolve())
    return environ


def _load_settings(ctx: click.Context, environ: Mapping[str, str]) -> Settings:
    """Load settings or exit 1 with the validation error."""
    path: Path | None = ctx.obj.get("config_path")
    try:
        if path is None:
            home = Path(environ["HOME"]) if environ.get("HOME") else Path.home()
            path = find_settings_file(environ, home)
        return load_settings(path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@cli.command()
@click.option(
    "--variant",
    type=click.Choice(get_catalog().names()),
    default=None,
    help="Configuration variant to install.",
)
@click.option("--font/--no-font", "install_font", default=None, help="Install the Nerd Font.")
@click.option(
    "--kubectl/--no-kubectl",
    "kubectl_helpers",
    default=None,
    help="Write and source the kubectl helper functions.",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True,
              help="Answer yes to the upstream installer's prompts.")
@click.option("--dry-run", is_flag=True, help="Show what would change without changing it.")
@click.option("--mock", is_flag=True, help="Use mock adapters (no commands, no downloads).")
@click.option("--home", type=click.Path(file_okay=False), default=None,
              help="Install into this home directory instead of $HOME.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    variant: str | None,
    install_font: bool | None,
    kubectl_helpers: bool | None,
    assume_yes: bool,
    dry_run: bool,
    mock: bool,
    home: str | None,
    as_json: bool,
) -> None:
    """Install Starship and wire it into your shell.

    Examples:

        starship-setup install

        starship-setup install --variant compact --no-kubectl

        starship-setup install --dry-run
    """
    from starship_setup.adapters.registry import default_registry
    from starship_setup.core.use_cases.install import run_install
    from starship_setup.ui.cli.report import print_install_report

    environ = _environ(home)
    settings = _load_settings(ctx, environ)
    try:
        settings = settings.with_overrides(
            variant=variant,
            install_font=install_font,
            kubectl_helpers=kubectl_helpers,
            assume_yes=assume_yes or None,
        )
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False) or as_json

    def progress(message: str) -> None:
        if not quiet:
            click.secho(message, fg="yellow")

    if not quiet:
        mode_label = "[dry-run] " if dry_run else "[mock] " if mock else ""
        click.secho(f"🚀 {mode_label}Starting Starship installation...", fg="cyan", bold=True)

    report = run_install(
        settings,
        default_registry(mock_mode=mock),
        environ=environ,
        dry_run=dry_run,
        progress=progress,
    )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(report.exit_code)

    if report.error:
        click.secho(f"✗ {report.error}", fg="red")
        sys.exit(report.exit_code)

    if not ctx.obj.get("quiet", False):
        print_install_report(report, settings, home=Path(report.home) if report.home else None)


@cli.command()
@click.option("--home", type=click.Path(file_okay=False), default=None,
              help="Inspect this home directory instead of $HOME.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, home: str | None, as_json: bool) -> None:
    """Show the detected OS, shell and current installation state."""
    from starship_setup.core.use_cases.detect import run_detect
    from starship_setup.ui.cli.report import print_detect_result

    environ = _environ(home)
    settings = _load_settings(ctx, environ)
    result = run_detect(settings, environ=environ)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    print_detect_result(result)


@cli.command()
def variants() -> None:
    """List the bundled configuration variants."""
    catalog = get_catalog()
    click.secho("\n🎨 Variants", fg="cyan", bold=True)
    for name in catalog.names():
        variant = catalog.variant(name)
        font = " (bundles Nerd Font)" if variant.bundles_font else ""
        click.secho(f"   • {name}", fg="white", bold=True, nl=False)
        click.echo(f"{font} — {variant.description}")
    click.echo()


@cli.command("show-config")
@click.option(
    "--variant",
    type=click.Choice(get_catalog().names()),
    default=None,
    help="Variant to print (default: from settings).",
)
@click.pass_context
def show_config(ctx: click.Context, variant: str | None) -> None:
    """Print the starship.toml a variant installs."""
    settings = _load_settings(ctx, _environ(None))
    click.echo(get_catalog().config_text(variant or settings.variant), nl=False)


if __name__ == "__main__":
    cli()

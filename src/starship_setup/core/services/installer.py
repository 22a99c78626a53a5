"""
Idempotent installer — the prompt engine and the Nerd Font.

Both operations are guarded by an existence check and are no-ops on a
machine that already has what they install. External work goes through
the adapter registry:

    engine   → ``shell`` adapter  (``curl -sS <install.sh> | sh``)
    font     → ``download`` adapter
    fc-cache → ``shell`` adapter, only when ``fc-cache`` is on PATH

An engine install failure is fatal. A font failure never is.
"""

from __future__ import annotations

import logging
from pathlib import Path

from starship_setup.adapters.registry import AdapterRegistry
from starship_setup.core.config.settings import EngineSettings
from starship_setup.core.errors import InstallError
from starship_setup.core.models.action import Action
from starship_setup.core.models.context import InstallContext
from starship_setup.core.models.report import STEP_ENGINE, STEP_FONT, StepOutcome
from starship_setup.core.services.availability import is_available
from starship_setup.core.services.materializer import ensure_dir

logger = logging.getLogger(__name__)

FONT_CACHE_TOOL = "fc-cache"


def install_command(tool: EngineSettings, *, assume_yes: bool = False) -> str:
    """The upstream install pipeline for ``tool``."""
    command = f"curl -sS {tool.install_url} | sh"
    if assume_yes:
        command += " -s -- --yes"
    return command


def ensure_installed(
    tool: EngineSettings,
    ctx: InstallContext,
    registry: AdapterRegistry,
    *,
    assume_yes: bool = False,
) -> StepOutcome:
    """Install ``tool`` unless it is already on PATH.

    Raises:
        InstallError: If the upstream installer fails.
    """
    if is_available(tool.name, ctx.search_path):
        logger.info("%s is already installed", tool.name)
        return StepOutcome(
            step=STEP_ENGINE,
            status="skipped",
            detail=f"{tool.name} is already installed",
        )

    action = Action(
        id=f"install-{tool.name}",
        name=f"Install {tool.name}",
        adapter="shell",
        params={"command": install_command(tool, assume_yes=assume_yes), "capture": False},
    )
    receipt = registry.execute_action(action, dry_run=ctx.dry_run)

    if receipt.failed:
        raise InstallError(f"Failed to install {tool.name}: {receipt.error}")

    if receipt.skipped:
        return StepOutcome(step=STEP_ENGINE, status="skipped", detail=receipt.output)

    logger.info("Installed %s", tool.name)
    return StepOutcome(
        step=STEP_ENGINE,
        status="done",
        detail=f"Installed {tool.name}",
        metadata={"command": action.params["command"]},
    )


def ensure_font(
    url: str,
    dest_path: Path,
    ctx: InstallContext,
    registry: AdapterRegistry,
    *,
    font_name: str = "font",
    checksum: str = "",
) -> StepOutcome:
    """Download a font to ``dest_path`` unless it is already there.

    Failures are reported as a ``warning`` outcome carrying the manual
    download URL; they never raise.
    """
    ensure_dir(dest_path.parent, dry_run=ctx.dry_run)

    if dest_path.exists():
        logger.info("%s already installed at %s", font_name, dest_path)
        return StepOutcome(
            step=STEP_FONT,
            status="skipped",
            detail=f"{font_name} already installed",
        )

    if ctx.dry_run:
        return StepOutcome(
            step=STEP_FONT,
            status="skipped",
            detail=f"[dry-run] Would download {font_name} to {dest_path}",
        )

    action = Action(
        id="download-font",
        name=f"Download {font_name}",
        adapter="download",
        params={"url": url, "dest": str(dest_path), "checksum": checksum},
    )
    receipt = registry.execute_action(action)

    if not receipt.ok:
        logger.warning("Could not download %s automatically: %s", font_name, receipt.error)
        logger.warning("Please download manually from: %s", url)
        return StepOutcome(
            step=STEP_FONT,
            status="warning",
            detail=f"Could not download {font_name} automatically",
            metadata={"url": url, "error": receipt.error},
        )

    refreshed = refresh_font_cache(dest_path.parent, ctx, registry)
    return StepOutcome(
        step=STEP_FONT,
        status="done",
        detail=f"Downloaded and installed {font_name}",
        metadata={"font_cache_refreshed": refreshed},
    )


def refresh_font_cache(
    fonts_dir: Path,
    ctx: InstallContext,
    registry: AdapterRegistry,
) -> bool:
    """Run ``fc-cache -f`` when available. Best effort."""
    if not is_available(FONT_CACHE_TOOL, ctx.search_path):
        logger.debug("%s not available; skipping font cache refresh", FONT_CACHE_TOOL)
        return False

    receipt = registry.execute_action(
        Action(
            id="refresh-font-cache",
            name="Refresh font cache",
            adapter="shell",
            params={"command": [FONT_CACHE_TOOL, "-f", str(fonts_dir)]},
        ),
        dry_run=ctx.dry_run,
    )
    if receipt.failed:
        logger.warning("Font cache refresh failed: %s", receipt.error)
        return False

    logger.info("Font cache updated")
    return receipt.ok

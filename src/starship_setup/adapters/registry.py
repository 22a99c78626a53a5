"""
Adapter registry — central dispatch for all external side effects.

The registry handles registration, lookup, mock mode, dry-run and
action execution. Services never talk to adapters directly.
"""

from __future__ import annotations

import logging
import time
from starship_setup.adapters.base import Adapter, ExecutionContext
from starship_setup.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Central registry and dispatcher for adapters.

    Features:
        - Register adapters by name
        - Mock mode: every action succeeds without running
        - Execute actions through the appropriate adapter
        - Record every dispatched action
    """

    def __init__(self, mock_mode: bool = False):
        self._adapters: dict[str, Adapter] = {}
        self._mock_mode = mock_mode
        self._history: list[Action] = []

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    @property
    def history(self) -> list[Action]:
        """Every action dispatched through this registry, in order."""
        return self._history

    def register(self, adapter: Adapter) -> None:
        """Register an adapter under its name."""
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def get(self, name: str) -> Adapter | None:
        """Look up an adapter by name."""
        return self._adapters.get(name)

    def execute_action(self, action: Action, dry_run: bool = False) -> Receipt:
        """Execute an action through the appropriate adapter.

        1. Resolves the adapter (or answers for it in mock mode)
        2. Validates the action
        3. Executes (or dry-runs)
        4. Returns a Receipt (never raises)
        """
        start_time = time.monotonic()
        self._history.append(action)

        context = ExecutionContext(action=action, dry_run=dry_run, params=action.params)

        # Resolve adapter
        if self._mock_mode:
            return Receipt.success(
                adapter=action.adapter,
                action_id=action.id,
                output=f"[mock] {action.adapter}:{action.id} executed",
                metadata={"mock": True, "dry_run": dry_run},
            )
        adapter = self.get(action.adapter)

        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        # Validate
        try:
            is_valid, error_msg = adapter.validate(context)
            if not is_valid:
                return Receipt.failure(
                    adapter=action.adapter,
                    action_id=action.id,
                    error=f"Validation failed: {error_msg}",
                )
        except Exception as e:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation error: {e}",
            )

        # Dry run: validated but not executed
        if dry_run:
            return Receipt.skip(
                adapter=action.adapter,
                action_id=action.id,
                reason=f"[dry-run] Would execute {action.adapter}:{action.id}",
                metadata={"dry_run": True},
            )

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised during execution: %s", action.adapter, e)
            receipt = Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - start_time) * 1000)
        return receipt


def default_registry(mock_mode: bool = False) -> AdapterRegistry:
    """Registry wired with the real shell and download adapters."""
    from starship_setup.adapters.net.download import DownloadAdapter
    from starship_setup.adapters.shell.command import ShellCommandAdapter

    registry = AdapterRegistry(mock_mode=mock_mode)
    registry.register(ShellCommandAdapter())
    registry.register(DownloadAdapter())
    return registry

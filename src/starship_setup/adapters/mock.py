"""
Mock adapter — recording stand-in for the shell and download adapters.

Registered under the real adapter's name, it answers every action with
success (or a configured failure) and keeps the execution contexts so
tests can assert on what would have been run.
"""

from __future__ import annotations

from starship_setup.adapters.base import Adapter, ExecutionContext
from starship_setup.core.models.action import Receipt


class MockAdapter(Adapter):
    """Records actions instead of executing them.

    Every action succeeds unless its ID was passed to ``set_failure``.
    """

    def __init__(self, adapter_name: str = "mock", default_output: str = "[mock] executed"):
        self._name = adapter_name
        self._default_output = default_output
        self._failures: dict[str, str] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def action_ids(self) -> list[str]:
        """IDs of executed actions, in call order."""
        return [ctx.action.id for ctx in self._call_log]

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Make every execution of ``action_id`` fail with ``error``."""
        self._failures[action_id] = error

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        action_id = context.action.id

        if action_id in self._failures:
            return Receipt.failure(
                adapter=self._name,
                action_id=action_id,
                error=self._failures[action_id],
            )

        return Receipt.success(
            adapter=self._name,
            action_id=action_id,
            output=self._default_output,
            metadata={"mock": True},
        )

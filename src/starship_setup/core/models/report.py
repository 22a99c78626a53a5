"""
InstallReport — what a pipeline run actually did.

One StepOutcome per pipeline step. The reporter reads it; nothing
else consumes it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

OutcomeStatus = Literal["done", "skipped", "warning", "failed"]

# Step identifiers, in pipeline order
STEP_ENGINE = "engine"
STEP_FONT = "font"
STEP_CONFIG = "config"
STEP_SCRIPTS = "scripts"
STEP_INTEGRATION = "integration"


class StepOutcome(BaseModel):
    """Result of a single pipeline step."""

    step: str
    status: OutcomeStatus
    detail: str = ""
    backup_path: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def done(self) -> bool:
        return self.status == "done"


class InstallReport(BaseModel):
    """Aggregate result of one install run."""

    os_tag: str = ""
    shell_name: str = ""
    home: str = ""
    variant: str = ""
    startup_file: str = ""
    dry_run: bool = False
    files: dict[str, str] = Field(default_factory=dict)
    outcomes: list[StepOutcome] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def add(self, outcome: StepOutcome) -> StepOutcome:
        self.outcomes.append(outcome)
        return outcome

    def outcome(self, step: str) -> StepOutcome | None:
        """Look up the outcome of a step, or None if it never ran."""
        for item in self.outcomes:
            if item.step == step:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "ok": self.ok,
            "os": self.os_tag,
            "shell": self.shell_name,
            "home": self.home,
            "variant": self.variant,
            "startup_file": self.startup_file,
            "dry_run": self.dry_run,
            "files": dict(self.files),
            "steps": [o.model_dump() for o in self.outcomes],
        }
        if self.error:
            result["error"] = self.error
        return result

"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from starship_setup.core.models import Action, Receipt, InstallContext, InstallReport
"""

from starship_setup.core.models.action import Action, Receipt
from starship_setup.core.models.context import InstallContext, InstallPaths
from starship_setup.core.models.report import InstallReport, StepOutcome

__all__ = [
    "Action",
    "InstallContext",
    "InstallPaths",
    "InstallReport",
    "Receipt",
    "StepOutcome",
]

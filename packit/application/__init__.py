"""Application orchestration layer."""

from packit.application.state import WizardState
from packit.application.wizard import PackingWizard

__all__ = ["PackingWizard", "WizardState"]

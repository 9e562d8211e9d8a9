"""
Uninstall use case — remove macsetup's own registration and local clone.

Nothing is touched until the user confirms.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from typing import Literal

from macsetup.core.context import ProvisionContext

logger = logging.getLogger(__name__)


@dataclass
class UninstallResult:
    status: Literal["removed", "cancelled", "failed"] = "removed"
    removed: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def exit_code(self) -> int:
        return 1 if self.status == "failed" else 0

    def to_dict(self) -> dict:
        result: dict = {"status": self.status, "removed": self.removed}
        if self.error:
            result["error"] = self.error
        return result


def uninstall(ctx: ProvisionContext) -> UninstallResult:
    """Confirm, unregister the package, delete the clone directory."""
    ui = ctx.ui
    config = ctx.settings.uninstall
    clone_dir = ctx.settings.path(config.clone_dir)

    if not ctx.prompts.confirm("Remove macsetup from this machine?", default=False):
        ui.info("Uninstall cancelled.")
        return UninstallResult(status="cancelled")

    result = UninstallResult()

    if config.unregister_command:
        with ui.status("Removing macsetup registration..."):
            outcome = ctx.runner.run(config.unregister_command)
        if not outcome.ok:
            ui.failure("Failed to remove registration", outcome.error)
            return UninstallResult(status="failed", error=outcome.error)
        result.removed.append(" ".join(config.unregister_command))

    if clone_dir.exists():
        try:
            shutil.rmtree(clone_dir)
        except OSError as e:
            ui.failure(f"Failed to remove {clone_dir}", str(e))
            return UninstallResult(status="failed", removed=result.removed, error=str(e))
        result.removed.append(str(clone_dir))
    else:
        logger.info("Clone directory %s does not exist", clone_dir)

    ui.success("macsetup has been removed")
    return result

"""
Installer — drive one item from absent to present.

Flow per item:
    dry-run?            → simulated success, nothing touched
    depends_on set?     → prerequisite gate (one hop, evaluated lazily)
                          ├─ dependency absent  → offer install, abort if declined/failed
                          └─ dependency unauthenticated → manual sign-in, verify
                          an unresolved dependency fails later dependents unasked
    run the item action → InstallResult

Every failure is caught at the item boundary and returned as a failed
InstallResult; nothing escapes to abort a batch.
"""

from __future__ import annotations

import logging

from macsetup.core.context import ProvisionContext
from macsetup.core.errors import InstallError, PrerequisiteMissing
from macsetup.core.models.action import InstallResult
from macsetup.core.models.item import Catalog, Item
from macsetup.core.services.detection import Detector

logger = logging.getLogger(__name__)

_GATE_MESSAGES = {
    "declined": "{dep} is required for {item}.",
    "failed": "Failed to install {dep}. Cannot proceed with {item}.",
    "signed_out": "{dep} is not signed in. Cannot proceed with {item}.",
}


class Installer:
    """Runs install actions with prerequisite gating and failure isolation."""

    def __init__(self, catalog: Catalog, detector: Detector, ctx: ProvisionContext):
        self._catalog = catalog
        self._detector = detector
        self._ctx = ctx
        self._unresolved: dict[str, str] = {}   # dependency key -> failure kind

    def install(self, item: Item) -> InstallResult:
        """Install ``item``. Never raises (except KeyboardInterrupt)."""
        ui = self._ctx.ui

        if self._ctx.dry_run:
            ui.success(f"[DRY RUN] {item.name} would be installed successfully")
            return InstallResult.success(
                item.key, item.name, f"[dry-run] would install {item.name}", simulated=True
            )

        try:
            self._require_prerequisite(item)
        except PrerequisiteMissing as e:
            logger.info("Install of %s aborted: %s", item.key, e)
            ui.failure(f"Failed to install {item.name}", str(e))
            return InstallResult.failure(
                item.key, item.name, str(e), metadata={"dependency": e.dependency}
            )

        return self._run_action(item)

    def ensure_authenticated(self, dependency: Item) -> bool:
        """Make sure ``dependency``'s auth signal holds, asking the user if not.

        Shows the item's sign-in steps, waits for confirmation, then
        re-checks. Returns False if the user declines or the check
        still fails.
        """
        if self._detector.authenticated(dependency):
            return True

        ui = self._ctx.ui
        ui.warning(f"{dependency.name} is installed but not signed in.")
        if dependency.auth_instructions:
            ui.instructions(f"Sign in to use {dependency.name}", dependency.auth_instructions)

        if not self._ctx.prompts.confirm("Have you signed in?", default=False):
            return False

        if self._detector.authenticated(dependency):
            ui.success(f"{dependency.name} is signed in")
            return True

        ui.failure(f"{dependency.name} still reports no signed-in account")
        return False

    # ── Internals ───────────────────────────────────────────────

    def _require_prerequisite(self, item: Item) -> None:
        """Resolve ``item.depends_on`` before the action may run.

        A dependency that could not be made usable is remembered, so
        later dependents fail without asking the same question again.

        Raises:
            PrerequisiteMissing: If the dependency can't be made usable.
        """
        if item.depends_on is None:
            return

        dep = self._catalog[item.depends_on]

        outcome = self._unresolved.get(dep.key)
        if outcome is None:
            outcome = self._resolve(dep, item)
        else:
            logger.info("%s already unresolved in this run (%s)", dep.key, outcome)

        if outcome is not None:
            self._unresolved[dep.key] = outcome
            raise PrerequisiteMissing(
                dep.key, _GATE_MESSAGES[outcome].format(dep=dep.name, item=item.name)
            )

    def _resolve(self, dep: Item, item: Item) -> str | None:
        """Install and sign in ``dep`` if needed. Returns a failure kind or None."""
        if not self._detector.detect(dep):
            self._ctx.ui.warning(f"{dep.name} is required to install {item.name}.")
            if not self._ctx.prompts.confirm(f"Would you like to install {dep.name}?", default=True):
                return "declined"

            # one hop only: the dependency's own depends_on is not followed
            if not self._run_action(dep).succeeded:
                return "failed"

        if not self.ensure_authenticated(dep):
            return "signed_out"
        return None

    def _run_action(self, item: Item) -> InstallResult:
        ui = self._ctx.ui
        ui.info(f"Installing {item.name}...")
        logger.info("Installing %s", item.key)

        try:
            item.install(self._ctx)
        except InstallError as e:
            logger.info("Install of %s failed: %s", item.key, e)
            ui.failure(f"Failed to install {item.name}", str(e))
            return InstallResult.failure(item.key, item.name, str(e))
        except Exception as e:
            logger.debug("Install of %s raised", item.key, exc_info=True)
            ui.failure(f"Failed to install {item.name}", str(e))
            return InstallResult.failure(item.key, item.name, f"Unexpected error: {e}")

        ui.success(f"{item.name} installed successfully")
        if item.notes:
            ui.warning(f"NOTE: {item.notes}")
        return InstallResult.success(item.key, item.name, f"Installed {item.name}")

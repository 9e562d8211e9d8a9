"""
Session use case — the interactive provisioning run.

Phases, strictly sequential:

    SSH_CHECK          credential item absent? offer the manual transfer   (skipped in dry-run)
    BOOTSTRAP          package manager absent? install it or stop cleanly
    STATUS_SCAN        detect every item once
    SELECTION          multi-select over items not yet present
    STORE_GATE         store installed but signed out? sign in or drop     (skipped in dry-run)
    INSTALL_LOOP       re-detect, then install each selected item
    SUMMARY            tally ok / skipped / failed

Item failures never stop the loop and never change the exit code.
Only BootstrapDeclined ends a session early.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from macsetup.core.context import ProvisionContext
from macsetup.core.data.catalog import CREDENTIALS_KEY, PACKAGE_MANAGER_KEY
from macsetup.core.errors import BootstrapDeclined
from macsetup.core.models.action import InstallResult
from macsetup.core.models.item import Catalog, Item
from macsetup.core.services.detection import Detector
from macsetup.core.services.installer import Installer
from macsetup.ui.cli.prompts import Choice

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    SSH_CHECK = "ssh_check"
    BOOTSTRAP = "bootstrap"
    STATUS_SCAN = "status_scan"
    SELECTION = "selection"
    STORE_GATE = "store_gate"
    INSTALL_LOOP = "install_loop"
    SUMMARY = "summary"


@dataclass
class SessionResult:
    """Everything a session did."""

    dry_run: bool = False
    phases: list[Phase] = field(default_factory=list)
    snapshot: dict[str, bool] = field(default_factory=dict)
    offered: list[str] = field(default_factory=list)      # enabled choices
    selected: list[str] = field(default_factory=list)     # after the store gate
    dropped: list[str] = field(default_factory=list)      # removed by the store gate
    bootstrap: list[InstallResult] = field(default_factory=list)
    results: list[InstallResult] = field(default_factory=list)

    @property
    def successful(self) -> list[str]:
        return [r.key for r in self.results if r.status == "ok"]

    @property
    def skipped(self) -> list[str]:
        return [r.key for r in self.results if r.status == "skipped"]

    @property
    def failed(self) -> list[str]:
        return [r.key for r in self.results if r.status == "failed"]

    def to_dict(self) -> dict:
        return {
            "dry_run": self.dry_run,
            "phases": [p.value for p in self.phases],
            "offered": self.offered,
            "selected": self.selected,
            "dropped": self.dropped,
            "successful": self.successful,
            "skipped": self.skipped,
            "failed": self.failed,
            "results": [r.model_dump(mode="json") for r in self.results],
        }


class Session:
    """Runs one interactive provisioning session over a catalog."""

    def __init__(
        self,
        catalog: Catalog,
        ctx: ProvisionContext,
        detector: Detector | None = None,
        installer: Installer | None = None,
        package_manager_key: str = PACKAGE_MANAGER_KEY,
        credentials_key: str = CREDENTIALS_KEY,
    ):
        self._catalog = catalog
        self._ctx = ctx
        self._detector = detector or Detector(ctx)
        self._installer = installer or Installer(catalog, self._detector, ctx)
        self._pm_key = package_manager_key
        self._credentials_key = credentials_key

    def run(self) -> SessionResult:
        """Run every phase in order.

        Raises:
            BootstrapDeclined: The package manager is missing and won't be installed.
        """
        ctx = self._ctx
        result = SessionResult(dry_run=ctx.dry_run)

        ctx.ui.banner("Mac Setup CLI", "[DRY RUN MODE]" if ctx.dry_run else None)
        if ctx.dry_run:
            ctx.ui.warning("Running in dry-run mode - no actual installations will be performed")

        if not ctx.dry_run:
            result.phases.append(Phase.SSH_CHECK)
            self._ssh_check(result)

        result.phases.append(Phase.BOOTSTRAP)
        self._bootstrap(result)

        result.phases.append(Phase.STATUS_SCAN)
        result.snapshot = self._detector.scan(self._catalog)

        result.phases.append(Phase.SELECTION)
        selected = self._select(result)

        if not ctx.dry_run:
            result.phases.append(Phase.STORE_GATE)
            selected = self._store_gate(selected, result)
        result.selected = selected

        result.phases.append(Phase.INSTALL_LOOP)
        for key in selected:
            result.results.append(self._install_one(self._catalog[key]))

        result.phases.append(Phase.SUMMARY)
        self._summary(result)
        return result

    # ── Phases ──────────────────────────────────────────────────

    def _ssh_check(self, result: SessionResult) -> None:
        item = self._catalog.get(self._credentials_key)
        if item is None or self._check(item):
            return

        ui = self._ctx.ui
        ui.warning("No SSH keys found. Setting up SSH keys is recommended before proceeding.")
        if self._ctx.prompts.confirm("Would you like to set up SSH keys now?", default=True):
            result.bootstrap.append(self._installer.install(item))
        else:
            ui.warning("Proceeding without SSH keys. You can set them up later.")

    def _bootstrap(self, result: SessionResult) -> None:
        pm = self._catalog.get(self._pm_key)
        if pm is None or self._check(pm):
            return

        prefix = "[DRY RUN] " if self._ctx.dry_run else ""
        question = f"{prefix}{pm.name} is required but not installed. Would you like to install it?"
        if not self._ctx.prompts.confirm(question, default=True):
            self._ctx.ui.warning(f"{prefix}{pm.name} is required to continue. Exiting...")
            raise BootstrapDeclined(f"{pm.name} is required to continue")

        outcome = self._installer.install(pm)
        result.bootstrap.append(outcome)
        if not outcome.succeeded:
            raise BootstrapDeclined(f"{pm.name} could not be installed: {outcome.message}")

    def _select(self, result: SessionResult) -> list[str]:
        available: list[Choice] = []
        installed: list[Choice] = []
        for item in self._catalog:
            if item.key == self._pm_key:
                continue
            if result.snapshot.get(item.key):
                installed.append(Choice(item.key, item.name, disabled="Already installed"))
            else:
                available.append(Choice(item.key, item.name))

        available.sort(key=lambda c: c.name.lower())
        installed.sort(key=lambda c: c.name.lower())
        result.offered = [c.value for c in available]

        prefix = "[DRY RUN] " if self._ctx.dry_run else ""
        picked = self._ctx.prompts.select(
            f"{prefix}Select applications to install:", [*available, *installed]
        )
        # the provider may only return enabled choices, in catalog terms
        return [key for key in picked if key in result.offered]

    def _store_gate(self, selected: list[str], result: SessionResult) -> list[str]:
        """Ask once per signed-out dependency; drop its dependents if unresolved."""
        dropped: list[str] = []
        for dep in self._catalog:
            if dep.auth is None:
                continue
            keys = [i.key for i in self._catalog.dependents_of(dep.key) if i.key in selected]
            if not keys:
                continue
            if not self._detector.detect(dep):
                # absent, not just signed out: the installer offers it on the first dependent
                continue
            if self._installer.ensure_authenticated(dep):
                continue
            names = ", ".join(self._catalog[k].name for k in keys)
            self._ctx.ui.warning(f"Skipping {names}: {dep.name} is not signed in.")
            logger.info("Store gate dropped %s", keys)
            dropped.extend(keys)

        result.dropped = dropped
        return [k for k in selected if k not in dropped]

    def _install_one(self, item: Item) -> InstallResult:
        if self._check(item):
            self._ctx.ui.success(f"{item.name} is already installed")
            return InstallResult.skip(item.key, item.name, "already installed")
        return self._installer.install(item)

    def _summary(self, result: SessionResult) -> None:
        lines: list[tuple[str, str]] = []
        if result.dry_run:
            lines.append(("[DRY RUN MODE]", "yellow"))
        verb = "Would be installed" if result.dry_run else "Installed"
        lines.append((f"✓ {verb}: {len(result.successful)} apps", "green"))
        lines.append((f"⚠ Already installed: {len(result.skipped)} apps", "yellow"))
        lines.append((f"✗ Failed: {len(result.failed)} apps", "red"))
        if result.dropped:
            lines.append((f"⊘ Skipped (not signed in): {len(result.dropped)} apps", "yellow"))
        self._ctx.ui.summary("Installation Summary:", lines)

    # ── Helpers ─────────────────────────────────────────────────

    def _check(self, item: Item) -> bool:
        with self._ctx.ui.status(f"Checking if {item.name} is installed..."):
            return self._detector.detect(item)


def run_session(catalog: Catalog, ctx: ProvisionContext) -> SessionResult:
    """Convenience wrapper used by the CLI."""
    return Session(catalog, ctx).run()

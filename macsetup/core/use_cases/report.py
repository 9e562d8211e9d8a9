"""
Report use case — read-only scan of the whole catalog.

Applications are grouped by category and tallied as installed / not
installed; configuration items are tallied separately as configured /
needs configuration. Never calls the Installer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from macsetup.core.context import ProvisionContext
from macsetup.core.models.item import Catalog, Item
from macsetup.core.services.detection import Detector

logger = logging.getLogger(__name__)


@dataclass
class ItemStatus:
    key: str
    name: str
    category: str
    present: bool

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "category": self.category,
            "present": self.present,
        }


@dataclass
class ReportResult:
    """Snapshot of every item, split into applications and configuration."""

    applications: dict[str, list[ItemStatus]] = field(default_factory=dict)
    configurations: list[ItemStatus] = field(default_factory=list)

    @property
    def installed(self) -> list[str]:
        return [s.name for group in self.applications.values() for s in group if s.present]

    @property
    def not_installed(self) -> list[str]:
        return [s.name for group in self.applications.values() for s in group if not s.present]

    @property
    def configured(self) -> list[str]:
        return [s.name for s in self.configurations if s.present]

    @property
    def needs_configuration(self) -> list[str]:
        return [s.name for s in self.configurations if not s.present]

    def to_dict(self) -> dict:
        return {
            "applications": {
                category: [s.to_dict() for s in items]
                for category, items in self.applications.items()
            },
            "configurations": [s.to_dict() for s in self.configurations],
            "summary": {
                "installed": len(self.installed),
                "not_installed": len(self.not_installed),
                "configured": len(self.configured),
                "needs_configuration": len(self.needs_configuration),
            },
        }


def generate_report(
    catalog: Catalog,
    ctx: ProvisionContext,
    detector: Detector | None = None,
    render: bool = True,
) -> ReportResult:
    """Detect every item and (optionally) print the report.

    Args:
        catalog: Items to scan.
        ctx: Provision context (its prompts are never used).
        detector: Optional pre-built detector.
        render: Print banner, per-item lines and the summary panel.
    """
    detector = detector or Detector(ctx)
    ui = ctx.ui
    result = ReportResult()

    if render:
        ui.banner("Mac Setup Installation Report")

    for category, items in catalog.by_category().items():
        apps = [i for i in items if not i.is_configuration]
        if not apps:
            continue
        if render:
            ui.heading(f"{category.label}:")
        result.applications[category.label] = [
            _check(detector, ctx, item, render, configuration=False) for item in apps
        ]

    configs = catalog.configurations()
    if configs:
        if render:
            ui.heading("System Configuration:")
        result.configurations = [
            _check(detector, ctx, item, render, configuration=True) for item in configs
        ]

    logger.info(
        "Report: %d/%d apps installed, %d/%d items configured",
        len(result.installed),
        len(result.installed) + len(result.not_installed),
        len(result.configured),
        len(result.configurations),
    )

    if render:
        ui.summary("Summary:", [
            ("Applications:", "bold"),
            (f"✓ Installed: {len(result.installed)} apps", "green"),
            (f"✗ Not Installed: {len(result.not_installed)} apps", "red"),
            ("", ""),
            ("System Configuration:", "bold"),
            (f"✓ Configured: {len(result.configured)} items", "green"),
            (f"⚠ Needs Configuration: {len(result.needs_configuration)} items", "yellow"),
        ])

    return result


def _check(
    detector: Detector,
    ctx: ProvisionContext,
    item: Item,
    render: bool,
    configuration: bool,
) -> ItemStatus:
    if render:
        with ctx.ui.status(f"Checking {item.name}..."):
            present = detector.detect(item)
        if present:
            ctx.ui.success(
                f"{item.name} is properly configured" if configuration else f"{item.name} is installed"
            )
        elif configuration:
            ctx.ui.warning(f"{item.name} needs configuration")
        else:
            ctx.ui.failure(f"{item.name} is not installed")
    else:
        present = detector.detect(item)

    return ItemStatus(
        key=item.key,
        name=item.name,
        category=item.category.label,
        present=present,
    )

"""
Item and Catalog models — what can be provisioned.

An Item pairs a side-effect-free detection signal with an install
action. The Catalog is the immutable, ordered registry of all items,
built once per process and passed explicitly to every consumer.

Signals compose:

    any_of(brew_cask("docker"), app_bundle("Docker"))      # OR
    all_of(git_config("user.name", ...), ...)              # AND

A signal whose check raises votes False (ProbeFailure). A missing tool
and a missing item both read as absent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from macsetup.core.errors import CatalogError

if TYPE_CHECKING:
    from macsetup.core.context import ProvisionContext

logger = logging.getLogger(__name__)

InstallAction = Callable[["ProvisionContext"], None]


class Category(StrEnum):
    """Display grouping for catalog items."""

    DEVELOPMENT = "Development Tools"
    PRODUCTIVITY = "Productivity Apps"
    UTILITIES = "Utilities"
    CONFIGURATION = "System Configuration"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Signal:
    """A named presence check.

    Calling a signal never raises: any exception from ``check`` is
    logged at DEBUG and counted as a False vote.
    """

    name: str
    check: Callable[[ProvisionContext], bool]

    def __call__(self, ctx: ProvisionContext) -> bool:
        try:
            verdict = bool(self.check(ctx))
        except Exception as e:
            logger.debug("Probe %s failed: %s", self.name, e)
            return False
        logger.debug("Probe %s → %s", self.name, verdict)
        return verdict


def any_of(*signals: Signal, name: str | None = None) -> Signal:
    """Present if any signal holds."""
    if not signals:
        raise ValueError("any_of() needs at least one signal")
    label = name or "any(" + ", ".join(s.name for s in signals) + ")"
    return Signal(label, lambda ctx: any(s(ctx) for s in signals))


def all_of(*signals: Signal, name: str | None = None) -> Signal:
    """Present only if every signal holds."""
    if not signals:
        raise ValueError("all_of() needs at least one signal")
    label = name or "all(" + ", ".join(s.name for s in signals) + ")"
    return Signal(label, lambda ctx: all(s(ctx) for s in signals))


@dataclass(frozen=True)
class Item:
    """One provisionable application or configuration state."""

    key: str
    name: str
    category: Category
    detect: Signal
    install: InstallAction
    depends_on: str | None = None   # key of a prerequisite item
    auth: Signal | None = None      # must also hold before dependents install
    auth_instructions: tuple[str, ...] = ()
    notes: str = ""                 # shown after a successful install

    @property
    def is_configuration(self) -> bool:
        return self.category is Category.CONFIGURATION


class Catalog:
    """Immutable, ordered registry of items keyed by ``Item.key``."""

    def __init__(self, items: Iterable[Item]):
        ordered: dict[str, Item] = {}
        for item in items:
            if item.key in ordered:
                raise CatalogError(f"Duplicate catalog key: {item.key!r}")
            ordered[item.key] = item

        for item in ordered.values():
            dep = item.depends_on
            if dep is None:
                continue
            if dep == item.key:
                raise CatalogError(f"Item {item.key!r} cannot depend on itself")
            if dep not in ordered:
                raise CatalogError(
                    f"Item {item.key!r} depends on unknown item {dep!r}"
                )

        self._items = MappingProxyType(ordered)

    def __getitem__(self, key: str) -> Item:
        return self._items[key]

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def get(self, key: str) -> Item | None:
        return self._items.get(key)

    def keys(self) -> list[str]:
        return list(self._items.keys())

    def configurations(self) -> list[Item]:
        return [i for i in self if i.is_configuration]

    def by_category(self) -> dict[Category, list[Item]]:
        """Group items by category, in order of first appearance."""
        groups: dict[Category, list[Item]] = {}
        for item in self:
            groups.setdefault(item.category, []).append(item)
        return groups

    def dependents_of(self, key: str) -> list[Item]:
        return [i for i in self if i.depends_on == key]

    def __repr__(self) -> str:
        return f"<Catalog items={len(self)}>"

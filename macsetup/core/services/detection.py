"""
Detector — present/absent verdicts for catalog items.

Never raises. Individual signals already fold their own failures into
False; the extra guard here covers anything a malformed item could do.
Verdicts are recomputed on every call and never cached across calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from macsetup.core.context import ProvisionContext
from macsetup.core.models.item import Item

logger = logging.getLogger(__name__)


class Detector:
    """Evaluates item signals against one ProvisionContext."""

    def __init__(self, ctx: ProvisionContext):
        self._ctx = ctx

    def detect(self, item: Item) -> bool:
        """Whether ``item`` is currently present / configured."""
        try:
            present = item.detect(self._ctx)
        except Exception as e:
            logger.debug("Detection of %s failed: %s", item.key, e)
            present = False
        logger.debug("%s: %s", item.key, "present" if present else "absent")
        return present

    def authenticated(self, item: Item) -> bool:
        """Whether ``item``'s auth signal holds. True when it has none."""
        if item.auth is None:
            return True
        try:
            return item.auth(self._ctx)
        except Exception as e:
            logger.debug("Auth check of %s failed: %s", item.key, e)
            return False

    def scan(self, items: Iterable[Item], announce: bool = True) -> dict[str, bool]:
        """Detect every item once, in order.

        Args:
            items: Items to check (usually the whole catalog).
            announce: Show a spinner per item.
        """
        snapshot: dict[str, bool] = {}
        for item in items:
            if announce:
                with self._ctx.ui.status(f"Checking if {item.name} is installed..."):
                    snapshot[item.key] = self.detect(item)
            else:
                snapshot[item.key] = self.detect(item)
        logger.info(
            "Scanned %d items: %d present",
            len(snapshot),
            sum(1 for v in snapshot.values() if v),
        )
        return snapshot

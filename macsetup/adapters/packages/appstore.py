"""
Mac App Store adapter — wraps the ``mas`` CLI.

``mas list`` prints one app per line, id first:

    497799835  Xcode  (15.4)
    803453959  Slack  (4.38.125)
"""

from __future__ import annotations

import logging

from macsetup.adapters.base import ToolAdapter
from macsetup.core.models.action import CommandResult

logger = logging.getLogger(__name__)


class AppStore(ToolAdapter):
    """Wraps ``mas`` for store queries and installs."""

    @property
    def name(self) -> str:
        return "mas"

    @property
    def binary(self) -> str:
        return "mas"

    def installed_ids(self) -> set[str]:
        """App ids reported by ``mas list`` (empty if mas is unusable)."""
        result = self._runner.run([self.binary, "list"])
        if not result.ok:
            return set()
        ids: set[str] = set()
        for line in result.stdout.splitlines():
            parts = line.split()
            if parts:
                ids.add(parts[0])
        return ids

    def has_app(self, app_id: str) -> bool:
        return app_id in self.installed_ids()

    def signed_in(self) -> bool:
        return self._runner.succeeds([self.binary, "account"])

    def install(self, app_id: str) -> CommandResult:
        logger.info("Installing from the App Store: %s", app_id)
        return self._runner.check([self.binary, "install", app_id], capture=False)

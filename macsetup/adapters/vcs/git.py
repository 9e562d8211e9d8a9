"""
Git adapter — global configuration keys.
"""

from __future__ import annotations

from macsetup.adapters.base import ToolAdapter
from macsetup.core.models.action import CommandResult


class GitConfig(ToolAdapter):
    """Reads and writes ``git config --global`` values."""

    @property
    def name(self) -> str:
        return "git"

    @property
    def binary(self) -> str:
        return "git"

    def get(self, key: str) -> str | None:
        """Current global value, or None if unset or git is missing."""
        result = self._runner.run([self.binary, "config", "--global", key])
        if not result.ok:
            return None
        return result.stdout.strip()

    def set(self, key: str, value: str) -> CommandResult:
        return self._runner.check([self.binary, "config", "--global", key, value])

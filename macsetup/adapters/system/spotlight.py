"""
Spotlight adapter — bundle identifier lookups through ``mdfind``.
"""

from __future__ import annotations

from macsetup.adapters.base import ToolAdapter


class Spotlight(ToolAdapter):
    """Queries the system metadata index."""

    @property
    def name(self) -> str:
        return "spotlight"

    @property
    def binary(self) -> str:
        return "mdfind"

    def has_bundle(self, bundle_id: str) -> bool:
        """True if any indexed application carries ``bundle_id``."""
        result = self._runner.run([self.binary, f'kMDItemCFBundleIdentifier = "{bundle_id}"'])
        return result.ok and bool(result.stdout.strip())

"""
Homebrew adapter — formula/cask queries and installs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from macsetup.adapters.base import ToolAdapter
from macsetup.core.models.action import CommandResult

logger = logging.getLogger(__name__)

INSTALL_SCRIPT_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"


class Homebrew(ToolAdapter):
    """Wraps the ``brew`` CLI."""

    @property
    def name(self) -> str:
        return "homebrew"

    @property
    def binary(self) -> str:
        return "brew"

    # ── Queries ─────────────────────────────────────────────────

    def version_ok(self) -> bool:
        return self._runner.succeeds([self.binary, "--version"])

    def has_formula(self, formula: str) -> bool:
        return self._runner.succeeds([self.binary, "list", formula])

    def has_cask(self, cask: str) -> bool:
        return self._runner.succeeds([self.binary, "list", "--cask", cask])

    # ── Actions ─────────────────────────────────────────────────

    def install(self, *names: str, cask: bool = False) -> CommandResult:
        argv = [self.binary, "install"]
        if cask:
            argv.append("--cask")
        argv.extend(names)
        logger.info("Installing via Homebrew: %s", " ".join(names))
        return self._runner.check(argv, capture=False)

    def install_self(self) -> CommandResult:
        """Run the official install script (interactive, may ask for sudo)."""
        script = f'/bin/bash -c "$(curl -fsSL {INSTALL_SCRIPT_URL})"'
        return self._runner.check(["/bin/bash", "-c", script], capture=False)

    @staticmethod
    def shellenv_line(prefix: Path) -> str:
        return f'eval "$({prefix}/bin/brew shellenv)"'

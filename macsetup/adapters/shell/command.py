"""
Shell command runner — the single place where subprocesses are spawned.

Every probe and install action goes through ``CommandRunner``. It never
raises on command failure: a non-zero exit, a missing binary, or an
OS error all come back as a ``CommandResult`` with ``ok == False``.
``check()`` is the raising variant used inside install actions.

No timeouts: an interactive tool may legitimately wait on sudo or an
installer script for as long as the operator takes.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from pathlib import Path

from macsetup.core.errors import InstallError
from macsetup.core.models.action import CommandResult

logger = logging.getLogger(__name__)

MISSING_BINARY = 127


class CommandRunner:
    """Run external commands and capture their output."""

    def __init__(self, env: dict[str, str] | None = None):
        self._env = dict(env if env is not None else os.environ)

    @property
    def env(self) -> dict[str, str]:
        return dict(self._env)

    def prepend_path(self, directory: Path | str) -> None:
        """Make ``directory`` the first PATH entry for later commands."""
        entry = str(directory)
        parts = [p for p in self._env.get("PATH", "").split(os.pathsep) if p and p != entry]
        self._env["PATH"] = os.pathsep.join([entry, *parts])
        logger.debug("PATH now starts with %s", entry)

    def run(self, argv: list[str], *, capture: bool = True) -> CommandResult:
        """Run ``argv`` and return its result.

        Args:
            argv: Command and arguments. Never passed through a shell.
            capture: Capture stdout/stderr. Pass False for commands that
                need the terminal (sudo, installer scripts).
        """
        logger.debug("Executing: %s", " ".join(argv))
        start = time.monotonic()
        try:
            proc = subprocess.run(
                argv,
                capture_output=capture,
                text=True,
                env=self._env,
            )
        except FileNotFoundError:
            return CommandResult(
                argv=argv,
                returncode=MISSING_BINARY,
                stderr=f"{argv[0]}: command not found",
            )
        except OSError as e:
            return CommandResult(argv=argv, returncode=1, stderr=f"{argv[0]}: {e}")

        elapsed_ms = int((time.monotonic() - start) * 1000)
        result = CommandResult(
            argv=argv,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            duration_ms=elapsed_ms,
        )
        logger.debug(
            "Finished in %dms (exit %d): %s", result.duration_ms, result.returncode, " ".join(argv)
        )
        return result

    def succeeds(self, argv: list[str]) -> bool:
        """True if ``argv`` exits 0."""
        return self.run(argv).ok

    def check(self, argv: list[str], *, capture: bool = True) -> CommandResult:
        """Run ``argv`` and raise InstallError unless it exits 0."""
        result = self.run(argv, capture=capture)
        if not result.ok:
            raise InstallError(result.error)
        return result

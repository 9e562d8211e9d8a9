"""
Error taxonomy for provisioning.

Expected failures are converted into results as close to their origin
as possible:

    ProbeFailure         → folded into a False signal, never raised out
    PrerequisiteMissing  → raised inside the install gate
    InstallError         → raised by install actions and the runner
    InstallAborted       → unresolved prerequisite or failed verification
    BootstrapDeclined    → ends the session cleanly (exit 0)

Anything else reaching the CLI is an unhandled error (exit 1).
"""

from __future__ import annotations


class MacSetupError(Exception):
    """Base class for all macsetup errors."""


class ProbeFailure(MacSetupError):
    """A detection signal could not be obtained."""


class InstallError(MacSetupError):
    """An install action or one of its commands failed."""


class InstallAborted(InstallError):
    """An install was stopped before or after its action ran."""


class PrerequisiteMissing(InstallAborted):
    """A required companion item is absent or not signed in."""

    def __init__(self, dependency: str, message: str):
        super().__init__(message)
        self.dependency = dependency


class BootstrapDeclined(MacSetupError):
    """The package manager is unavailable and the session cannot continue."""


class CatalogError(MacSetupError):
    """Raised when the item catalog is structurally invalid."""

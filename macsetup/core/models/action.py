"""
Command and install results — the execution contract.

Adapters return CommandResults, the installer returns InstallResults.
Neither side communicates failure by raising across its boundary:
failures are captured in the result.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Outcome of one external command.

    A missing binary is reported as ``returncode=127`` rather than
    an exception, so probes can treat it as plain absence.
    """

    argv: list[str]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error(self) -> str:
        """Best-effort human readable failure description."""
        if self.ok:
            return ""
        return self.stderr.strip() or f"{self.argv[0]} exited with code {self.returncode}"


class InstallResult(BaseModel):
    """Result of installing one catalog item."""

    key: str
    name: str
    status: Literal["ok", "skipped", "failed"] = "ok"
    message: str = ""
    simulated: bool = False

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, key: str, name: str, message: str = "", **kwargs: Any) -> InstallResult:
        """Create a success result."""
        return cls(key=key, name=name, status="ok", message=message, **kwargs)

    @classmethod
    def failure(cls, key: str, name: str, message: str, **kwargs: Any) -> InstallResult:
        """Create a failure result."""
        return cls(key=key, name=name, status="failed", message=message, **kwargs)

    @classmethod
    def skip(cls, key: str, name: str, reason: str = "", **kwargs: Any) -> InstallResult:
        """Create a skip result."""
        return cls(key=key, name=name, status="skipped", message=reason, **kwargs)

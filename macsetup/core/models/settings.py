"""
Settings model — machine-specific values loaded from config.yml.

Everything the catalog needs to know about this particular machine
and user lives here: the expected git identity, where things are
installed, and how the tool removes itself. All fields have defaults,
so an absent config file is valid.
"""

from __future__ import annotations

import getpass
import os
from pathlib import Path

from pydantic import BaseModel, Field


def _current_user() -> str:
    return os.environ.get("USER") or getpass.getuser()


class GitIdentity(BaseModel):
    """Expected global git configuration.

    Empty ``user_name`` / ``user_email`` mean "any non-empty value";
    the installer will ask for them.
    """

    user_name: str = ""
    user_email: str = ""
    color_ui: str = "auto"


class PathSettings(BaseModel):
    """Filesystem locations. ``~`` expands against ``home``."""

    home: Path = Field(default_factory=Path.home)
    applications_dir: Path = Path("/Applications")
    homebrew_prefix: Path = Path("/opt/homebrew")
    node_modules_dir: Path = Path("/usr/local/lib/node_modules")

    zprofile: str = "~/.zprofile"
    zshrc: str = "~/.zshrc"
    ssh_dir: str = "~/.ssh"
    nvm_dir: str = "~/.nvm"
    oh_my_zsh_dir: str = "~/.oh-my-zsh"

    def expand(self, value: str | Path) -> Path:
        """Resolve a possibly ``~``-prefixed path against ``home``."""
        text = str(value)
        if text == "~":
            return self.home
        if text.startswith("~/"):
            return self.home / text[2:]
        return Path(text)


class UninstallSettings(BaseModel):
    """How ``--uninstall`` removes the tool from this machine."""

    clone_dir: str = "~/.macsetup"
    unregister_command: list[str] = Field(
        default_factory=lambda: ["python3", "-m", "pip", "uninstall", "-y", "macsetup"]
    )


class Settings(BaseModel):
    """Root settings document."""

    user: str = Field(default_factory=_current_user)
    git: GitIdentity = Field(default_factory=GitIdentity)
    paths: PathSettings = Field(default_factory=PathSettings)
    uninstall: UninstallSettings = Field(default_factory=UninstallSettings)

    def path(self, value: str | Path) -> Path:
        """Shorthand for ``self.paths.expand(value)``."""
        return self.paths.expand(value)

"""Adapters — bindings for the external tools macsetup drives.

Public re-exports for convenient access.
"""

from macsetup.adapters.base import ToolAdapter
from macsetup.adapters.mock import ScriptedRunner
from macsetup.adapters.packages.appstore import AppStore
from macsetup.adapters.packages.homebrew import Homebrew
from macsetup.adapters.shell.command import CommandRunner
from macsetup.adapters.system.spotlight import Spotlight
from macsetup.adapters.vcs.git import GitConfig

__all__ = [
    "AppStore",
    "CommandRunner",
    "GitConfig",
    "Homebrew",
    "ScriptedRunner",
    "Spotlight",
    "ToolAdapter",
]

"""
Provision context — everything probes and install actions can touch.

Built once by the CLI and passed explicitly to the Detector, Installer,
session and reporter. There is no module-level state: tests build their
own context around a ScriptedRunner, a scripted prompt provider and a
recording console.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property

from macsetup.adapters.packages.appstore import AppStore
from macsetup.adapters.packages.homebrew import Homebrew
from macsetup.adapters.shell.command import CommandRunner
from macsetup.adapters.system.spotlight import Spotlight
from macsetup.adapters.vcs.git import GitConfig
from macsetup.core.models.settings import Settings
from macsetup.ui.cli.console import Terminal
from macsetup.ui.cli.prompts import PromptProvider


@dataclass
class ProvisionContext:
    """Collaborators shared by one run."""

    settings: Settings
    runner: CommandRunner
    prompts: PromptProvider
    ui: Terminal = field(default_factory=Terminal)
    dry_run: bool = False

    @cached_property
    def brew(self) -> Homebrew:
        return Homebrew(self.runner)

    @cached_property
    def mas(self) -> AppStore:
        return AppStore(self.runner)

    @cached_property
    def spotlight(self) -> Spotlight:
        return Spotlight(self.runner)

    @cached_property
    def git(self) -> GitConfig:
        return GitConfig(self.runner)

"""
Tool adapter base — the contract between probes/actions and external CLIs.

Catalog probes and install actions never build command lines for
Homebrew, mas, mdfind or git themselves; they ask the matching adapter.
Adapters share one CommandRunner so PATH changes (e.g. after installing
Homebrew) are seen by every later call.

To add an adapter:
    1. Subclass ToolAdapter
    2. Set ``name`` and ``binary``
    3. Expose query methods that return plain values (never raise)
       and action methods that raise InstallError on failure
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from macsetup.adapters.shell.command import CommandRunner


class ToolAdapter(ABC):
    """Abstract base class for external tool wrappers."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'homebrew', 'mas')."""

    @property
    @abstractmethod
    def binary(self) -> str:
        """Executable this adapter drives."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"

"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import io
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from rich.console import Console

from macsetup.adapters.mock import ScriptedRunner
from macsetup.core.context import ProvisionContext
from macsetup.core.models.settings import PathSettings, Settings, UninstallSettings
from macsetup.ui.cli.console import Terminal
from macsetup.ui.cli.prompts import Choice, PromptProvider

Answer = bool | Callable[[str], bool]


class ScriptedPrompts(PromptProvider):
    """Prompt provider that answers from a script.

    ``confirms`` is consumed in order; an entry may be a bool or a
    callable taking the question (handy for simulating "the user went
    and signed in"). Running out of answers fails the test.
    """

    def __init__(
        self,
        confirms: Sequence[Answer] = (),
        selection: Sequence[str] = (),
        texts: Sequence[str] = (),
    ):
        self.confirms: list[Answer] = list(confirms)
        self.selection = list(selection)
        self.texts = list(texts)
        self.asked: list[str] = []
        self.select_calls: list[list[Choice]] = []

    def confirm(self, message: str, default: bool = False) -> bool:
        self.asked.append(message)
        if not self.confirms:
            raise AssertionError(f"Unexpected confirm: {message}")
        answer = self.confirms.pop(0)
        return answer(message) if callable(answer) else answer

    def select(self, message: str, choices: Sequence[Choice]) -> list[str]:
        self.select_calls.append(list(choices))
        return list(self.selection)

    def text(self, message: str, default: str = "") -> str:
        self.asked.append(message)
        if not self.texts:
            raise AssertionError(f"Unexpected text prompt: {message}")
        return self.texts.pop(0)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, home: Path) -> Settings:
    """Settings pointing every location into tmp_path."""
    return Settings(
        user="tester",
        paths=PathSettings(
            home=home,
            applications_dir=tmp_path / "Applications",
            homebrew_prefix=tmp_path / "homebrew",
            node_modules_dir=tmp_path / "node_modules",
        ),
        uninstall=UninstallSettings(
            clone_dir="~/.macsetup",
            unregister_command=["pip", "uninstall", "-y", "macsetup"],
        ),
    )


@pytest.fixture
def runner() -> ScriptedRunner:
    return ScriptedRunner()


@pytest.fixture
def prompts() -> ScriptedPrompts:
    return ScriptedPrompts()


@pytest.fixture
def terminal() -> Terminal:
    """Terminal that records output instead of printing it."""
    return Terminal(Console(file=io.StringIO(), width=120, color_system=None))


@pytest.fixture
def output(terminal: Terminal) -> Callable[[], str]:
    """Return everything printed to the recording terminal so far."""
    return lambda: terminal.console.file.getvalue()


@pytest.fixture
def make_ctx(
    settings: Settings,
    runner: ScriptedRunner,
    prompts: ScriptedPrompts,
    terminal: Terminal,
) -> Callable[..., ProvisionContext]:
    """Factory for ProvisionContext, defaults wired to the fixtures above."""

    def factory(**overrides) -> ProvisionContext:
        values = {
            "settings": settings,
            "runner": runner,
            "prompts": prompts,
            "ui": terminal,
            "dry_run": False,
        }
        values.update(overrides)
        return ProvisionContext(**values)

    return factory


@pytest.fixture
def ctx(make_ctx) -> ProvisionContext:
    return make_ctx()

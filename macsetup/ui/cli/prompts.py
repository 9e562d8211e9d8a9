"""
Prompt providers — every question the tool asks goes through here.

The orchestration code depends only on ``PromptProvider``; the CLI
plugs in ``ClickPrompts`` and tests plug in a scripted provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

import click
from rich.table import Table

from macsetup.ui.cli.console import Terminal


@dataclass(frozen=True)
class Choice:
    """One row of a multi-select prompt."""

    value: str
    name: str
    disabled: str | None = None   # reason shown instead of a number


class PromptProvider(ABC):
    """Interactive questions: yes/no, multi-select, free text."""

    @abstractmethod
    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""

    @abstractmethod
    def select(self, message: str, choices: Sequence[Choice]) -> list[str]:
        """Let the user pick any number of enabled choices.

        Returns:
            Selected ``Choice.value``s in display order.
        """

    @abstractmethod
    def text(self, message: str, default: str = "") -> str:
        """Ask for a line of text."""


def parse_selection(raw: str, count: int) -> list[int]:
    """Parse ``"1, 3 4"`` / ``"all"`` / ``""`` into zero-based indexes.

    Raises:
        ValueError: On anything that isn't a number in ``1..count``.
    """
    raw = raw.strip().lower()
    if not raw:
        return []
    if raw == "all":
        return list(range(count))

    picked: list[int] = []
    for token in raw.replace(",", " ").split():
        if not token.isdigit():
            raise ValueError(f"Not a number: {token!r}")
        n = int(token)
        if not 1 <= n <= count:
            raise ValueError(f"Out of range: {n} (choose 1-{count})")
        if n - 1 not in picked:
            picked.append(n - 1)
    return sorted(picked)


class ClickPrompts(PromptProvider):
    """Terminal prompts built on click, rendered with rich."""

    def __init__(self, terminal: Terminal):
        self._terminal = terminal

    def confirm(self, message: str, default: bool = False) -> bool:
        return click.confirm(message, default=default)

    def text(self, message: str, default: str = "") -> str:
        return click.prompt(message, default=default or None, show_default=bool(default))

    def select(self, message: str, choices: Sequence[Choice]) -> list[str]:
        enabled = [c for c in choices if c.disabled is None]
        disabled = [c for c in choices if c.disabled is not None]

        table = Table(title=message, box=None, show_header=False, title_justify="left")
        table.add_column(justify="right", style="cyan")
        table.add_column()
        table.add_row("", "[bold]--- Available ---[/bold]")
        for n, choice in enumerate(enabled, start=1):
            table.add_row(str(n), choice.name)
        if disabled:
            table.add_row("", "")
            table.add_row("", "[bold]--- Already Installed ---[/bold]")
            for choice in disabled:
                table.add_row("", f"[dim]{choice.name}[/dim] [green]({choice.disabled})[/green]")
        self._terminal.console.print(table)

        if not enabled:
            return []

        while True:
            raw = click.prompt(
                "Numbers to install (e.g. 1,3 or 'all'; blank for none)",
                default="",
                show_default=False,
            )
            try:
                indexes = parse_selection(raw, len(enabled))
            except ValueError as e:
                click.secho(f"  {e}", fg="red")
                continue
            return [enabled[i].value for i in indexes]

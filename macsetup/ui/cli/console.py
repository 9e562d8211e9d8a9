"""
Terminal output — banners, spinners, status lines and summary panels.

A thin rich wrapper. Core services receive a Terminal through the
ProvisionContext and never print directly; tests pass a Console that
records to a buffer.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

# A step is either plain text or (text, [commands to run])
Step = str | tuple[str, Sequence[str]]


class Terminal:
    """Styled user-facing output."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def banner(self, title: str, subtitle: str | None = None) -> None:
        body = Text(title, style="bold blue")
        if subtitle:
            body.append(f"\n{subtitle}", style="yellow")
        self.console.print(Panel(body, box=box.DOUBLE, padding=(1, 2), expand=False))

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        """Spinner around a long-running step."""
        with self.console.status(message):
            yield

    def heading(self, message: str) -> None:
        self.console.print(f"\n[bold]{message}[/bold]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/green]")

    def failure(self, message: str, detail: str | None = None) -> None:
        self.console.print(f"[red]✗ {message}[/red]")
        if detail:
            for line in detail.splitlines()[:5]:
                self.console.print(f"  [dim]│ {line}[/dim]", highlight=False)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]{message}[/cyan]")

    def instructions(self, title: str, steps: Sequence[Step]) -> None:
        """Numbered manual steps, commands highlighted under each."""
        self.console.print(f"\n[bold yellow]{title}[/bold yellow]")
        for n, step in enumerate(steps, start=1):
            if isinstance(step, str):
                text, commands = step, ()
            else:
                text, commands = step
            self.console.print(f"\n{n}. {text}", highlight=False)
            for cmd in commands:
                self.console.print(f"   [green]{cmd}[/green]", highlight=False)
        self.console.print()

    def summary(self, title: str, lines: Sequence[tuple[str, str]]) -> None:
        """Rounded panel of ``(text, style)`` lines."""
        body = Text()
        body.append(f"{title}\n", style="bold")
        for text, style in lines:
            body.append(f"\n{text}", style=style)
        self.console.print(Panel(body, box=box.ROUNDED, padding=(1, 2), expand=False))

"""
Scripted runner — test double for every external command.

Used in tests to simulate brew, mas, mdfind, git and friends without
touching the machine. Unknown commands behave like a missing binary
(exit 127), which every probe treats as "absent".
"""

from __future__ import annotations

from collections.abc import Callable

from macsetup.adapters.shell.command import MISSING_BINARY, CommandRunner
from macsetup.core.models.action import CommandResult

Response = CommandResult | Callable[[list[str]], CommandResult]


class ScriptedRunner(CommandRunner):
    """CommandRunner that answers from a script instead of spawning.

    Responses are keyed by the exact argv. A response may be a
    CommandResult or a callable taking the argv, which lets a test flip
    state (e.g. make ``brew list mas`` succeed after ``brew install mas``).
    """

    def __init__(self, default_returncode: int = MISSING_BINARY):
        super().__init__(env={"PATH": "/usr/bin:/bin"})
        self._default_returncode = default_returncode
        self._responses: dict[tuple[str, ...], Response] = {}
        self._call_log: list[list[str]] = []

    @property
    def call_log(self) -> list[list[str]]:
        """Every argv this runner has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_response(self, argv: list[str], response: Response) -> None:
        self._responses[tuple(argv)] = response

    def set_ok(self, argv: list[str], stdout: str = "") -> None:
        """Configure ``argv`` to succeed with ``stdout``."""
        self._responses[tuple(argv)] = CommandResult(argv=argv, stdout=stdout)

    def set_failure(self, argv: list[str], returncode: int = 1, stderr: str = "") -> None:
        """Configure ``argv`` to fail."""
        self._responses[tuple(argv)] = CommandResult(
            argv=argv, returncode=returncode, stderr=stderr
        )

    def called(self, argv: list[str]) -> bool:
        return argv in self._call_log

    def calls_starting_with(self, *prefix: str) -> list[list[str]]:
        n = len(prefix)
        return [c for c in self._call_log if tuple(c[:n]) == prefix]

    def run(self, argv: list[str], *, capture: bool = True) -> CommandResult:
        self._call_log.append(list(argv))
        response = self._responses.get(tuple(argv))
        if response is None:
            return CommandResult(
                argv=list(argv),
                returncode=self._default_returncode,
                stderr=f"{argv[0]}: not scripted",
            )
        if callable(response):
            return response(list(argv))
        return response

    def reset(self) -> None:
        """Clear call log and scripted responses."""
        self._call_log.clear()
        self._responses.clear()

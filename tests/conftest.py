"""Shared fixtures for tmuxer tests."""

from io import StringIO

import pytest
from rich.console import Console

from tmuxer.executor import CommandResult


class FakeBackend:
    """TmuxBackend that records calls instead of running tmux.

    Sessions created through ``new_session`` are remembered so that a later
    ``has_session`` finds them, like a real tmux server would.
    """

    def __init__(self, running: tuple[str, ...] = (), failing: tuple[str, ...] = ()) -> None:
        self.calls: list[tuple[object, ...]] = []
        self.running = set(running)
        self.failing = set(failing)

    def _result(self, method: str, *args: object) -> CommandResult:
        self.calls.append((method, *args))
        argv = ("tmux", method, *(str(a) for a in args))
        if method in self.failing:
            return CommandResult(argv, 1, f"{method} failed")
        return CommandResult(argv, 0)

    def new_session(self, name: str) -> CommandResult:
        result = self._result("new_session", name)
        if result.ok:
            self.running.add(name)
        return result

    def new_window(self, session: str, name: str) -> CommandResult:
        return self._result("new_window", session, name)

    def split_window(self, target: str, command: str, size: int | None = None) -> CommandResult:
        return self._result("split_window", target, command, size)

    def select_layout(self, target: str, layout: str) -> CommandResult:
        return self._result("select_layout", target, layout)

    def has_session(self, name: str) -> bool:
        self.calls.append(("has_session", name))
        return name in self.running

    def attach_session(self, name: str) -> CommandResult:
        return self._result("attach_session", name)

    def methods(self) -> list[object]:
        """Names of the methods called, in order."""
        return [call[0] for call in self.calls]


@pytest.fixture
def backend() -> FakeBackend:
    """A fake backend with no running sessions."""
    return FakeBackend()


@pytest.fixture
def output() -> StringIO:
    """Buffer the test console writes to."""
    return StringIO()


@pytest.fixture
def test_console(output: StringIO) -> Console:
    """A wide, colorless console writing to ``output``."""
    return Console(file=output, no_color=True, width=200)

"""Tmux command construction and execution for tmuxer."""

import os
from typing import Protocol

from tmuxer.executor import CommandResult, run_command, run_interactive

TMUX = "tmux"


def is_inside_tmux() -> bool:
    """Check if we're running inside a tmux session."""
    return os.environ.get("TMUX") is not None


def window_target(session: str, window: str) -> str:
    """Build a ``session:window`` target."""
    return f"{session}:{window}"


def exact_session(name: str) -> str:
    """Target a session by exact name; a bare name also matches prefixes."""
    return f"={name}"


def new_session_cmd(name: str, binary: str = TMUX) -> list[str]:
    """Create a detached session."""
    return [binary, "new-session", "-d", "-s", name]


def new_window_cmd(session: str, name: str, binary: str = TMUX) -> list[str]:
    """Create a named window in a session."""
    return [binary, "new-window", "-t", session, "-n", name]


def split_window_cmd(target: str, command: str, size: int | None = None, binary: str = TMUX) -> list[str]:
    """Split a window vertically, optionally with a fixed line count.

    An empty command leaves tmux to start the default shell.
    """
    cmd = [binary, "split-window", "-t", target, "-v"]
    if size is not None:
        cmd.extend(["-l", str(size)])
    if command:
        cmd.append(command)
    return cmd


def select_layout_cmd(target: str, layout: str, binary: str = TMUX) -> list[str]:
    """Apply a named layout (e.g. ``tiled``) to a window."""
    return [binary, "select-layout", "-t", target, layout]


def has_session_cmd(name: str, binary: str = TMUX) -> list[str]:
    """Query whether a session exists."""
    return [binary, "has-session", "-t", exact_session(name)]


def attach_session_cmd(name: str, binary: str = TMUX) -> list[str]:
    """Attach the terminal to a session."""
    return [binary, "attach-session", "-t", exact_session(name)]


class TmuxBackend(Protocol):
    """The tmux operations tmuxer relies on."""

    def new_session(self, name: str) -> CommandResult: ...

    def new_window(self, session: str, name: str) -> CommandResult: ...

    def split_window(self, target: str, command: str, size: int | None = None) -> CommandResult: ...

    def select_layout(self, target: str, layout: str) -> CommandResult: ...

    def has_session(self, name: str) -> bool: ...

    def attach_session(self, name: str) -> CommandResult: ...


class Tmux:
    """TmuxBackend that shells out to the tmux binary."""

    def __init__(self, binary: str = TMUX) -> None:
        self.binary = binary

    def new_session(self, name: str) -> CommandResult:
        return run_command(new_session_cmd(name, self.binary))

    def new_window(self, session: str, name: str) -> CommandResult:
        return run_command(new_window_cmd(session, name, self.binary))

    def split_window(self, target: str, command: str, size: int | None = None) -> CommandResult:
        return run_command(split_window_cmd(target, command, size, self.binary))

    def select_layout(self, target: str, layout: str) -> CommandResult:
        return run_command(select_layout_cmd(target, layout, self.binary))

    def has_session(self, name: str) -> bool:
        """Check if a tmux session with the given name exists.

        Args:
            name: The session name to check.

        Returns:
            True if the session exists, False otherwise (including when
            tmux itself cannot be run).
        """
        return run_command(has_session_cmd(name, self.binary)).ok

    def attach_session(self, name: str) -> CommandResult:
        """Attach to a session, handing over the terminal until detach."""
        return run_interactive(attach_session_cmd(name, self.binary))

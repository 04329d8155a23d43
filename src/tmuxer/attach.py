"""Attach the terminal to the first configured session."""

from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from tmuxer.config import Layout
from tmuxer.executor import CommandResult
from tmuxer.tmux_manager import TmuxBackend, is_inside_tmux


@dataclass(frozen=True)
class AttachReport:
    """What happened while attaching."""

    session: str
    existed: bool
    heal: CommandResult | None
    attach: CommandResult


def ensure_session(backend: TmuxBackend, name: str, console: Console) -> tuple[bool, CommandResult | None]:
    """Create a detached session unless it is already running.

    Args:
        backend: The tmux backend.
        name: Session name.
        console: Where progress and errors are printed.

    Returns:
        Tuple of (whether the session already existed, result of the create
        command or None if it was skipped).
    """
    if backend.has_session(name):
        return True, None

    console.print(f"[yellow]Session {escape(name)} doesn't exist, creating it...[/]")
    result = backend.new_session(name)
    if not result.ok:
        console.print(f"[red]Error creating session:[/] {escape(str(result))}: {escape(result.error)}")
    return False, result


def attach_first_session(layout: Layout, backend: TmuxBackend, console: Console) -> AttachReport | None:
    """Make sure the first session exists, then attach to it.

    Blocks until the user detaches or the session ends. Failures are printed
    and returned in the report, never raised.

    Args:
        layout: The parsed layout.
        backend: The tmux backend.
        console: Where progress and errors are printed.

    Returns:
        The attach report, or None if the layout has no sessions.
    """
    session = layout.first_session
    if session is None:
        return None

    console.print(f"[blue]Attaching to the first session:[/] {escape(session.name)}")
    existed, heal = ensure_session(backend, session.name, console)

    attach = backend.attach_session(session.name)
    if not attach.ok:
        console.print(f"[red]Error attaching to session:[/] {escape(attach.error)}")
        if is_inside_tmux():
            console.print(f"[dim]Already inside tmux; use 'tmux switch-client -t {escape(session.name)}' instead.[/]")

    return AttachReport(session=session.name, existed=existed, heal=heal, attach=attach)

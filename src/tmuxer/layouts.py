"""Compile a layout into tmux operations and apply them."""

import shlex
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from tmuxer.config import Layout, Session, Window
from tmuxer.executor import CommandResult
from tmuxer.tmux_manager import (
    TmuxBackend,
    new_session_cmd,
    new_window_cmd,
    select_layout_cmd,
    split_window_cmd,
    window_target,
)

# Line count for every split after the first; the tiled layout evens them out
SPLIT_SIZE = 10

TILED = "tiled"


class OperationKind(StrEnum):
    """Kinds of tmux operations a layout compiles to."""

    NEW_SESSION = "new-session"
    NEW_WINDOW = "new-window"
    SPLIT_WINDOW = "split-window"
    SELECT_LAYOUT = "select-layout"


@dataclass(frozen=True)
class TmuxOperation:
    """One step in building a layout."""

    kind: OperationKind
    session: str
    window: str | None = None
    command: str = ""
    size: int | None = None

    @property
    def target(self) -> str:
        """``session`` or ``session:window``, depending on the operation."""
        if self.window is None:
            return self.session
        return window_target(self.session, self.window)

    @property
    def argv(self) -> list[str]:
        """The tmux command line this operation runs."""
        if self.kind == OperationKind.NEW_SESSION:
            return new_session_cmd(self.session)
        if self.kind == OperationKind.NEW_WINDOW:
            return new_window_cmd(self.session, self.window or "")
        if self.kind == OperationKind.SPLIT_WINDOW:
            return split_window_cmd(self.target, self.command, self.size)
        return select_layout_cmd(self.target, TILED)

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class StepResult:
    """An applied operation paired with its outcome."""

    operation: TmuxOperation
    result: CommandResult

    @property
    def ok(self) -> bool:
        return self.result.ok


def compile_window(session_name: str, window: Window) -> list[TmuxOperation]:
    """Operations that create a window, split its panes and tile them.

    A new window already has one pane, so every configured pane is a split
    of it. Only the first split is left unsized.

    Args:
        session_name: The owning session.
        window: The window definition.

    Returns:
        Ordered operations for the window.
    """
    operations = [TmuxOperation(OperationKind.NEW_WINDOW, session_name, window.name)]
    for index, pane in enumerate(window.panes):
        operations.append(
            TmuxOperation(
                OperationKind.SPLIT_WINDOW,
                session_name,
                window.name,
                command=pane.command,
                size=None if index == 0 else SPLIT_SIZE,
            )
        )
    operations.append(TmuxOperation(OperationKind.SELECT_LAYOUT, session_name, window.name))
    return operations


def compile_session(session: Session) -> list[TmuxOperation]:
    """Operations that create a detached session and all of its windows."""
    operations = [TmuxOperation(OperationKind.NEW_SESSION, session.name)]
    for window in session.windows:
        operations.extend(compile_window(session.name, window))
    return operations


def compile_layout(layout: Layout) -> list[TmuxOperation]:
    """Translate a layout into the ordered tmux operations that build it.

    Args:
        layout: The parsed layout.

    Returns:
        Operations in session, then window, then pane order.
    """
    operations: list[TmuxOperation] = []
    for session in layout.sessions:
        operations.extend(compile_session(session))
    return operations


# Type alias for operation handler functions
OperationHandler = Callable[[TmuxBackend, TmuxOperation], CommandResult]


def _new_session(backend: TmuxBackend, op: TmuxOperation) -> CommandResult:
    return backend.new_session(op.session)


def _new_window(backend: TmuxBackend, op: TmuxOperation) -> CommandResult:
    return backend.new_window(op.session, op.window or "")


def _split_window(backend: TmuxBackend, op: TmuxOperation) -> CommandResult:
    return backend.split_window(op.target, op.command, op.size)


def _select_layout(backend: TmuxBackend, op: TmuxOperation) -> CommandResult:
    return backend.select_layout(op.target, TILED)


# Dictionary dispatch for operation handlers
_OPERATION_HANDLERS: dict[OperationKind, OperationHandler] = {
    OperationKind.NEW_SESSION: _new_session,
    OperationKind.NEW_WINDOW: _new_window,
    OperationKind.SPLIT_WINDOW: _split_window,
    OperationKind.SELECT_LAYOUT: _select_layout,
}


def apply_operation(backend: TmuxBackend, operation: TmuxOperation) -> StepResult:
    """Run a single operation against the backend."""
    handler = _OPERATION_HANDLERS[operation.kind]
    return StepResult(operation, handler(backend, operation))


def apply_layout(
    layout: Layout,
    backend: TmuxBackend,
    stop_on_failure: bool = False,
    on_step: Callable[[StepResult], None] | None = None,
) -> list[StepResult]:
    """Build a layout in tmux, one operation at a time.

    Each operation finishes before the next starts. Failed operations do not
    raise; they are recorded in the returned results.

    Args:
        layout: The parsed layout.
        backend: Where operations are executed.
        stop_on_failure: If True, stop after the first failed operation.
        on_step: Optional callback invoked after each operation.

    Returns:
        One result per executed operation, in execution order.
    """
    results: list[StepResult] = []
    for operation in compile_layout(layout):
        step = apply_operation(backend, operation)
        results.append(step)
        if on_step is not None:
            on_step(step)
        if stop_on_failure and not step.ok:
            break
    return results

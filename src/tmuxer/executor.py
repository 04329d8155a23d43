"""Run external commands and capture their outcome."""

import shlex
import subprocess
from dataclasses import dataclass

# Exit status reported when the program could not be started at all
NOT_FOUND_STATUS = 127


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    argv: tuple[str, ...]
    returncode: int
    error: str = ""

    @property
    def ok(self) -> bool:
        """Whether the command exited successfully."""
        return self.returncode == 0

    def __str__(self) -> str:
        return shlex.join(self.argv)


def _failure(argv: list[str], e: subprocess.CalledProcessError) -> CommandResult:
    stderr = e.stderr.strip() if isinstance(e.stderr, str) else ""
    return CommandResult(tuple(argv), e.returncode, stderr or f"exit status {e.returncode}")


def run_command(argv: list[str]) -> CommandResult:
    """Run a command to completion without a shell.

    Output is captured; a failure is returned, never raised.

    Args:
        argv: Program and arguments.

    Returns:
        The command result.
    """
    try:
        subprocess.run(argv, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        return _failure(argv, e)
    except OSError as e:
        return CommandResult(tuple(argv), NOT_FOUND_STATUS, str(e))
    return CommandResult(tuple(argv), 0)


def run_interactive(argv: list[str]) -> CommandResult:
    """Run a command attached to this process's stdin, stdout and stderr.

    Blocks until the command exits.

    Args:
        argv: Program and arguments.

    Returns:
        The command result.
    """
    try:
        subprocess.run(argv, check=True)
    except subprocess.CalledProcessError as e:
        return _failure(argv, e)
    except OSError as e:
        return CommandResult(tuple(argv), NOT_FOUND_STATUS, str(e))
    return CommandResult(tuple(argv), 0)

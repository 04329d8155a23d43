"""Human-readable rendering of a layout."""

from rich.console import Console
from rich.text import Text

from tmuxer.config import Layout


def render_layout(layout: Layout) -> Text:
    """Render sessions, windows and panes as an indented listing.

    Pane numbers are 1-based.
    """
    text = Text()
    text.append("Tmux Configuration:", style="bold")
    for session in layout.sessions:
        text.append("\nSession: ")
        text.append(session.name, style="cyan")
        for window in session.windows:
            text.append("\n  Window: ")
            text.append(window.name, style="green")
            for i, pane in enumerate(window.panes, start=1):
                text.append(f"\n    Pane {i}: ", style="dim")
                text.append(pane.command)
    return text


def display_layout(layout: Layout, console: Console) -> None:
    """Print the layout followed by a blank line."""
    console.print(render_layout(layout))
    console.print()

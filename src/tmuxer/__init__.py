"""tmuxer - build tmux sessions from a declarative YAML layout."""

__version__ = "0.1.0"

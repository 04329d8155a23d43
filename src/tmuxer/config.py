"""Layout configuration for tmuxer."""

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

# Characters tmux treats as separators in targets (session:window.pane)
TARGET_SEPARATORS = (":", ".")

# Numeric names like `name: 1` are kept as the string "1"
_MODEL_CONFIG = ConfigDict(frozen=True, coerce_numbers_to_str=True)


class ConfigError(Exception):
    """Raised when the layout config cannot be loaded."""


def _drop_nulls(data: Any) -> Any:
    # `key:` with no value loads as None; treat it as if the key were absent
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if value is not None}
    return data


class Pane(BaseModel):
    """A single pane and the command it runs on creation."""

    model_config = _MODEL_CONFIG

    command: str = ""

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        # Allow `- vim` as shorthand for `- command: vim`
        if isinstance(data, str):
            return {"command": data}
        if data is None:
            return {}
        return _drop_nulls(data)


class Window(BaseModel):
    """A named window and its panes, in split order."""

    model_config = _MODEL_CONFIG

    name: str
    panes: list[Pane] = []

    @model_validator(mode="before")
    @classmethod
    def _empty_panes(cls, data: Any) -> Any:
        return _drop_nulls(data)


class Session(BaseModel):
    """A named session and its windows."""

    model_config = _MODEL_CONFIG

    name: str
    windows: list[Window] = []

    @model_validator(mode="before")
    @classmethod
    def _empty_windows(cls, data: Any) -> Any:
        return _drop_nulls(data)


class Layout(BaseModel):
    """Root of the configuration: sessions in declaration order."""

    model_config = _MODEL_CONFIG

    sessions: list[Session] = []

    @model_validator(mode="before")
    @classmethod
    def _empty_sessions(cls, data: Any) -> Any:
        return _drop_nulls(data)

    @property
    def first_session(self) -> Session | None:
        """The session attached to after the layout is built."""
        return self.sessions[0] if self.sessions else None


@dataclass(frozen=True)
class LayoutWarning:
    """Something in the layout tmux is likely to trip over.

    ``session`` is None for warnings about the layout as a whole.
    """

    field_name: str
    message: str
    value: str
    session: str | None = None


def load_layout(path: Path) -> Layout:
    """Load and validate a layout from a YAML file.

    An empty file yields an empty layout.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed layout.

    Raises:
        ConfigError: If the file is missing, unreadable, not YAML, or invalid.
    """
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"file read error: {e}") from e

    if raw is None:
        return Layout()
    if not isinstance(raw, dict):
        raise ConfigError(f"expected a mapping at the top of {path}, got {type(raw).__name__}")

    try:
        return Layout.model_validate(cast(dict[str, object], raw))
    except ValidationError as e:
        problems = []
        for error in e.errors():
            field_path = ".".join(str(loc) for loc in error["loc"])
            problems.append(f"{field_path}: {error['msg']}")
        raise ConfigError(f"invalid config {path}: " + "; ".join(problems)) from e


def _duplicates(names: list[str]) -> list[str]:
    return [name for name, count in Counter(names).items() if count > 1]


def _separator_warning(name: str, field_name: str, session: str) -> LayoutWarning | None:
    if any(sep in name for sep in TARGET_SEPARATORS):
        return LayoutWarning(field_name, "contains ':' or '.', which tmux reads as a target separator", name, session)
    return None


def check_layout(layout: Layout) -> list[LayoutWarning]:
    """Report layout problems tmux is likely to trip over.

    Nothing here is enforced; the layout is still applied as written.

    Args:
        layout: The layout to check.

    Returns:
        List of warnings, empty when the layout looks fine.
    """
    session_names = [s.name for s in layout.sessions]
    warnings = [LayoutWarning("sessions", "duplicate session name", name) for name in _duplicates(session_names)]

    for i, session in enumerate(layout.sessions):
        session_field = f"sessions.{i}"
        warning = _separator_warning(session.name, f"{session_field}.name", session.name)
        if warning:
            warnings.append(warning)

        for name in _duplicates([w.name for w in session.windows]):
            warnings.append(LayoutWarning(f"{session_field}.windows", "duplicate window name", name, session.name))

        for j, window in enumerate(session.windows):
            warning = _separator_warning(window.name, f"{session_field}.windows.{j}.name", session.name)
            if warning:
                warnings.append(warning)

    return warnings


def display_layout_warnings(warnings: list[LayoutWarning], console: Console, source: str = "") -> None:
    """Print warnings in a panel, grouped by the session they concern.

    Args:
        warnings: Warnings from check_layout.
        console: Rich console to output to.
        source: Config file the layout came from, shown in the title.
    """
    if not warnings:
        return

    groups: dict[str | None, list[LayoutWarning]] = {}
    for warning in warnings:
        groups.setdefault(warning.session, []).append(warning)

    text = Text()
    for session, group in groups.items():
        if text:
            text.append("\n")
        text.append("layout" if session is None else f"session {session}", style="bold cyan")
        for warning in group:
            text.append(f"\n  {warning.field_name}", style="dim")
            text.append(f" {warning.message}", style="yellow")
            text.append(f" ({warning.value!r})")

    title = "[yellow]Layout warnings[/]"
    if source:
        title += f" [dim]{escape(source)}[/]"
    console.print(Panel(text, title=title, border_style="yellow"))


def layout_to_yaml(layout: Layout) -> str:
    """Serialize a layout back to YAML."""
    return yaml.dump(layout.model_dump(), default_flow_style=False, sort_keys=False)


SAMPLE_LAYOUT = Layout(
    sessions=[
        Session(
            name="dev",
            windows=[
                Window(name="editor", panes=[Pane(command="vim"), Pane(command="make watch")]),
            ],
        )
    ]
)


def save_layout(layout: Layout, path: Path) -> None:
    """Write a layout to a YAML file.

    Args:
        layout: The layout to save.
        path: Destination file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(layout_to_yaml(layout))

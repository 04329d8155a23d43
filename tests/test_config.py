"""Tests for tmuxer.config module."""

from io import StringIO
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError
from rich.console import Console

from tmuxer.config import (
    SAMPLE_LAYOUT,
    ConfigError,
    Layout,
    Pane,
    Session,
    Window,
    check_layout,
    LayoutWarning,
    display_layout_warnings,
    layout_to_yaml,
    load_layout,
    save_layout,
)


class TestModels:
    """Tests for the layout models."""

    def test_defaults(self) -> None:
        """Should default to empty collections and an empty command."""
        assert Layout().sessions == []
        assert Session(name="dev").windows == []
        assert Window(name="editor").panes == []
        assert Pane().command == ""

    def test_pane_string_shorthand(self) -> None:
        """Should accept a bare string as a pane command."""
        window = Window.model_validate({"name": "editor", "panes": ["vim", {"command": "make watch"}]})
        assert [p.command for p in window.panes] == ["vim", "make watch"]

    def test_name_required(self) -> None:
        """Should reject a session without a name."""
        with pytest.raises(ValidationError):
            Session.model_validate({"windows": []})

    def test_frozen(self) -> None:
        """Should not allow mutation after loading."""
        session = Session(name="dev")
        with pytest.raises(ValidationError):
            session.name = "other"  # type: ignore[misc]

    def test_first_session(self) -> None:
        """Should return the first declared session."""
        layout = Layout(sessions=[Session(name="a"), Session(name="b")])
        assert layout.first_session is not None
        assert layout.first_session.name == "a"
        assert Layout().first_session is None

    def test_numeric_names_become_strings(self) -> None:
        """Should accept numbered sessions and windows as their string form."""
        data = {"sessions": [{"name": 1, "windows": [{"name": 2, "panes": [{"command": "htop"}]}]}]}
        layout = Layout.model_validate(data)
        assert layout.sessions[0].name == "1"
        assert layout.sessions[0].windows[0].name == "2"

    def test_null_values_use_defaults(self) -> None:
        """Should read keys left without a value as their defaults."""
        window = Window.model_validate({"name": "w", "panes": [{"command": None}, None]})
        assert [p.command for p in window.panes] == ["", ""]
        assert Session.model_validate({"name": "s", "windows": None}).windows == []
        assert Layout.model_validate({"sessions": None}).sessions == []

    def test_unknown_keys_ignored(self) -> None:
        """Should ignore keys it does not know about."""
        layout = Layout.model_validate({"sessions": [{"name": "dev", "root": "~/src"}], "theme": "dark"})
        assert layout.sessions[0].name == "dev"


class TestLoadLayout:
    """Tests for load_layout function."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should raise ConfigError for a missing file."""
        with pytest.raises(ConfigError, match="not found"):
            load_layout(tmp_path / "nonexistent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Should raise ConfigError on a YAML parse error."""
        path = tmp_path / "config.yaml"
        path.write_text("sessions: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            load_layout(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Should raise ConfigError when the top level is not a mapping."""
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="expected a mapping"):
            load_layout(path)

    def test_validation_error_lists_fields(self, tmp_path: Path) -> None:
        """Should name the failing field path."""
        path = tmp_path / "config.yaml"
        path.write_text("sessions:\n  - windows: []\n")
        with pytest.raises(ConfigError, match=r"sessions\.0\.name"):
            load_layout(path)

    def test_numbered_and_empty_commands(self, tmp_path: Path) -> None:
        """Should load numeric names and an empty command instead of failing."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "sessions:\n"
            "  - name: 1\n"
            "    windows:\n"
            "      - name: 2\n"
            "        panes:\n"
            "          - command: htop\n"
            "          - command:\n"
        )
        layout = load_layout(path)
        assert layout.sessions[0].name == "1"
        assert layout.sessions[0].windows[0].name == "2"
        assert [p.command for p in layout.sessions[0].windows[0].panes] == ["htop", ""]

    def test_empty_file(self, tmp_path: Path) -> None:
        """Should treat an empty file as an empty layout."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_layout(path) == Layout()

    def test_valid_file(self, tmp_path: Path) -> None:
        """Should load sessions, windows and panes in order."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "sessions:\n"
            "  - name: dev\n"
            "    windows:\n"
            "      - name: editor\n"
            "        panes:\n"
            "          - command: vim\n"
            "          - command: make watch\n"
            "      - name: logs\n"
            "  - name: ops\n"
        )
        layout = load_layout(path)
        assert [s.name for s in layout.sessions] == ["dev", "ops"]
        assert [w.name for w in layout.sessions[0].windows] == ["editor", "logs"]
        assert [p.command for p in layout.sessions[0].windows[0].panes] == ["vim", "make watch"]
        assert layout.sessions[1].windows == []


class TestSaveLayout:
    """Tests for save_layout and layout_to_yaml."""

    def test_save_and_reload(self, tmp_path: Path) -> None:
        """Should write a file load_layout reads back unchanged."""
        path = tmp_path / "nested" / "config.yaml"
        save_layout(SAMPLE_LAYOUT, path)
        assert load_layout(path) == SAMPLE_LAYOUT

    def test_yaml_keeps_key_order(self) -> None:
        """Should emit name before windows."""
        text = layout_to_yaml(SAMPLE_LAYOUT)
        assert text.index("name: dev") < text.index("windows:")
        assert yaml.safe_load(text)["sessions"][0]["windows"][0]["panes"][1] == {"command": "make watch"}


class TestCheckLayout:
    """Tests for check_layout function."""

    def test_clean_layout(self) -> None:
        """Should return no warnings for a well-formed layout."""
        assert check_layout(SAMPLE_LAYOUT) == []

    def test_duplicate_sessions(self) -> None:
        """Should warn once about duplicate session names, layout-wide."""
        layout = Layout(sessions=[Session(name="dev"), Session(name="dev")])
        assert check_layout(layout) == [LayoutWarning("sessions", "duplicate session name", "dev")]

    def test_duplicate_windows(self) -> None:
        """Should warn about duplicate window names under their session."""
        layout = Layout(sessions=[Session(name="dev", windows=[Window(name="w"), Window(name="w")])])
        warnings = check_layout(layout)
        assert [(w.field_name, w.session) for w in warnings] == [("sessions.0.windows", "dev")]

    def test_same_window_name_in_different_sessions(self) -> None:
        """Should allow the same window name across sessions."""
        layout = Layout(
            sessions=[
                Session(name="a", windows=[Window(name="w")]),
                Session(name="b", windows=[Window(name="w")]),
            ]
        )
        assert check_layout(layout) == []

    def test_target_separators(self) -> None:
        """Should warn about ':' and '.' in names."""
        layout = Layout(sessions=[Session(name="my.app", windows=[Window(name="a:b")])])
        warnings = check_layout(layout)
        assert [w.field_name for w in warnings] == ["sessions.0.name", "sessions.0.windows.0.name"]
        assert {w.session for w in warnings} == {"my.app"}


class TestDisplayLayoutWarnings:
    """Tests for display_layout_warnings function."""

    def test_no_warnings_no_output(self) -> None:
        """Should not print anything when no warnings."""
        output = StringIO()
        display_layout_warnings([], Console(file=output, no_color=True))
        assert output.getvalue() == ""

    def test_groups_by_session(self) -> None:
        """Should list layout-wide warnings, then each session's warnings under its name."""
        output = StringIO()
        warnings = [
            LayoutWarning("sessions", "duplicate session name", "dev"),
            LayoutWarning("sessions.0.windows", "duplicate window name", "logs", "dev"),
            LayoutWarning("sessions.2.name", "contains ':' or '.'", "a.b", "a.b"),
        ]
        display_layout_warnings(warnings, Console(file=output, no_color=True, width=120), "config.yaml")
        lines = [line.strip("│ ") for line in output.getvalue().splitlines()]
        assert "Layout warnings" in lines[0]
        assert "config.yaml" in lines[0]
        body = [line for line in lines[1:-1] if line]
        assert body == [
            "layout",
            "sessions duplicate session name ('dev')",
            "session dev",
            "sessions.0.windows duplicate window name ('logs')",
            "session a.b",
            "sessions.2.name contains ':' or '.' ('a.b')",
        ]

    def test_source_with_brackets(self) -> None:
        """Should show a source path containing markup verbatim."""
        output = StringIO()
        warnings = [LayoutWarning("sessions", "duplicate session name", "dev")]
        display_layout_warnings(warnings, Console(file=output, no_color=True, width=120), "[bold]x.yaml")
        assert "[bold]x.yaml" in output.getvalue()

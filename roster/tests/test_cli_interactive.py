"""Tests for interactive CLI loop functionality.

Covers:
- _run_cli_interactive: REPL-like command loop
- EOF handling
- JSON command parsing
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from roster.adapters.cli.commands import CLICommandHandler
from roster.core.session import RosterSession
from roster.core.store import EntityStore
from roster.main import _run_cli_interactive
from roster.tests.fakes import FakeCourseCatalog, FakeRemoteValidator


def make_handler() -> tuple[CLICommandHandler, RosterSession]:
    session = RosterSession(EntityStore(), FakeCourseCatalog(), FakeRemoteValidator())
    return CLICommandHandler(session), session


@pytest.mark.asyncio
class TestInteractiveCLILoop:
    """Test suite for interactive CLI loop."""

    async def test_cli_reads_and_executes_commands(self, capsys) -> None:
        """Commands in 'command args_json' format reach the session."""
        handler, session = make_handler()

        commands = [
            f'add {json.dumps({"name": "Ann Lee", "email": "ann@x.com", "course_id": 1})}',
            "list {}",
            "exit",
        ]

        with patch("builtins.input", side_effect=commands):
            await _run_cli_interactive(handler)

        assert [s.name for s in session.visible_students()] == ["Ann Lee"]
        assert '"status": "success"' in capsys.readouterr().out

    async def test_cli_handles_json_parse_errors(self) -> None:
        """Malformed JSON is reported and the loop continues."""
        handler, session = make_handler()

        commands = [
            "add not-valid-json",
            "add [1, 2]",
            "exit",
        ]

        with patch("builtins.input", side_effect=commands):
            await _run_cli_interactive(handler)

        assert session.visible_students() == ()

    async def test_cli_handles_eof(self) -> None:
        """EOF (Ctrl+D) ends the loop without an exception."""
        handler, _ = make_handler()

        def input_with_eof(_: str) -> str:
            raise EOFError()

        with patch("builtins.input", side_effect=input_with_eof):
            await _run_cli_interactive(handler)

    async def test_cli_reports_unknown_command(self, capsys) -> None:
        handler, _ = make_handler()

        with patch("builtins.input", side_effect=["frobnicate {}", "exit"]):
            await _run_cli_interactive(handler)

        output = capsys.readouterr().out
        assert '"status": "error"' in output
        assert "Unknown command: frobnicate" in output

    async def test_cli_prints_text_listing(self, capsys) -> None:
        handler, _ = make_handler()

        commands = ['list {"format": "text"}', "exit"]
        with patch("builtins.input", side_effect=commands):
            await _run_cli_interactive(handler)

        assert "No students found" in capsys.readouterr().out

    async def test_cli_help_and_blank_lines(self, capsys) -> None:
        handler, _ = make_handler()
        handler.list_students = AsyncMock()  # type: ignore[method-assign]

        with patch("builtins.input", side_effect=["", "help", "exit"]):
            await _run_cli_interactive(handler)

        assert "Available Commands" in capsys.readouterr().out
        handler.list_students.assert_not_called()

"""End-to-end tests for the game-night command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import gamenight
from domain.errors import RepositoryFailure

runner = CliRunner()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'gamenight.db'}"


def _invoke(*args: str):
    return runner.invoke(gamenight.app, list(args))


def _register_ten(db_url: str) -> list[str]:
    player_ids = [f"u{index}" for index in range(10)]
    for player_id in player_ids:
        result = _invoke("register", player_id, f"Player {player_id}", "--db-url", db_url)
        assert result.exit_code == 0, result.output
    return player_ids


def test_register_and_stats(db_url: str) -> None:
    result = _invoke("register", "u1", "Alice", "--steam-id", "STEAM_1:0:7", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "player registered: Alice (u1) rating=1000.00" in result.output

    result = _invoke("stats", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "Alice" in result.output


def test_toggle_core_reports_new_value(db_url: str) -> None:
    _invoke("register", "u1", "Alice", "--db-url", db_url)

    result = _invoke("toggle-core", "u1", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "set: true" in result.output


def test_select_then_report_settles_stored_teams(db_url: str) -> None:
    player_ids = _register_ten(db_url)

    result = _invoke("select", "--present", ",".join(player_ids), "--channel", "guild:1", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "Team 1" in result.output
    assert "Team 2" in result.output

    result = _invoke("report", "1", "--channel", "guild:1", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "Team 1 won!" in result.output

    result = _invoke("history", "u0", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "match=1" in result.output

    result = _invoke("report", "1", "--channel", "guild:1", "--db-url", db_url)
    assert result.exit_code == 1
    assert "no stored teams" in result.output


def test_select_with_unregistered_players_fails(db_url: str) -> None:
    player_ids = _register_ten(db_url)[:8] + ["ghost-1", "ghost-2"]

    result = _invoke("select", "--present", ",".join(player_ids), "--db-url", db_url)
    assert result.exit_code == 1
    assert "missing players are required to register: ghost-1, ghost-2" in result.output


def test_select_with_too_few_players_fails(db_url: str) -> None:
    player_ids = _register_ten(db_url)[:9]

    result = _invoke("select", "--present", ",".join(player_ids), "--db-url", db_url)
    assert result.exit_code == 1
    assert "not enough players" in result.output


def test_end_session_clears_channel(db_url: str) -> None:
    player_ids = _register_ten(db_url)
    _invoke("select", "--present", ",".join(player_ids), "--db-url", db_url)

    result = _invoke("end-session", "--db-url", db_url)
    assert result.exit_code == 0, result.output

    result = _invoke("report", "2", "--db-url", db_url)
    assert result.exit_code == 1


def test_report_rolls_back_settlement_when_clearing_fails(
    db_url: str,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    player_ids = _register_ten(db_url)
    _invoke("select", "--present", ",".join(player_ids), "--db-url", db_url)

    def _fail_clear(self: gamenight.SqlTeamStore, channel_key: str) -> None:
        raise RepositoryFailure("stored teams unavailable")

    monkeypatch.setattr(gamenight.SqlTeamStore, "clear", _fail_clear)
    result = _invoke("report", "1", "--db-url", db_url)
    assert result.exit_code == 1
    assert "stored teams unavailable" in result.output

    monkeypatch.undo()
    result = _invoke("report", "1", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "Match 1 reported: Team 1 won!" in result.output

    result = _invoke("history", "u0", "--db-url", db_url)
    assert result.output.count("match=") == 1

"""Tests for picking ten players out of everyone present."""

from __future__ import annotations

import pytest

from domain.common import Player, SelectTeamsRequest, Stat
from domain.errors import MissingPlayers, NotEnoughPlayers
from domain.selection import match_from_ids, select_players, select_teams
from repositories import SqlRosterRepository


def _register(
    roster: SqlRosterRepository,
    player_id: str,
    *,
    games_played: int = 0,
    rating: float = 1000.0,
    core_member: bool = False,
) -> Player:
    player = Player(
        player_id=player_id,
        name=f"Player {player_id}",
        core_member=core_member,
        stat=Stat(rating=rating, games_played=games_played),
    )
    roster.create(player)
    return player


def _ids(count: int, prefix: str = "p") -> list[str]:
    return [f"{prefix}{index:02d}" for index in range(count)]


def test_fewer_than_ten_present_raises_not_enough_players(roster: SqlRosterRepository) -> None:
    for player_id in _ids(9):
        _register(roster, player_id)

    with pytest.raises(NotEnoughPlayers) as exc_info:
        select_players(roster, SelectTeamsRequest(present_ids=_ids(9)))

    assert exc_info.value.available == 9
    assert exc_info.value.needed == 10


def test_duplicate_present_ids_count_once(roster: SqlRosterRepository) -> None:
    for player_id in _ids(9):
        _register(roster, player_id)

    with pytest.raises(NotEnoughPlayers):
        select_players(roster, SelectTeamsRequest(present_ids=_ids(9) + ["p00"]))


def test_unregistered_players_are_reported_together(roster: SqlRosterRepository) -> None:
    for player_id in _ids(8):
        _register(roster, player_id)

    present = _ids(8) + ["ghost-1", "ghost-2"]
    with pytest.raises(MissingPlayers) as exc_info:
        select_players(roster, SelectTeamsRequest(present_ids=present))

    assert exc_info.value.player_ids == ("ghost-1", "ghost-2")
    assert "ghost-1, ghost-2" in str(exc_info.value)


def test_exactly_ten_present_are_all_selected(roster: SqlRosterRepository) -> None:
    for player_id in _ids(10):
        _register(roster, player_id)

    selected = select_players(roster, SelectTeamsRequest(present_ids=_ids(10)))
    assert [player.player_id for player in selected] == _ids(10)


def test_lowest_games_played_are_kept(roster: SqlRosterRepository) -> None:
    present = _ids(12)
    for index, player_id in enumerate(present):
        _register(roster, player_id, games_played=index)

    selected = select_players(roster, SelectTeamsRequest(present_ids=present))
    selected_ids = {player.player_id for player in selected}

    assert len(selected) == 10
    assert selected_ids == set(_ids(10))


def test_core_members_are_kept_even_with_many_games(roster: SqlRosterRepository) -> None:
    present = _ids(12)
    for index, player_id in enumerate(present):
        _register(roster, player_id, games_played=index, core_member=player_id == "p11")

    selected_ids = {player.player_id for player in select_players(roster, SelectTeamsRequest(present_ids=present))}

    assert "p11" in selected_ids
    assert "p09" not in selected_ids
    assert "p10" not in selected_ids


def test_required_players_restrict_the_pool(roster: SqlRosterRepository) -> None:
    present = _ids(14)
    for index, player_id in enumerate(present):
        _register(roster, player_id, games_played=index)

    required = _ids(14)[2:13]
    selected = select_players(
        roster,
        SelectTeamsRequest(present_ids=present, required_ids=required),
    )
    selected_ids = {player.player_id for player in selected}

    assert len(selected) == 10
    assert selected_ids <= set(required)


def test_required_pool_below_ten_raises(roster: SqlRosterRepository) -> None:
    present = _ids(12)
    for player_id in present:
        _register(roster, player_id)

    with pytest.raises(NotEnoughPlayers) as exc_info:
        select_players(
            roster,
            SelectTeamsRequest(present_ids=present, required_ids=_ids(9)),
        )
    assert exc_info.value.available == 9


def test_omitted_players_are_never_selected(roster: SqlRosterRepository) -> None:
    present = _ids(11)
    for player_id in present:
        _register(roster, player_id)

    selected = select_players(roster, SelectTeamsRequest(present_ids=present, omit_ids=["p03"]))
    assert "p03" not in {player.player_id for player in selected}
    assert len(selected) == 10


def test_omitting_below_ten_raises(roster: SqlRosterRepository) -> None:
    present = _ids(10)
    for player_id in present:
        _register(roster, player_id)

    with pytest.raises(NotEnoughPlayers):
        select_players(roster, SelectTeamsRequest(present_ids=present, omit_ids=["p00"]))


def test_select_teams_balances_selected_players(roster: SqlRosterRepository) -> None:
    present = _ids(10)
    for index, player_id in enumerate(present):
        _register(roster, player_id, rating=1000.0 + 10 * index)

    match = select_teams(roster, SelectTeamsRequest(present_ids=present))

    assert match.teams[0].player_ids == ("p00", "p02", "p04", "p06", "p08")
    assert match.teams[1].player_ids == ("p01", "p03", "p05", "p07", "p09")


def test_match_from_ids_keeps_seating_order(roster: SqlRosterRepository) -> None:
    for player_id in _ids(10):
        _register(roster, player_id)

    team1 = ["p09", "p00", "p05", "p03", "p07"]
    team2 = ["p01", "p02", "p04", "p06", "p08"]
    match = match_from_ids(roster, team1, team2)

    assert list(match.teams[0].player_ids) == team1
    assert list(match.teams[1].player_ids) == team2


def test_match_from_ids_reports_unknown_players(roster: SqlRosterRepository) -> None:
    for player_id in _ids(9):
        _register(roster, player_id)

    with pytest.raises(MissingPlayers) as exc_info:
        match_from_ids(roster, _ids(5), _ids(9)[5:] + ["gone"])
    assert exc_info.value.player_ids == ("gone",)


def test_more_than_ten_core_members_keep_lowest_games_played(roster: SqlRosterRepository) -> None:
    present = _ids(12)
    games = {"p00": 30, "p01": 25}
    for index, player_id in enumerate(present):
        _register(roster, player_id, games_played=games.get(player_id, index), core_member=True)

    selected = select_players(roster, SelectTeamsRequest(present_ids=present))

    assert [player.player_id for player in selected] == _ids(12)[2:]


def test_core_members_win_over_required_players_when_reserved_exceeds_ten(
    roster: SqlRosterRepository,
) -> None:
    present = _ids(13)
    for index, player_id in enumerate(present):
        # four veteran core members among thirteen required players
        _register(roster, player_id, games_played=20 if index < 4 else 0, core_member=index < 4)

    selected = select_players(
        roster,
        SelectTeamsRequest(present_ids=present, required_ids=present),
    )
    selected_ids = [player.player_id for player in selected]

    assert len(selected_ids) == 10
    assert selected_ids[:4] == ["p00", "p01", "p02", "p03"]
    assert selected_ids[4:] == ["p04", "p05", "p06", "p07", "p08", "p09"]

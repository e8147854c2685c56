"""Split ten selected players into two teams of similar average rating."""

from __future__ import annotations

import random
from collections.abc import Sequence

from domain.common import MATCH_SIZE, Match, Player, Team
from domain.errors import InvalidInput


def balance_teams(players: Sequence[Player], *, rng: random.Random | None = None) -> Match:
    """Sort ascending by rating and deal players alternately to the two teams.

    Even positions (0, 2, 4, 6, 8) go to ``teams[0]`` and odd positions to
    ``teams[1]``. Equal ratings keep their input order, so the same input always
    yields the same teams. This is a heuristic: the rating gap is small for
    evenly spread ratings but is not guaranteed to be minimal.

    When ``rng`` is given only the seating order inside each team is shuffled.
    """
    if len(players) != MATCH_SIZE:
        raise InvalidInput(f"balancing needs exactly {MATCH_SIZE} players, got {len(players)}")
    player_ids = [player.player_id for player in players]
    if len(set(player_ids)) != len(player_ids):
        raise InvalidInput(f"duplicate players in balancing input: {player_ids}")

    ordered = sorted(players, key=lambda player: player.rating)
    team1 = list(ordered[0::2])
    team2 = list(ordered[1::2])

    if rng is not None:
        rng.shuffle(team1)
        rng.shuffle(team2)

    return Match(teams=(Team(players=tuple(team1)), Team(players=tuple(team2))))


def rating_gap(match: Match) -> float:
    """Absolute difference between the two teams' average ratings."""
    return abs(match.teams[0].average_rating - match.teams[1].average_rating)


__all__ = ["balance_teams", "rating_gap"]

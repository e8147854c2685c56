#!/usr/bin/env python3
"""Game-night commands: roster admin, team selection and result reporting."""

from __future__ import annotations

import random
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory, ensure_schema
from domain.common import Match, Player, SelectTeamsRequest
from domain.errors import GameNightError
from domain.history_import import import_historical_matches, load_historical_matches
from domain.ratings.elo.config import GameNightConfig, default_config, load_gamenight_config
from domain.roster import player_stats, register_player, toggle_core
from domain.selection import match_from_ids, select_teams
from domain.settlement import settle_match
from logging_config import get_logger, setup_logging
from repositories import SqlMatchRepository, SqlRosterRepository, SqlTeamStore

DEFAULT_CONFIG_PATH = ROOT_DIR / "configs" / "gamenight.toml"
DEFAULT_CHANNEL = "default"

logger = get_logger("gamenight")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Game-night roster, team balancing and rating commands.",
)

DbUrlOption = Annotated[
    str,
    typer.Option("--db-url", envvar="GAMENIGHT_DB_URL", help="Database URL."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Game-night TOML config. Defaults to configs/gamenight.toml."),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL."),
]
ChannelOption = Annotated[
    str,
    typer.Option("--channel", help="Key under which selected teams are stored."),
]


@dataclass
class Repositories:
    roster: SqlRosterRepository
    matches: SqlMatchRepository
    teams: SqlTeamStore


def _load_config(config_path: Path | None) -> GameNightConfig:
    if config_path is not None:
        return load_gamenight_config(config_path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_gamenight_config(DEFAULT_CONFIG_PATH)
    return default_config()


@contextmanager
def _open_repositories(db_url: str, config: GameNightConfig) -> Iterator[Repositories]:
    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)
    try:
        with session_factory() as session:
            yield Repositories(
                roster=SqlRosterRepository(session),
                matches=SqlMatchRepository(session),
                teams=SqlTeamStore(session, ttl=config.stored_teams_ttl),
            )
    except GameNightError as exc:
        logger.debug("command failed", exc_info=True)
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        engine.dispose()


def _split_ids(values: list[str]) -> list[str]:
    ids: list[str] = []
    for value in values:
        ids.extend(part.strip() for part in value.split(",") if part.strip())
    return ids


def _format_player_table(players: list[Player]) -> str:
    header = (
        f"{'Player':<20} {'Core':<5} {'Rating':>8} {'Games':>6} {'Wins':>5} "
        f"{'WinRate':>8} {'K':>5} {'A':>5} {'D':>5} {'KDA':>6}"
    )
    lines = [header, "-" * len(header)]
    for player in players:
        stat = player.stat
        lines.append(
            f"{player.name[:20]:<20} {('yes' if player.core_member else 'no'):<5} "
            f"{stat.rating:>8.2f} {stat.games_played:>6} {stat.wins:>5} "
            f"{stat.win_rate * 100:>7.2f}% {stat.kills:>5} {stat.assists:>5} "
            f"{stat.deaths:>5} {stat.kda:>6.2f}"
        )
    return "\n".join(lines)


def _format_match(match: Match) -> str:
    lines = []
    for index, team in enumerate(match.teams, start=1):
        lines.append(f"Team {index} (avg {team.average_rating:.2f}): {team}")
    return "\n".join(lines)


@app.command("init-db")
def init_db(db_url: DbUrlOption = DEFAULT_DB_URL, log_level: LogLevelOption = None) -> None:
    """Create the game-night tables if they do not exist."""
    setup_logging(log_level)
    engine = create_db_engine(db_url)
    ensure_schema(engine)
    engine.dispose()
    typer.echo("schema ready")


@app.command("register")
def register(
    player_id: Annotated[str, typer.Argument(help="Stable chat-platform user id.")],
    name: Annotated[str, typer.Argument(help="Display name.")],
    steam_id: Annotated[str | None, typer.Option("--steam-id")] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Register a player or refresh their name and Steam ID."""
    setup_logging(log_level)
    config = _load_config(config_path)
    with _open_repositories(db_url, config) as repos:
        player = register_player(
            repos.roster,
            player_id,
            name,
            steam_id=steam_id,
            params=config.parameters,
        )
    typer.echo(f"player registered: {player.name} ({player.player_id}) rating={player.rating:.2f}")


@app.command("toggle-core")
def toggle_core_command(
    player_id: Annotated[str, typer.Argument()],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Flip a player's core-member flag."""
    setup_logging(log_level)
    config = _load_config(config_path)
    with _open_repositories(db_url, config) as repos:
        is_core = toggle_core(repos.roster, player_id)
    typer.echo(f"core status toggled, set: {str(is_core).lower()}")


@app.command("stats")
def stats(
    player_ids: Annotated[list[str] | None, typer.Argument(help="Player ids; omit for everyone.")] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Show cumulative statistics."""
    setup_logging(log_level)
    config = _load_config(config_path)
    with _open_repositories(db_url, config) as repos:
        players = player_stats(repos.roster, _split_ids(player_ids or []))
    typer.echo(_format_player_table(players))


@app.command("history")
def history(
    player_id: Annotated[str, typer.Argument()],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Show a player's rating after every match."""
    setup_logging(log_level)
    config = _load_config(config_path)
    with _open_repositories(db_url, config) as repos:
        player = repos.roster.get(player_id)
        entries = repos.matches.rating_history(player_id)
    typer.echo(f"Rating history for {player.name}:")
    for entry in entries:
        typer.echo(f"{entry.recorded_at:%Y-%m-%d %H:%M} match={entry.match_id} rating={entry.rating:.2f}")


@app.command("select")
def select(
    present: Annotated[list[str], typer.Option("--present", help="Present player ids (repeat or comma-separate).")],
    required: Annotated[list[str] | None, typer.Option("--required")] = None,
    omit: Annotated[list[str] | None, typer.Option("--omit")] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Shuffle seating order with this seed.")] = None,
    channel: ChannelOption = DEFAULT_CHANNEL,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Pick ten players, balance them and store the teams for the channel."""
    setup_logging(log_level)
    config = _load_config(config_path)
    request = SelectTeamsRequest(
        present_ids=_split_ids(present),
        required_ids=_split_ids(required or []),
        omit_ids=_split_ids(omit or []),
    )
    rng = random.Random(seed) if seed is not None else None
    with _open_repositories(db_url, config) as repos:
        match = select_teams(repos.roster, request, rng=rng)
        repos.teams.store(channel, match)
    typer.echo(_format_match(match))


@app.command("report")
def report(
    winner: Annotated[int, typer.Argument(min=1, max=2, help="Winning team: 1 or 2.")],
    channel: ChannelOption = DEFAULT_CHANNEL,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Settle the stored teams of a channel with the reported winner."""
    setup_logging(log_level)
    config = _load_config(config_path)
    with _open_repositories(db_url, config) as repos:
        stored = repos.teams.load(channel)
        match = match_from_ids(repos.roster, stored.team1_ids, stored.team2_ids)
        # one commit for the result and the cleared channel
        with repos.roster.transaction():
            result = settle_match(
                repos.roster,
                repos.matches,
                match,
                winner - 1,
                params=config.parameters,
                kda_params=config.kda,
            )
            repos.teams.clear(channel)
    typer.echo(f"Match {result.match_id} reported: Team {winner} won!")
    for event in result.events:
        typer.echo(f"{event.player_id}: {event.pre_rating:.2f} -> {event.post_rating:.2f} ({event.rating_delta:+.2f})")


@app.command("end-session")
def end_session(
    channel: ChannelOption = DEFAULT_CHANNEL,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Drop the stored teams of a channel without reporting a result."""
    setup_logging(log_level)
    config = _load_config(config_path)
    with _open_repositories(db_url, config) as repos:
        repos.teams.clear(channel)
    typer.echo("stored teams cleared")


@app.command("import-history")
def import_history(
    file_path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Replay a historical JSON export of matches into the roster."""
    setup_logging(log_level)
    config = _load_config(config_path)
    with _open_repositories(db_url, config) as repos:
        history_matches = load_historical_matches(file_path)
        results = import_historical_matches(
            repos.roster,
            repos.matches,
            history_matches,
            params=config.parameters,
            kda_params=config.kda,
        )
    typer.echo(f"imported_matches={len(results)}")


if __name__ == "__main__":
    app()

#!/usr/bin/env python3
"""League administration: schema, installations, match recording and leaderboards."""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import create_db_engine, create_session_factory, ensure_schema
from domain.config import LeagueConfig, StorageConfig, load_league_config
from domain.exceptions import InvalidMatch
from domain.leaderboard import build_leaderboard
from domain.names import normalize
from domain.ratings.engine import compute_ratings
from domain.ratings.registry import create_calculator
from repositories import InstallationRepository, MatchRepository

DEFAULT_CONFIG_PATH = ROOT_DIR / "config" / "league.toml"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Manage foosball league installations, matches and leaderboards.",
)

ConfigOption = Annotated[
    Path,
    typer.Option("--config", help="League TOML config file."),
]
DbUrlOption = Annotated[
    str | None,
    typer.Option("--db-url", help="Database URL. Overrides [storage].db_url from the config."),
]


def _load_config(config_path: Path, db_url: str | None) -> LeagueConfig:
    try:
        config = load_league_config(config_path)
    except (FileNotFoundError, IsADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if db_url is not None:
        config = dataclasses.replace(config, storage=StorageConfig(db_url=db_url))
    return config


def _parse_team(raw_team: str) -> list[str]:
    players = [normalize(player) for player in raw_team.split(",")]
    players = [player for player in players if player]
    if not players:
        raise typer.BadParameter(f"Team '{raw_team}' has no players", param_hint="--team")
    return players


def _parse_scores(raw_scores: str) -> list[float]:
    try:
        return [float(score) for score in raw_scores.split(",")]
    except ValueError as exc:
        raise typer.BadParameter(
            f"Scores must be comma-separated numbers, got '{raw_scores}'",
            param_hint="--scores",
        ) from exc


@app.command()
def init_db(
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Create the league tables if they do not exist."""
    config = _load_config(config_path, db_url)
    ensure_schema(create_db_engine(config.storage.db_url))
    typer.echo(f"schema_ready league={config.name} db_url={config.storage.db_url}")


@app.command()
def register_installation(
    oauth_id: Annotated[str, typer.Argument(help="OAuth client id of the installation.")],
    oauth_secret: Annotated[str, typer.Argument(help="OAuth secret of the installation.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Register an installation, or refresh the secret of an existing one."""
    config = _load_config(config_path, db_url)
    engine = create_db_engine(config.storage.db_url)
    ensure_schema(engine)

    installation = InstallationRepository(create_session_factory(engine)).register_installation(
        oauth_id,
        oauth_secret,
    )
    typer.echo(f"installation={installation.oauth_id} rooms={len(installation.rooms)}")


@app.command()
def record_match(
    room_id: Annotated[str, typer.Option("--room", help="Chat room id the match belongs to.")],
    teams: Annotated[
        list[str],
        typer.Option(
            "--team",
            help="Comma-separated player names of one team. Repeat once per team.",
        ),
    ],
    scores: Annotated[
        str | None,
        typer.Option(
            "--scores",
            help="Comma-separated scores in team order. Omit to record an unscored game.",
        ),
    ] = None,
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Append one match to a room's history."""
    parsed_teams = [_parse_team(team) for team in teams]
    parsed_scores = None if scores is None else _parse_scores(scores)

    config = _load_config(config_path, db_url)
    engine = create_db_engine(config.storage.db_url)
    ensure_schema(engine)

    try:
        match = MatchRepository(create_session_factory(engine)).save_match(
            room_id,
            parsed_teams,
            parsed_scores,
        )
    except InvalidMatch as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(
        f"match_id={match.id} room={match.room_id} "
        f"teams={[list(team) for team in match.teams]} scores={match.scores}"
    )


@app.command()
def leaderboard(
    oauth_id: Annotated[str, typer.Argument(help="OAuth client id of the installation.")],
    room_id: Annotated[str, typer.Argument(help="Chat room id.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Print a room's leaderboard as plain text."""
    config = _load_config(config_path, db_url)
    session_factory = create_session_factory(create_db_engine(config.storage.db_url))

    installation = InstallationRepository(session_factory).find_installation(oauth_id)
    if installation is None:
        raise typer.BadParameter(f"No installation registered for '{oauth_id}'")

    room = installation.get_room(room_id)
    members = {} if room is None else room.members
    matches = MatchRepository(session_factory).fetch_matches(room_id)
    ratings = compute_ratings(members, matches, create_calculator(config.rating))
    typer.echo(build_leaderboard(members, ratings).text)


if __name__ == "__main__":
    app()

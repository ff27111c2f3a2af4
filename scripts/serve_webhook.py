#!/usr/bin/env python3
"""Run the chat-platform webhook with uvicorn."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import uvicorn

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from api import create_app
from domain.config import load_league_config

DEFAULT_CONFIG_PATH = ROOT_DIR / "config" / "league.toml"

app = typer.Typer(
    add_completion=False,
    help="Serve the foosball league webhook.",
)


@app.command()
def serve(
    config_path: Annotated[
        Path,
        typer.Option("--config", help="League TOML config file."),
    ] = DEFAULT_CONFIG_PATH,
    host: Annotated[str, typer.Option("--host", help="Interface to bind.")] = "0.0.0.0",
    port: Annotated[int, typer.Option("--port", help="Port to listen on.")] = 8000,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."),
    ] = "INFO",
) -> None:
    """Load the league config and serve the webhook until interrupted."""
    if port <= 0:
        raise typer.BadParameter("--port must be greater than 0")

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = load_league_config(config_path)
    except (FileNotFoundError, IsADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    typer.echo(f"serving league={config.name} rating_system={config.rating.system.value}")
    uvicorn.run(create_app(config), host=host, port=port, log_level=log_level.lower())


if __name__ == "__main__":
    app()

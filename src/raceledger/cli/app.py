"""Root CLI app - entry point and command registration."""

from pathlib import Path

import typer

from raceledger.config import get_settings
from raceledger.config.settings import configure_logging

app = typer.Typer(
    name="raceledger",
    help="RaceLedger - Bookmaker ledger for races, horses, wagers and settlement.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_dir: Path | None = typer.Option(
        None, "--config-dir", "-C", help="Config directory (default: ./config or package config)"
    ),
    profile: str | None = typer.Option(
        None, "--profile", "-p", help="Config profile (e.g. dev) to overlay on default.toml"
    ),
    db: str | None = typer.Option(None, "--db", help="Ledger database path (overrides config)"),
) -> None:
    """Configure logging and store options in context."""
    settings = get_settings(profile, config_dir)
    configure_logging(settings)
    ctx.obj = {
        "settings": settings,
        "db_path": db or settings.db_path,
        "config_dir": config_dir,
        "profile": profile,
    }


# Subcommands registered from other modules
from raceledger.cli import api_cmd, bets, horses, races, session, summary  # noqa: E402

app.add_typer(races.app, name="races")
app.add_typer(horses.app, name="horses")
app.add_typer(bets.app, name="bets")
app.add_typer(summary.app, name="summary")
app.add_typer(session.app, name="session")
app.add_typer(api_cmd.app, name="api")


def run() -> None:
    app()


if __name__ == "__main__":
    run()

"""Session subcommand: start, end, show."""

from __future__ import annotations

import typer

from raceledger.ledger import open_book

app = typer.Typer(help="Local bookmaker session")


@app.command("start")
def start(
    ctx: typer.Context,
    user: str | None = typer.Option(None, "--user", "-u", help="User id (default from config)"),
) -> None:
    """Start a session for a user."""
    user_id = user or ctx.obj["settings"].default_user
    with open_book(ctx.obj["db_path"]) as book:
        s = book.session.start_session(user_id)
        typer.echo(f"Session started for {s.user_id} at {s.start_time.isoformat()}")


@app.command("end")
def end(ctx: typer.Context) -> None:
    """End the current session."""
    with open_book(ctx.obj["db_path"]) as book:
        book.session.end_session()
        typer.echo("Session ended")


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Show the stored session."""
    with open_book(ctx.obj["db_path"]) as book:
        s = book.session.get_session_data()
        if s is None:
            typer.echo("No active session")
            raise typer.Exit(1)
        typer.echo(f"User: {s.user_id}  Started: {s.start_time.isoformat()}")

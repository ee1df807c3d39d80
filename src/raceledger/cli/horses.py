"""Horses subcommand: add, list, rename, remove."""

from __future__ import annotations

import typer

from raceledger.ledger import open_book

app = typer.Typer(help="Horses entered in races")


@app.command("add")
def add(
    ctx: typer.Context,
    name: str = typer.Option("", "--name", "-n", help="Horse name"),
    race: int | None = typer.Option(None, "--race", "-r", help="Race id (default: current race)"),
) -> None:
    """Add a horse to a race."""
    with open_book(ctx.obj["db_path"]) as book:
        if race is not None and book.races.get(race) is None:
            typer.echo(f"Race not found: {race}")
            raise typer.Exit(1)
        if race is None and book.races.get_current() is None:
            typer.echo("No current race. Add one with 'raceledger races add'.")
            raise typer.Exit(1)
        horse = book.horses.add_horse(race_id=race, name=name)
        typer.echo(f"Added horse {horse.id} to race {horse.race_id}")


@app.command("list")
def list_horses(
    ctx: typer.Context,
    race: int | None = typer.Option(None, "--race", "-r", help="Race id (default: current race)"),
) -> None:
    """List horses in a race."""
    with open_book(ctx.obj["db_path"]) as book:
        race_id = race if race is not None else book.races.get_current()
        horses = book.horses.list_for_race(race_id)
        for horse in horses:
            typer.echo(f"  {horse.id:>4}  {horse.name}")
        typer.echo(f"Total: {len(horses)} horses in race {race_id}")


@app.command("rename")
def rename(
    ctx: typer.Context,
    horse_id: int = typer.Argument(..., help="Horse id"),
    name: str = typer.Argument(..., help="New name"),
) -> None:
    """Rename a horse."""
    with open_book(ctx.obj["db_path"]) as book:
        if book.horses.get(horse_id) is None:
            typer.echo(f"Horse not found: {horse_id}")
            raise typer.Exit(1)
        book.horses.update_name(horse_id, name)
        typer.echo(f"Horse {horse_id} renamed to {name}")


@app.command("remove")
def remove(ctx: typer.Context, horse_id: int = typer.Argument(..., help="Horse id")) -> None:
    """Remove a horse and its bets."""
    with open_book(ctx.obj["db_path"]) as book:
        if book.horses.get(horse_id) is None:
            typer.echo(f"Horse not found: {horse_id}")
            raise typer.Exit(1)
        book.remove_horse(horse_id)
        typer.echo(f"Removed horse {horse_id}")

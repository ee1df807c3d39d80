"""Races subcommand: add, list, use, end, delete, next-id."""

from __future__ import annotations

import typer

from raceledger.ledger import open_book
from raceledger.models import RaceResults

app = typer.Typer(help="Race card management and settlement")


@app.command("add")
def add(
    ctx: typer.Context,
    name: str | None = typer.Option(None, "--name", "-n", help="Race name (default: 'Race <id>')"),
    race_id: int | None = typer.Option(None, "--id", help="Explicit race id"),
) -> None:
    """Add a race. The first race becomes current."""
    with open_book(ctx.obj["db_path"]) as book:
        race = book.races.add_race(race_id=race_id, name=name)
        typer.echo(f"Added race {race.id}: {race.name}")


@app.command("list")
def list_races(ctx: typer.Context) -> None:
    """List races; the current race is marked with '*'."""
    with open_book(ctx.obj["db_path"]) as book:
        current = book.races.get_current()
        races = book.races.all()
        for race in races:
            marker = "*" if race.id == current else " "
            status = "ended" if race.ended else "open"
            typer.echo(f"{marker} {race.id:>4}  {status:<6} {race.name}")
        typer.echo(f"Total: {len(races)} races")


@app.command("next-id")
def next_id(ctx: typer.Context) -> None:
    """Show the id the next race will get."""
    with open_book(ctx.obj["db_path"]) as book:
        typer.echo(str(book.races.next_id()))


@app.command("use")
def use(ctx: typer.Context, race_id: int = typer.Argument(..., help="Race id")) -> None:
    """Make a race current."""
    with open_book(ctx.obj["db_path"]) as book:
        if book.races.get(race_id) is None:
            typer.echo(f"Race not found: {race_id}")
            raise typer.Exit(1)
        book.races.set_current(race_id)
        typer.echo(f"Current race: {race_id}")


@app.command("end")
def end(
    ctx: typer.Context,
    race_id: int = typer.Argument(..., help="Race id"),
    first: int | None = typer.Option(None, "--first", help="Horse id placing 1st"),
    second: int | None = typer.Option(None, "--second", help="Horse id placing 2nd"),
    third: int | None = typer.Option(None, "--third", help="Horse id placing 3rd"),
) -> None:
    """Settle the race's bets against the result and mark it ended."""
    with open_book(ctx.obj["db_path"]) as book:
        if book.races.get(race_id) is None:
            typer.echo(f"Race not found: {race_id}")
            raise typer.Exit(1)
        results = RaceResults(first=first, second=second, third=third)
        settled = book.settle_race(race_id, results)
        winners = [b for b in settled if b.is_winner]
        typer.echo(f"Race {race_id} ended. Settled {len(settled)} bets, {len(winners)} winners.")
        for bet in settled:
            flag = "W" if bet.is_winner else "-"
            typer.echo(
                f"  {flag} {bet.id}  horse {bet.horse_id}  {bet.category.value:<5}  "
                f"{bet.bet_type.value:<6}  {bet.customer or '-':<12}  {bet.payout}"
            )


@app.command("delete")
def delete(ctx: typer.Context, race_id: int = typer.Argument(..., help="Race id")) -> None:
    """Delete a race with its horses and bets."""
    with open_book(ctx.obj["db_path"]) as book:
        if book.races.get(race_id) is None:
            typer.echo(f"Race not found: {race_id}")
            raise typer.Exit(1)
        book.delete_race(race_id)
        typer.echo(f"Deleted race {race_id}. Current race: {book.races.get_current()}")

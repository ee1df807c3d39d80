"""Summary command: stake, tax and payout totals."""

import typer

from raceledger.ledger import open_book

app = typer.Typer(help="Ledger totals")


@app.callback(invoke_without_command=True)
def summary(
    ctx: typer.Context,
    race: int | None = typer.Option(None, "--race", "-r", help="Race id (default: current race)"),
) -> None:
    """Show total stakes, tax and settled payouts for a race."""
    if ctx.invoked_subcommand is not None:
        return
    with open_book(ctx.obj["db_path"]) as book:
        s = book.summary(race)
        typer.echo(f"Race: {s.race_id}")
        typer.echo(f"Bets: {s.bet_count}")
        typer.echo(f"Total bets: {s.total_bets:.2f}")
        typer.echo(f"Total tax: {s.total_tax:.2f}")
        typer.echo(f"Total payout: {s.total_payout:.2f}")

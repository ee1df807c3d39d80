"""Bets subcommand: place, list, edit, remove."""

from __future__ import annotations

import typer

from raceledger.ledger import open_book
from raceledger.models import Bet, BetCategory, BetType

app = typer.Typer(help="Wagers on horses in the current race")


def _is_blank(bet: Bet) -> bool:
    return bet.amount is None and bet.odds is None and not bet.customer and not bet.settled


def _echo_bet(bet: Bet) -> None:
    status = "settled" if bet.settled else "open"
    odds = "" if bet.odds is None else f"{bet.odds:g}"
    amount = "" if bet.amount is None else f"{bet.amount:.2f}"
    typer.echo(
        f"  {bet.id}  horse {bet.horse_id:>3}  {bet.category.value:<5}  {bet.bet_type.value:<6}  "
        f"{bet.customer or '-':<12}  odds {odds:<6}  amount {amount:<8}  payout {bet.payout or '-':<8}  {status}"
    )


@app.command("place")
def place(
    ctx: typer.Context,
    horse: int = typer.Option(..., "--horse", help="Horse id"),
    category: BetCategory = typer.Option(BetCategory.WIN, "--category", "-c", help="win or place"),
    customer: str = typer.Option("", "--customer", help="Customer name"),
    bet_type: BetType = typer.Option(BetType.CASH, "--type", "-t", help="Cash or Credit"),
    odds: str | None = typer.Option(None, "--odds", help="Decimal odds"),
    amount: str | None = typer.Option(None, "--amount", "-a", help="Stake"),
) -> None:
    """Place a bet on a horse in the current race."""
    with open_book(ctx.obj["db_path"]) as book:
        h = book.horses.get(horse)
        if h is None:
            typer.echo(f"Horse not found: {horse}")
            raise typer.Exit(1)
        if h.race_id != book.races.get_current():
            typer.echo(f"Horse {horse} is not in the current race ({book.races.get_current()})")
            raise typer.Exit(1)
        rows = book.bets.rows_for(horse, category)
        blank = next((b for b in rows if _is_blank(b)), None)
        target = blank or book.bets.add(book.bets.create_empty(horse, category))
        bet = book.bets.update(target.id, customer=customer, bet_type=bet_type, odds=odds, amount=amount)
        typer.echo(f"Placed bet {bet.id} (preview payout: {bet.payout or '-'})")


@app.command("list")
def list_bets(
    ctx: typer.Context,
    race: int | None = typer.Option(None, "--race", "-r", help="Race id (default: current race)"),
    horse: int | None = typer.Option(None, "--horse", help="Only bets on this horse"),
) -> None:
    """List bets in a race."""
    with open_book(ctx.obj["db_path"]) as book:
        race_id = race if race is not None else book.races.get_current()
        bets = book.bets.list_for_race(race_id)
        if horse is not None:
            bets = [b for b in bets if b.horse_id == horse]
        for bet in bets:
            _echo_bet(bet)
        typer.echo(f"Total: {len(bets)} bets in race {race_id}")


@app.command("edit")
def edit(
    ctx: typer.Context,
    bet_id: str = typer.Argument(..., help="Bet id"),
    customer: str | None = typer.Option(None, "--customer", help="Customer name"),
    bet_type: BetType | None = typer.Option(None, "--type", "-t", help="Cash or Credit"),
    odds: str | None = typer.Option(None, "--odds", help="Decimal odds"),
    amount: str | None = typer.Option(None, "--amount", "-a", help="Stake"),
) -> None:
    """Edit an unsettled bet; the preview payout is recomputed."""
    with open_book(ctx.obj["db_path"]) as book:
        bet = book.bets.get(bet_id)
        if bet is None:
            typer.echo(f"Bet not found: {bet_id}")
            raise typer.Exit(1)
        if bet.settled:
            typer.echo(f"Bet {bet_id} is already settled")
            raise typer.Exit(1)
        changes = {"customer": customer, "bet_type": bet_type, "odds": odds, "amount": amount}
        bet = book.bets.update(bet_id, **{k: v for k, v in changes.items() if v is not None})
        _echo_bet(bet)


@app.command("remove")
def remove(ctx: typer.Context, bet_id: str = typer.Argument(..., help="Bet id")) -> None:
    """Remove a bet."""
    with open_book(ctx.obj["db_path"]) as book:
        if book.bets.get(bet_id) is None:
            typer.echo(f"Bet not found: {bet_id}")
            raise typer.Exit(1)
        book.bets.remove(bet_id)
        typer.echo(f"Removed bet {bet_id}")

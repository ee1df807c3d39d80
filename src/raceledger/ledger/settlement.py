"""Settlement engine - winner determination and payouts.

Payout table (tax = amount * TAX_RATE):

    Cash   winner  odds * amount + amount   stake returned with winnings
    Cash   loser   0
    Credit winner  odds * amount - tax      tax withheld from winnings
    Credit loser   amount + tax             customer owes stake plus tax

Everything here is pure: inputs are never mutated and settle() returns copies.
"""

from __future__ import annotations

from typing import Any, Iterable

from raceledger.ledger.tax import tax
from raceledger.models.bet import Bet, BetCategory, BetType, RaceResults
from raceledger.numbers import format_amount, parse_number


def is_winner(category: Any, horse_id: int | None, results: RaceResults | None) -> bool:
    """win: horse finished first. place: horse in the first three. Anything else loses."""
    if results is None or horse_id is None:
        return False
    if category == BetCategory.WIN:
        return results.first is not None and horse_id == results.first
    if category == BetCategory.PLACE:
        return horse_id in results.placegetters()
    return False


def compute_payout(odds: Any, amount: Any, bet_type: Any, winner: bool) -> float:
    """Payout for one bet. Non-finite odds, amount or result pays 0."""
    o = parse_number(odds)
    a = parse_number(amount)
    if o is None or a is None:
        return 0.0
    if bet_type == BetType.CREDIT:
        result = o * a - tax(a) if winner else a + tax(a)
    elif bet_type == BetType.CASH:
        result = o * a + a if winner else 0.0
    else:
        return 0.0
    return parse_number(result, 0.0)


def preview_payout(bet: Bet) -> str:
    """Live preview while odds/amount are being edited. Always assumes the bet wins.
    Empty string until both odds and amount are numbers."""
    if parse_number(bet.odds) is None or parse_number(bet.amount) is None:
        return ""
    return format_amount(compute_payout(bet.odds, bet.amount, bet.bet_type, True))


def settlement_payout(bet: Bet, results: RaceResults | None) -> str:
    """Payout against actual results."""
    winner = is_winner(bet.category, bet.horse_id, results)
    return format_amount(compute_payout(bet.odds, bet.amount, bet.bet_type, winner))


def settle(bets: Iterable[Bet], results: RaceResults | None) -> list[Bet]:
    """Resolve bets against results. Reruns with the same results give the same output."""
    settled: list[Bet] = []
    for bet in bets:
        winner = is_winner(bet.category, bet.horse_id, results)
        payout = settlement_payout(bet, results)
        settled.append(bet.model_copy(update={"settled": True, "is_winner": winner, "payout": payout}))
    return settled

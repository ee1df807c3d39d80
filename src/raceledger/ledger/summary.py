"""Ledger totals - derived on demand."""

from __future__ import annotations

from typing import Iterable

from raceledger.ledger.tax import tax
from raceledger.models.bet import Bet
from raceledger.models.session import Summary
from raceledger.numbers import parse_number


def total(bets: Iterable[Bet]) -> float:
    """Sum of stakes; absent amounts count as 0."""
    return sum(parse_number(bet.amount, 0.0) for bet in bets)


def total_payout(bets: Iterable[Bet]) -> float:
    """Sum of payouts over settled bets."""
    return sum(parse_number(bet.payout, 0.0) for bet in bets if bet.settled)


def summarize(bets: Iterable[Bet], race_id: int | None = None) -> Summary:
    bets = list(bets)
    total_bets = total(bets)
    return Summary(
        race_id=race_id,
        bet_count=sum(1 for bet in bets if parse_number(bet.amount) is not None),
        total_bets=total_bets,
        total_tax=tax(total_bets),
        total_payout=total_payout(bets),
    )

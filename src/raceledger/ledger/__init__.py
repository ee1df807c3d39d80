"""Ledger core: registries, settlement engine, tax, summary."""

from raceledger.ledger.bets import BetLedger
from raceledger.ledger.book import Book, open_book
from raceledger.ledger.horses import HorseRegistry
from raceledger.ledger.races import RaceRegistry
from raceledger.ledger.session import SessionManager
from raceledger.ledger.settlement import (
    compute_payout,
    is_winner,
    preview_payout,
    settle,
    settlement_payout,
)
from raceledger.ledger.summary import summarize, total
from raceledger.ledger.tax import TAX_RATE, tax

__all__ = [
    "Book",
    "open_book",
    "RaceRegistry",
    "HorseRegistry",
    "BetLedger",
    "SessionManager",
    "is_winner",
    "compute_payout",
    "preview_payout",
    "settlement_payout",
    "settle",
    "summarize",
    "total",
    "TAX_RATE",
    "tax",
]

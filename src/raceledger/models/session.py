"""Local session stub and derived ledger summary."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import Field

from raceledger.models.base import LedgerModel


class Session(LedgerModel):
    """Single local bookmaker session."""

    user_id: str
    start_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Summary(LedgerModel):
    """Totals over a set of bets. Recomputed on demand, never stored."""

    race_id: int | None = None
    bet_count: int = 0
    total_bets: float = 0.0
    total_tax: float = 0.0
    total_payout: float = 0.0

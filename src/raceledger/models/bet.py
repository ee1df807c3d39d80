"""Bet, categories, payment types and race results."""

from __future__ import annotations

import time
import uuid
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from raceledger.models.base import LedgerModel
from raceledger.numbers import format_amount, parse_number


class BetCategory(str, Enum):
    WIN = "win"
    PLACE = "place"


class BetType(str, Enum):
    CASH = "Cash"
    CREDIT = "Credit"


def new_bet_id() -> str:
    """Millisecond clock plus random hex; collisions are negligible for a single ledger."""
    return f"{int(time.time() * 1000):x}{uuid.uuid4().hex[:8]}"


class Bet(LedgerModel):
    """Wager on one horse in one category. payout/settled/is_winner are written by the ledger only."""

    id: str = Field(default_factory=new_bet_id)
    horse_id: int
    category: BetCategory
    race_id: int | None = None
    customer: str = ""
    bet_type: BetType = Field(BetType.CASH, alias="type")
    odds: float | None = None
    amount: float | None = None
    payout: str = ""
    settled: bool = False
    is_winner: bool = False

    @field_validator("odds", "amount", mode="before")
    @classmethod
    def _absent_if_malformed(cls, v: Any) -> float | None:
        number = parse_number(v)
        if number is None or number < 0:
            return None
        return number

    @field_validator("customer", mode="before")
    @classmethod
    def _blank_customer(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("payout", mode="before")
    @classmethod
    def _payout_string(cls, v: Any) -> str:
        if v is None or v == "":
            return ""
        number = parse_number(v)
        return format_amount(number) if number is not None else ""


class RaceResults(LedgerModel):
    """Horse ids placing 1st, 2nd and 3rd. Duplicates are tolerated."""

    first: int | None = None
    second: int | None = None
    third: int | None = None

    def placegetters(self) -> set[int]:
        return {h for h in (self.first, self.second, self.third) if h is not None}

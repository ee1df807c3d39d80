"""Bet ledger - wagers scoped to (race, horse, category). Sole writer of settlement fields."""

from __future__ import annotations

from typing import Any, Callable

import structlog
from pydantic import ValidationError

from raceledger.ledger.settlement import preview_payout, settle
from raceledger.ledger.snapshot import load_models, save_models
from raceledger.models.bet import Bet, BetCategory, RaceResults
from raceledger.storage.gateway import StorageGateway
from raceledger.storage.keys import BETS_KEY

log = structlog.get_logger(__name__)

# Fields a bettor may edit before settlement
EDITABLE_FIELDS = ("customer", "bet_type", "odds", "amount")


class BetLedger:
    """Bets in insertion order. current_race scopes new placeholders and row lookups."""

    def __init__(self, gateway: StorageGateway, current_race: Callable[[], int | None]) -> None:
        self.gateway = gateway
        self.current_race = current_race
        self._bets: list[Bet] = []

    def load(self) -> None:
        self._bets = load_models(self.gateway, BETS_KEY, Bet)

    def _save(self) -> None:
        save_models(self.gateway, BETS_KEY, self._bets)

    def all(self) -> list[Bet]:
        return list(self._bets)

    def get(self, bet_id: str) -> Bet | None:
        for bet in self._bets:
            if bet.id == bet_id:
                return bet
        return None

    def create_empty(self, horse_id: int, category: BetCategory | str) -> Bet:
        """Blank placeholder row for the current race. Not added to the ledger."""
        return Bet(horse_id=horse_id, category=category, race_id=self.current_race())

    def add(self, bet: Bet) -> Bet:
        self._bets.append(bet)
        self._save()
        log.debug("bet_added", bet_id=bet.id, horse_id=bet.horse_id, race_id=bet.race_id)
        return bet

    def remove(self, bet_id: str) -> None:
        if self.get(bet_id) is None:
            return
        self._bets = [b for b in self._bets if b.id != bet_id]
        self._save()
        log.debug("bet_removed", bet_id=bet_id)

    def update(self, bet_id: str, **fields: Any) -> Bet | None:
        """Edit customer/type/odds/amount and refresh the preview payout.

        Settled bets are returned unchanged: their payout belongs to the settlement.
        """
        bet = self.get(bet_id)
        if bet is None:
            return None
        if bet.settled:
            log.warning("bet_update_settled", bet_id=bet_id, fields=sorted(fields))
            return bet
        for name, value in fields.items():
            if name == "type":
                name = "bet_type"
            if name not in EDITABLE_FIELDS:
                continue
            try:
                setattr(bet, name, value)
            except ValidationError as e:
                log.warning("bet_field_rejected", bet_id=bet_id, field=name, error=str(e))
        bet.payout = preview_payout(bet)
        self._save()
        return bet

    def recompute_preview(self, bet_id: str) -> str:
        """Store the assume-it-wins payout on the bet. Empty string until odds and amount are set."""
        bet = self.get(bet_id)
        if bet is None:
            return ""
        bet.payout = preview_payout(bet)
        self._save()
        return bet.payout

    def list_for_horse_category(
        self, horse_id: int, category: BetCategory | str, race_id: int | None
    ) -> list[Bet]:
        return [
            b
            for b in self._bets
            if b.horse_id == horse_id and b.category == category and b.race_id == race_id
        ]

    def rows_for(self, horse_id: int, category: BetCategory | str) -> list[Bet]:
        """Bets of the current race for (horse, category); adds a placeholder when there are none."""
        rows = self.list_for_horse_category(horse_id, category, self.current_race())
        if rows:
            return rows
        return [self.add(self.create_empty(horse_id, category))]

    def list_for_race(self, race_id: int | None) -> list[Bet]:
        return [b for b in self._bets if b.race_id == race_id]

    def remove_for_race(self, race_id: int) -> None:
        self._remove_where(lambda b: b.race_id == race_id, race_id=race_id)

    def remove_for_horse(self, horse_id: int) -> None:
        self._remove_where(lambda b: b.horse_id == horse_id, horse_id=horse_id)

    def _remove_where(self, predicate: Callable[[Bet], bool], **context: Any) -> None:
        before = len(self._bets)
        self._bets = [b for b in self._bets if not predicate(b)]
        if len(self._bets) != before:
            self._save()
            log.info("bets_removed", count=before - len(self._bets), **context)

    def apply_settlement(self, race_id: int, results: RaceResults | None) -> list[Bet]:
        """Settle the race's bets and write outcomes back. Reruns overwrite earlier outcomes."""
        outcome = {b.id: b for b in settle(self.list_for_race(race_id), results)}
        if not outcome:
            return []
        self._bets = [outcome.get(b.id, b) for b in self._bets]
        self._save()
        winners = sum(1 for b in outcome.values() if b.is_winner)
        log.info("race_settled", race_id=race_id, bets=len(outcome), winners=winners)
        return list(outcome.values())

    def backfill_race_ids(self, horse_race: Callable[[int], int | None]) -> int:
        """One-time migration: legacy bets without a race take their horse's race. Returns count."""
        count = 0
        for bet in self._bets:
            if bet.race_id is None:
                race_id = horse_race(bet.horse_id)
                if race_id is not None:
                    bet.race_id = race_id
                    count += 1
        if count:
            self._save()
            log.info("bets_backfilled", count=count)
        return count

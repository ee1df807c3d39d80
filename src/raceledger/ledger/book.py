"""Book - one ledger session: registries over a single gateway, plus cross-registry operations."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import structlog

from raceledger.ledger.bets import BetLedger
from raceledger.ledger.horses import HorseRegistry
from raceledger.ledger.races import RaceRegistry
from raceledger.ledger.session import SessionManager
from raceledger.ledger.summary import summarize
from raceledger.models.bet import Bet, RaceResults
from raceledger.models.session import Summary
from raceledger.storage.db import get_connection, init_schema
from raceledger.storage.gateway import DuckDBGateway, StorageGateway

log = structlog.get_logger(__name__)


class Book:
    """Owns the race, horse and bet registries for one session.

    Cascades live here rather than in the registries: deleting a race removes its
    bets and horses first, removing a horse removes its bets.
    """

    def __init__(self, gateway: StorageGateway) -> None:
        self.gateway = gateway
        self.races = RaceRegistry(gateway)
        self.horses = HorseRegistry(gateway, current_race=self.races.get_current)
        self.bets = BetLedger(gateway, current_race=self.races.get_current)
        self.session = SessionManager(gateway)

    def load(self) -> Book:
        """Rebuild state from the latest snapshot, then migrate legacy records."""
        self.races.load()
        self.horses.load()
        self.bets.load()
        self.migrate()
        return self

    def migrate(self) -> None:
        """Backfill race ids missing from legacy horses and bets."""
        self.horses.backfill_race_ids(self.races.get_current())
        self.bets.backfill_race_ids(self._race_of_horse)

    def _race_of_horse(self, horse_id: int) -> int | None:
        horse = self.horses.get(horse_id)
        return horse.race_id if horse else None

    def delete_race(self, race_id: int) -> None:
        self.bets.remove_for_race(race_id)
        self.horses.remove_for_race(race_id)
        self.races.delete_race(race_id)

    def remove_horse(self, horse_id: int) -> None:
        self.bets.remove_for_horse(horse_id)
        self.horses.remove(horse_id)

    def settle_race(self, race_id: int, results: RaceResults | None) -> list[Bet]:
        """Settle every bet of the race against results and mark the race ended."""
        if self.races.get(race_id) is None:
            return []
        settled = self.bets.apply_settlement(race_id, results)
        self.races.end_race(race_id)
        return settled

    def summary(self, race_id: int | None = None) -> Summary:
        """Totals for the given race, defaulting to the current race."""
        if race_id is None:
            race_id = self.races.get_current()
        return summarize(self.bets.list_for_race(race_id), race_id=race_id)


@contextmanager
def open_book(db_path: str | Path) -> Iterator[Book]:
    """Open a DuckDB-backed Book; the connection is closed on exit."""
    conn = get_connection(db_path)
    init_schema(conn)
    try:
        yield Book(DuckDBGateway(conn)).load()
    finally:
        conn.close()

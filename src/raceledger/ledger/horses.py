"""Horse registry - horses scoped to a race."""

from __future__ import annotations

from typing import Callable

import structlog

from raceledger.ledger.snapshot import load_models, save_models
from raceledger.models.race import Horse
from raceledger.storage.gateway import StorageGateway
from raceledger.storage.keys import HORSES_KEY, LAST_HORSE_ID_KEY

log = structlog.get_logger(__name__)


class HorseRegistry:
    """Horses in insertion order. current_race supplies the default race for new horses.

    Ids only grow: the highest id ever issued is persisted, so removing the newest
    horse does not hand its id (and any orphaned bets) to the next one.
    """

    def __init__(self, gateway: StorageGateway, current_race: Callable[[], int | None]) -> None:
        self.gateway = gateway
        self.current_race = current_race
        self._horses: list[Horse] = []
        self._last_id = 0

    def load(self) -> None:
        self._horses = load_models(self.gateway, HORSES_KEY, Horse)
        stored = self.gateway.get(LAST_HORSE_ID_KEY)
        self._last_id = stored if isinstance(stored, int) and not isinstance(stored, bool) else 0

    def _save(self) -> None:
        save_models(self.gateway, HORSES_KEY, self._horses)
        self.gateway.put(LAST_HORSE_ID_KEY, self._last_id)

    def next_id(self) -> int:
        return max(self._last_id, max((h.id for h in self._horses), default=0)) + 1

    def all(self) -> list[Horse]:
        return list(self._horses)

    def get(self, horse_id: int | None) -> Horse | None:
        for horse in self._horses:
            if horse.id == horse_id:
                return horse
        return None

    def add_horse(self, race_id: int | None = None, name: str = "") -> Horse:
        if race_id is None:
            race_id = self.current_race()
        horse = Horse(id=self.next_id(), race_id=race_id, name=name)
        self._horses.append(horse)
        self._last_id = horse.id
        self._save()
        log.info("horse_added", horse_id=horse.id, race_id=race_id)
        return horse

    def update_name(self, horse_id: int, name: str) -> None:
        horse = self.get(horse_id)
        if horse is None:
            return
        horse.name = name
        self._save()

    def remove(self, horse_id: int) -> None:
        if self.get(horse_id) is None:
            return
        self._horses = [h for h in self._horses if h.id != horse_id]
        self._save()
        log.info("horse_removed", horse_id=horse_id)

    def list_for_race(self, race_id: int | None) -> list[Horse]:
        return [h for h in self._horses if h.race_id == race_id]

    def remove_for_race(self, race_id: int) -> None:
        before = len(self._horses)
        self._horses = [h for h in self._horses if h.race_id != race_id]
        if len(self._horses) != before:
            self._save()
            log.info("horses_removed_for_race", race_id=race_id, count=before - len(self._horses))

    def backfill_race_ids(self, race_id: int | None) -> int:
        """One-time migration: give legacy horses without a race the given race. Returns count."""
        if race_id is None:
            return 0
        count = 0
        for horse in self._horses:
            if horse.race_id is None:
                horse.race_id = race_id
                count += 1
        if count:
            self._save()
            log.info("horses_backfilled", race_id=race_id, count=count)
        return count

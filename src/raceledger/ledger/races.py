"""Race registry - owns races and the current-race pointer."""

from __future__ import annotations

import structlog

from raceledger.ledger.snapshot import load_models, save_models
from raceledger.models.race import Race
from raceledger.storage.gateway import StorageGateway
from raceledger.storage.keys import CURRENT_RACE_KEY, RACES_KEY

log = structlog.get_logger(__name__)


class RaceRegistry:
    """Races in insertion order. Unknown ids are no-ops, never errors; the store may be stale."""

    def __init__(self, gateway: StorageGateway) -> None:
        self.gateway = gateway
        self._races: list[Race] = []
        self._current_id: int | None = None

    def load(self) -> None:
        self._races = load_models(self.gateway, RACES_KEY, Race)
        stored = self.gateway.get(CURRENT_RACE_KEY)
        if isinstance(stored, int) and not isinstance(stored, bool) and self.get(stored) is not None:
            self._current_id = stored
        else:
            self._current_id = self._races[0].id if self._races else None

    def _save(self) -> None:
        save_models(self.gateway, RACES_KEY, self._races)
        self.gateway.put(CURRENT_RACE_KEY, self._current_id)

    def next_id(self) -> int:
        return max((r.id for r in self._races), default=0) + 1

    def all(self) -> list[Race]:
        return list(self._races)

    def get(self, race_id: int | None) -> Race | None:
        for race in self._races:
            if race.id == race_id:
                return race
        return None

    def add_race(self, race_id: int | None = None, name: str | None = None, ended: bool = False) -> Race:
        """Create a race. The first race added while nothing is current becomes current."""
        if race_id is None:
            race_id = self.next_id()
        existing = self.get(race_id)
        if existing is not None:
            log.warning("race_id_taken", race_id=race_id)
            return existing
        race = Race(id=race_id, name=name or "", ended=ended)
        self._races.append(race)
        if self._current_id is None:
            self._current_id = race.id
        self._save()
        log.info("race_added", race_id=race.id, name=race.name)
        return race

    def end_race(self, race_id: int) -> None:
        race = self.get(race_id)
        if race is None:
            return
        race.ended = True
        self._save()
        log.info("race_ended", race_id=race_id)

    def delete_race(self, race_id: int) -> None:
        """Remove a race. Does not touch its horses or bets; see Book.delete_race."""
        if self.get(race_id) is None:
            return
        self._races = [r for r in self._races if r.id != race_id]
        if self._current_id == race_id:
            self._current_id = self._races[0].id if self._races else None
        self._save()
        log.info("race_deleted", race_id=race_id, current=self._current_id)

    def set_current(self, race_id: int) -> None:
        if self.get(race_id) is None:
            log.debug("set_current_unknown_race", race_id=race_id)
            return
        self._current_id = race_id
        self.gateway.put(CURRENT_RACE_KEY, race_id)

    def get_current(self) -> int | None:
        return self._current_id

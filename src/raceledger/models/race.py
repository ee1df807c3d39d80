"""Race and Horse - the scopes every wager hangs off."""

from __future__ import annotations

from typing import Any

from pydantic import model_validator

from raceledger.models.base import LedgerModel


class Race(LedgerModel):
    """A race on the card. Ended once its bets have been settled."""

    id: int
    name: str = ""
    ended: bool = False

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            data = dict(data)
            data["name"] = f"Race {data.get('id')}"
        return data


class Horse(LedgerModel):
    """Runner in exactly one race. race_id is None only for legacy records awaiting migration."""

    id: int
    race_id: int | None = None
    name: str = ""

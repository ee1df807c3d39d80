"""Read and write whole-collection snapshots through the gateway."""

from __future__ import annotations

from typing import Iterable, TypeVar

import structlog
from pydantic import ValidationError

from raceledger.models.base import LedgerModel
from raceledger.storage.gateway import StorageGateway

log = structlog.get_logger(__name__)

M = TypeVar("M", bound=LedgerModel)


def load_models(gateway: StorageGateway, key: str, model: type[M]) -> list[M]:
    """Load a list snapshot. Missing, non-list or corrupt data reads as empty; bad rows are skipped."""
    raw = gateway.get(key)
    if not isinstance(raw, list):
        return []
    out: list[M] = []
    for row in raw:
        try:
            out.append(model.model_validate(row))
        except ValidationError as e:
            log.warning("skip_record", key=key, error=str(e))
    return out


def save_models(gateway: StorageGateway, key: str, items: Iterable[LedgerModel]) -> None:
    gateway.put(key, [item.to_json_dict() for item in items])

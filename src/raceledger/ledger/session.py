"""Local session stub - one bookmaker per ledger, no networking."""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from raceledger.models.session import Session
from raceledger.storage.gateway import StorageGateway
from raceledger.storage.keys import SESSION_KEY

log = structlog.get_logger(__name__)


class SessionManager:
    def __init__(self, gateway: StorageGateway) -> None:
        self.gateway = gateway
        self.current: Session | None = None

    def start_session(self, user_id: str) -> Session:
        self.current = Session(user_id=user_id)
        self.gateway.put(SESSION_KEY, self.current.to_json_dict())
        log.info("session_started", user_id=user_id)
        return self.current

    def end_session(self) -> None:
        self.current = None
        self.gateway.delete(SESSION_KEY)
        log.info("session_ended")

    def get_session_data(self) -> Session | None:
        """Persisted session, or None when absent or unreadable."""
        raw = self.gateway.get(SESSION_KEY)
        if raw is None:
            return None
        try:
            return Session.model_validate(raw)
        except ValidationError as e:
            log.warning("session_unreadable", error=str(e))
            return None

"""Pydantic schemas for API request/response consistency and OpenAPI docs."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from raceledger.models import Bet, BetCategory, BetType, Horse, Race


# --- Health ---
class HealthResponse(BaseModel):
    status: str = "ok"


# --- Error (consistent shape for 4xx/5xx) ---
class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Human-readable message")
    code: str | None = Field(None, description="Machine-readable code, e.g. not_found")


# --- Races ---
class RaceCreate(BaseModel):
    id: int | None = Field(None, description="Explicit id; default max(id) + 1")
    name: str | None = None


class RacesListResponse(BaseModel):
    races: list[Race]
    current_race_id: int | None
    total: int


# --- Horses ---
class HorseCreate(BaseModel):
    name: str = ""


class HorseRename(BaseModel):
    name: str


class HorsesListResponse(BaseModel):
    race_id: int
    horses: list[Horse]
    total: int


# --- Bets ---
class BetCreate(BaseModel):
    horse_id: int
    category: BetCategory = BetCategory.WIN
    customer: str = ""
    type: BetType = BetType.CASH
    odds: Any = Field(None, description="Decimal odds; malformed values are stored as absent")
    amount: Any = Field(None, description="Stake; malformed values are stored as absent")


class BetUpdate(BaseModel):
    customer: str | None = None
    type: BetType | None = None
    odds: Any = None
    amount: Any = None


class BetsListResponse(BaseModel):
    race_id: int | None
    bets: list[Bet]
    total: int


class SettleResponse(BaseModel):
    race_id: int
    settled: list[Bet]
    winners: int

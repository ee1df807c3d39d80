"""Canonical schema (Pydantic) - Race, Horse, Bet, results, session, summary."""

from raceledger.models.bet import Bet, BetCategory, BetType, RaceResults
from raceledger.models.race import Horse, Race
from raceledger.models.session import Session, Summary

__all__ = [
    "Race",
    "Horse",
    "Bet",
    "BetCategory",
    "BetType",
    "RaceResults",
    "Session",
    "Summary",
]

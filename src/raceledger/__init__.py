"""raceledger - bookmaker race ledger: races, horses, wagers, settlement."""

__version__ = "0.1.0"

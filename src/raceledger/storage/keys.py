"""Snapshot keys. Values match the browser-era storage keys so older exports stay readable."""

SESSION_KEY = "currentSession"
RACES_KEY = "races"
HORSES_KEY = "horses"
BETS_KEY = "bets"
CURRENT_RACE_KEY = "currentRaceId"
# Highest horse id ever issued; ids of removed horses are not reused
LAST_HORSE_ID_KEY = "lastHorseId"

ALL_KEYS = (SESSION_KEY, RACES_KEY, HORSES_KEY, BETS_KEY, CURRENT_RACE_KEY, LAST_HORSE_ID_KEY)

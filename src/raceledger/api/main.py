"""FastAPI backend for a local ledger dashboard."""

from __future__ import annotations

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from raceledger.api.schemas import (
    BetCreate,
    BetsListResponse,
    BetUpdate,
    ErrorResponse,
    HealthResponse,
    HorseCreate,
    HorseRename,
    HorsesListResponse,
    RaceCreate,
    RacesListResponse,
    SettleResponse,
)
from raceledger.config import get_settings
from raceledger.ledger import open_book
from raceledger.models import Bet, Horse, Race, RaceResults, Summary

# Set by run_api(); tests may point _db_path at a temporary database.
_db_path: str | None = None
_config_profile: str | None = None

NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}


def _get_db_path() -> str:
    if _db_path:
        return _db_path
    return get_settings(_config_profile).db_path


app = FastAPI(title="RaceLedger API", version="0.1.0")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


def _error_json(code: str, message: str, status_code: int = 404) -> JSONResponse:
    """Return consistent error JSON: { detail, code }."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code},
    )


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok")


@app.get("/races", response_model=RacesListResponse)
def races_list() -> RacesListResponse:
    with open_book(_get_db_path()) as book:
        races = book.races.all()
        return RacesListResponse(races=races, current_race_id=book.races.get_current(), total=len(races))


@app.post("/races", response_model=Race, status_code=201)
def races_add(body: RaceCreate) -> Race:
    with open_book(_get_db_path()) as book:
        return book.races.add_race(race_id=body.id, name=body.name)


@app.post("/races/{race_id}/current", response_model=RacesListResponse, responses=NOT_FOUND)
def races_set_current(race_id: int):
    with open_book(_get_db_path()) as book:
        if book.races.get(race_id) is None:
            return _error_json("not_found", f"Race not found: {race_id}")
        book.races.set_current(race_id)
        races = book.races.all()
        return RacesListResponse(races=races, current_race_id=book.races.get_current(), total=len(races))


@app.post("/races/{race_id}/settle", response_model=SettleResponse, responses=NOT_FOUND)
def races_settle(race_id: int, results: RaceResults):
    """Settle all bets of the race against the result and mark it ended."""
    with open_book(_get_db_path()) as book:
        if book.races.get(race_id) is None:
            return _error_json("not_found", f"Race not found: {race_id}")
        settled = book.settle_race(race_id, results)
        return SettleResponse(
            race_id=race_id,
            settled=settled,
            winners=sum(1 for b in settled if b.is_winner),
        )


@app.delete("/races/{race_id}", status_code=204, responses=NOT_FOUND)
def races_delete(race_id: int):
    """Delete a race together with its horses and bets."""
    with open_book(_get_db_path()) as book:
        if book.races.get(race_id) is None:
            return _error_json("not_found", f"Race not found: {race_id}")
        book.delete_race(race_id)
    return None


@app.get("/races/{race_id}/horses", response_model=HorsesListResponse)
def horses_list(race_id: int) -> HorsesListResponse:
    with open_book(_get_db_path()) as book:
        horses = book.horses.list_for_race(race_id)
        return HorsesListResponse(race_id=race_id, horses=horses, total=len(horses))


@app.post("/races/{race_id}/horses", response_model=Horse, status_code=201, responses=NOT_FOUND)
def horses_add(race_id: int, body: HorseCreate):
    with open_book(_get_db_path()) as book:
        if book.races.get(race_id) is None:
            return _error_json("not_found", f"Race not found: {race_id}")
        return book.horses.add_horse(race_id=race_id, name=body.name)


@app.patch("/horses/{horse_id}", response_model=Horse, responses=NOT_FOUND)
def horses_rename(horse_id: int, body: HorseRename):
    with open_book(_get_db_path()) as book:
        if book.horses.get(horse_id) is None:
            return _error_json("not_found", f"Horse not found: {horse_id}")
        book.horses.update_name(horse_id, body.name)
        return book.horses.get(horse_id)


@app.delete("/horses/{horse_id}", status_code=204, responses=NOT_FOUND)
def horses_remove(horse_id: int):
    """Remove a horse and its bets."""
    with open_book(_get_db_path()) as book:
        if book.horses.get(horse_id) is None:
            return _error_json("not_found", f"Horse not found: {horse_id}")
        book.remove_horse(horse_id)
    return None


@app.get("/bets", response_model=BetsListResponse)
def bets_list(race_id: int | None = Query(None, description="Race id (default: current race)")) -> BetsListResponse:
    with open_book(_get_db_path()) as book:
        if race_id is None:
            race_id = book.races.get_current()
        bets = book.bets.list_for_race(race_id)
        return BetsListResponse(race_id=race_id, bets=bets, total=len(bets))


@app.get("/horses/{horse_id}/rows/{category}", response_model=list[Bet], responses=NOT_FOUND)
def bets_rows(horse_id: int, category: str):
    """Bet rows for a horse/category in the current race; a blank row is created when there are none."""
    with open_book(_get_db_path()) as book:
        if book.horses.get(horse_id) is None:
            return _error_json("not_found", f"Horse not found: {horse_id}")
        if category not in ("win", "place"):
            return _error_json("bad_category", f"Unknown category: {category}", status_code=400)
        return book.bets.rows_for(horse_id, category)


@app.post("/bets", response_model=Bet, status_code=201, responses=NOT_FOUND)
def bets_place(body: BetCreate):
    """Place a bet on a horse in the current race. payout holds the assume-it-wins preview."""
    with open_book(_get_db_path()) as book:
        if book.horses.get(body.horse_id) is None:
            return _error_json("not_found", f"Horse not found: {body.horse_id}")
        if book.horses.get(body.horse_id).race_id != book.races.get_current():
            return _error_json("not_current_race", f"Horse {body.horse_id} is not in the current race", status_code=400)
        bet = book.bets.add(book.bets.create_empty(body.horse_id, body.category))
        return book.bets.update(
            bet.id, customer=body.customer, bet_type=body.type, odds=body.odds, amount=body.amount
        )


@app.patch("/bets/{bet_id}", response_model=Bet, responses={**NOT_FOUND, 409: {"description": "Bet already settled", "model": ErrorResponse}})
def bets_edit(bet_id: str, body: BetUpdate):
    with open_book(_get_db_path()) as book:
        bet = book.bets.get(bet_id)
        if bet is None:
            return _error_json("not_found", f"Bet not found: {bet_id}")
        if bet.settled:
            return _error_json("settled", f"Bet already settled: {bet_id}", status_code=409)
        return book.bets.update(bet_id, **body.model_dump(exclude_unset=True))


@app.delete("/bets/{bet_id}", status_code=204, responses=NOT_FOUND)
def bets_remove(bet_id: str):
    with open_book(_get_db_path()) as book:
        if book.bets.get(bet_id) is None:
            return _error_json("not_found", f"Bet not found: {bet_id}")
        book.bets.remove(bet_id)
    return None


@app.get("/summary", response_model=Summary)
def summary(race_id: int | None = Query(None, description="Race id (default: current race)")) -> Summary:
    with open_book(_get_db_path()) as book:
        return book.summary(race_id)


def run_api(
    host: str = "127.0.0.1",
    port: int = 8000,
    db_path: str | None = None,
    profile: str | None = None,
) -> None:
    global _db_path, _config_profile
    _db_path = db_path
    _config_profile = profile
    import uvicorn
    uvicorn.run(app, host=host, port=port, reload=False)

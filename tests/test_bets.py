"""Bet ledger: placeholders, scoping, edits with preview payout, settlement write-back."""

import math

from raceledger.ledger import BetLedger
from raceledger.models import Bet, BetCategory, BetType, RaceResults
from raceledger.storage.keys import BETS_KEY


class _Current:
    def __init__(self, race_id):
        self.race_id = race_id

    def __call__(self):
        return self.race_id


def _ledger(gateway, race_id=1):
    current = _Current(race_id)
    return BetLedger(gateway, current_race=current), current


def test_create_empty_is_blank_and_scoped(gateway):
    ledger, _ = _ledger(gateway, race_id=4)
    bet = ledger.create_empty(2, "place")
    assert bet.race_id == 4
    assert bet.horse_id == 2
    assert bet.category == BetCategory.PLACE
    assert bet.customer == ""
    assert bet.odds is None and bet.amount is None
    assert bet.payout == ""
    assert not bet.settled and not bet.is_winner
    assert ledger.all() == []


def test_bet_ids_are_unique(gateway):
    ledger, _ = _ledger(gateway)
    ids = {ledger.create_empty(1, "win").id for _ in range(200)}
    assert len(ids) == 200


def test_list_for_horse_category_never_crosses_races(gateway):
    ledger, current = _ledger(gateway)
    ledger.add(ledger.create_empty(1, "win"))
    current.race_id = 2
    ledger.add(ledger.create_empty(1, "win"))
    ledger.add(ledger.create_empty(1, "place"))
    assert [b.race_id for b in ledger.list_for_horse_category(1, "win", 1)] == [1]
    assert [b.race_id for b in ledger.list_for_horse_category(1, "win", 2)] == [2]
    assert ledger.list_for_horse_category(1, "place", 1) == []


def test_rows_for_synthesizes_placeholder_once(gateway):
    ledger, _ = _ledger(gateway)
    rows = ledger.rows_for(3, "win")
    assert len(rows) == 1
    again = ledger.rows_for(3, "win")
    assert [b.id for b in again] == [rows[0].id]
    assert len(ledger.all()) == 1


def test_update_recomputes_preview(gateway):
    ledger, _ = _ledger(gateway)
    bet = ledger.add(ledger.create_empty(1, "win"))
    ledger.update(bet.id, customer="Kim", odds="2.5")
    assert ledger.get(bet.id).payout == ""
    ledger.update(bet.id, amount="10")
    assert ledger.get(bet.id).payout == "35.00"
    ledger.update(bet.id, type="Credit")
    assert ledger.get(bet.id).bet_type == BetType.CREDIT
    assert ledger.get(bet.id).payout == "23.50"
    assert gateway.get(BETS_KEY)[0]["payout"] == "23.50"


def test_update_malformed_values_are_absent(gateway):
    ledger, _ = _ledger(gateway)
    bet = ledger.add(ledger.create_empty(1, "win"))
    ledger.update(bet.id, odds="abc", amount=float("nan"))
    stored = ledger.get(bet.id)
    assert stored.odds is None and stored.amount is None
    assert stored.payout == ""
    ledger.update(bet.id, amount=-5)
    assert ledger.get(bet.id).amount is None


def test_update_oversized_int_is_absent(gateway):
    ledger, _ = _ledger(gateway)
    bet = ledger.add(ledger.create_empty(1, "win"))
    ledger.update(bet.id, odds=2, amount=10**400)
    stored = ledger.get(bet.id)
    assert stored.odds == 2.0 and stored.amount is None
    assert stored.payout == ""
    assert gateway.get(BETS_KEY)[0]["amount"] is None


def test_update_leaves_settled_bet_alone(gateway):
    ledger, _ = _ledger(gateway)
    bet = ledger.add(Bet(horse_id=1, category="win", race_id=1, odds=2.5, amount=10))
    ledger.apply_settlement(1, RaceResults(first=1))
    ledger.update(bet.id, odds=9, amount=100, customer="Late")
    stored = ledger.get(bet.id)
    assert (stored.odds, stored.amount, stored.customer) == (2.5, 10.0, "")
    assert stored.payout == "35.00" and stored.settled
    assert gateway.get(BETS_KEY)[0]["payout"] == "35.00"


def test_update_rejects_bad_type_and_ignores_settlement_fields(gateway):
    ledger, _ = _ledger(gateway)
    bet = ledger.add(ledger.create_empty(1, "win"))
    ledger.update(bet.id, bet_type="Barter", settled=True, is_winner=True, payout="999")
    stored = ledger.get(bet.id)
    assert stored.bet_type == BetType.CASH
    assert not stored.settled and not stored.is_winner


def test_update_unknown_bet(gateway):
    ledger, _ = _ledger(gateway)
    assert ledger.update("missing", odds=2) is None
    assert ledger.recompute_preview("missing") == ""


def test_recompute_preview(gateway):
    ledger, _ = _ledger(gateway)
    bet = ledger.add(Bet(horse_id=1, category="win", race_id=1, odds=3, amount=20, type="Credit"))
    assert ledger.recompute_preview(bet.id) == "57.00"
    assert ledger.get(bet.id).payout == "57.00"


def test_remove_variants(gateway):
    ledger, current = _ledger(gateway)
    a = ledger.add(ledger.create_empty(1, "win"))
    ledger.add(ledger.create_empty(2, "win"))
    current.race_id = 2
    ledger.add(ledger.create_empty(1, "place"))
    ledger.remove(a.id)
    ledger.remove(a.id)
    assert len(ledger.all()) == 2
    ledger.remove_for_horse(2)
    assert [b.race_id for b in ledger.all()] == [2]
    ledger.remove_for_race(2)
    assert ledger.all() == []


def test_apply_settlement_only_touches_race(gateway):
    ledger, current = _ledger(gateway)
    win = ledger.add(Bet(horse_id=1, category="win", race_id=1, odds=2.5, amount=10))
    lose = ledger.add(Bet(horse_id=2, category="win", race_id=1, odds=4, amount=10, type="Credit"))
    other = ledger.add(Bet(horse_id=1, category="win", race_id=2, odds=2, amount=5))
    settled = ledger.apply_settlement(1, RaceResults(first=1, second=2, third=3))
    assert {b.id for b in settled} == {win.id, lose.id}
    assert ledger.get(win.id).payout == "35.00" and ledger.get(win.id).is_winner
    assert ledger.get(lose.id).payout == "11.50" and not ledger.get(lose.id).is_winner
    assert not ledger.get(other.id).settled
    assert [b["id"] for b in gateway.get(BETS_KEY)] == [win.id, lose.id, other.id]
    assert gateway.get(BETS_KEY)[0]["isWinner"] is True


def test_apply_settlement_twice_overwrites(gateway):
    ledger, _ = _ledger(gateway)
    bet = ledger.add(Bet(horse_id=1, category="place", race_id=1, odds=2, amount=10))
    ledger.apply_settlement(1, RaceResults(first=1))
    ledger.apply_settlement(1, RaceResults(first=1))
    assert ledger.get(bet.id).payout == "30.00"
    ledger.apply_settlement(1, RaceResults(first=9, second=8, third=7))
    assert ledger.get(bet.id).payout == "0.00"
    assert not ledger.get(bet.id).is_winner


def test_no_nan_reaches_storage(gateway):
    ledger, _ = _ledger(gateway)
    ledger.add(Bet(horse_id=1, category="win", race_id=1, odds=float("nan"), amount=float("inf")))
    ledger.apply_settlement(1, RaceResults(first=1))
    stored = gateway.get(BETS_KEY)[0]
    assert stored["odds"] is None and stored["amount"] is None
    assert stored["payout"] == "0.00"
    assert not math.isnan(float(stored["payout"]))


def test_overflowing_payout_stores_zero(gateway):
    ledger, _ = _ledger(gateway)
    ledger.add(Bet(horse_id=1, category="win", race_id=1, odds=1e300, amount=1e300))
    ledger.apply_settlement(1, RaceResults(first=1))
    stored = gateway.get(BETS_KEY)[0]
    assert stored["payout"] == "0.00"
    assert stored["isWinner"] is True


def test_backfill_bets_from_horse_race(gateway):
    gateway.put(BETS_KEY, [{"id": "x1", "horseId": 7, "category": "win"}, {"id": "x2", "horseId": 8, "category": "win"}])
    ledger, _ = _ledger(gateway)
    ledger.load()
    assert ledger.backfill_race_ids(lambda horse_id: 3 if horse_id == 7 else None) == 1
    assert ledger.get("x1").race_id == 3
    assert ledger.get("x2").race_id is None

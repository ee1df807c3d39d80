"""Tax policy and totals."""

import pytest

from raceledger.ledger import TAX_RATE, summarize, tax, total
from raceledger.models import Bet
from raceledger.numbers import format_amount, parse_number


def test_tax_rate():
    assert TAX_RATE == 0.15
    assert tax(100) == pytest.approx(15.0)
    assert tax(0) == 0


def test_parse_number():
    assert parse_number("2.5") == 2.5
    assert parse_number(3) == 3.0
    assert parse_number("") is None
    assert parse_number("  ", 0.0) == 0.0
    assert parse_number("abc", 1.0) == 1.0
    assert parse_number(float("nan")) is None
    assert parse_number("inf") is None
    assert parse_number(True) is None
    assert parse_number([1]) is None


def test_format_amount():
    assert format_amount(35) == "35.00"
    assert format_amount(56.99999999999999) == "57.00"


def test_total_ignores_absent_amounts():
    bets = [
        Bet(horse_id=1, category="win", amount=10),
        Bet(horse_id=1, category="win", amount="5.5"),
        Bet(horse_id=2, category="place"),
    ]
    assert total(bets) == pytest.approx(15.5)
    assert total([]) == 0


def test_summarize():
    bets = [
        Bet(horse_id=1, category="win", amount=20, settled=True, payout="35.00"),
        Bet(horse_id=2, category="win", amount=20, payout="99.00"),
    ]
    s = summarize(bets, race_id=3)
    assert s.race_id == 3
    assert s.bet_count == 2
    assert s.total_bets == pytest.approx(40.0)
    assert s.total_tax == pytest.approx(6.0)
    # unsettled preview payouts are not counted
    assert s.total_payout == pytest.approx(35.0)

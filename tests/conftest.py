"""Shared fixtures: throwaway DuckDB ledger and in-memory gateway."""

import tempfile
from pathlib import Path

import pytest

from raceledger.ledger import Book
from raceledger.storage.db import get_connection, init_schema
from raceledger.storage.gateway import DuckDBGateway, MemoryGateway


@pytest.fixture
def temp_db():
    tmp = tempfile.mkdtemp()
    path = Path(tmp) / "test.duckdb"
    conn = get_connection(path)
    init_schema(conn)
    yield conn
    conn.close()
    path.unlink(missing_ok=True)
    Path(tmp).rmdir()


@pytest.fixture
def gateway():
    return MemoryGateway()


@pytest.fixture
def duck_gateway(temp_db):
    return DuckDBGateway(temp_db)


@pytest.fixture
def book(gateway):
    return Book(gateway).load()


@pytest.fixture
def card(book):
    """One race with three horses: 1, 2, 3."""
    race = book.races.add_race(name="Maiden Plate")
    horses = [book.horses.add_horse(name=n) for n in ("Alpha", "Bravo", "Charlie")]
    return race, horses

"""Local JSON API (FastAPI) over the ledger."""

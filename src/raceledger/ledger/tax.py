"""Tax policy - fixed rate on stake."""

TAX_RATE = 0.15


def tax(amount: float) -> float:
    """Tax owed on amount."""
    return amount * TAX_RATE

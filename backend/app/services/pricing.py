"""
Mock price feed.

Stands in for a real per-store price source. Prices are drawn from a
random source that callers may inject (a seeded random.Random) to get
repeatable output.
"""

import random

from app.schemas.store import PriceComparison

STORES = ["Whole Foods", "Trader Joe's", "Safeway"]

# store -> (low, high) multiplicative jitter applied to the base price
STORE_JITTER = {
    "Whole Foods": (1.0, 1.3),
    "Trader Joe's": (0.8, 1.0),
    "Safeway": (0.95, 1.05),
}


def compare_prices(item_name: str, rng: random.Random | None = None) -> list[PriceComparison]:
    """Return one price per store for item_name, cheapest first."""
    rng = rng or random
    base_price = rng.uniform(1, 6)
    comparisons = [
        PriceComparison(store=store, price=round(base_price * rng.uniform(low, high), 2))
        for store, (low, high) in STORE_JITTER.items()
    ]
    return sorted(comparisons, key=lambda c: c.price)


def random_item_price(rng: random.Random | None = None) -> float:
    """Plausible unit price for a suggested item, in [1, 11)."""
    rng = rng or random
    return round(rng.uniform(1, 11), 2)


def random_store(rng: random.Random | None = None) -> str:
    rng = rng or random
    return rng.choice(STORES)

"""Tests for the mock price comparison feed."""

import random

from app.services.pricing import STORES, compare_prices, random_item_price, random_store


def test_three_stores_sorted_ascending():
    for seed in range(50):
        result = compare_prices("milk", random.Random(seed))
        assert len(result) == 3
        assert {c.store for c in result} == set(STORES)
        prices = [c.price for c in result]
        assert prices == sorted(prices)
        assert all(p > 0 for p in prices)


def test_prices_rounded_to_cents():
    for c in compare_prices("eggs", random.Random(7)):
        assert round(c.price, 2) == c.price


def test_seeded_source_is_repeatable():
    a = compare_prices("bread", random.Random(42))
    b = compare_prices("bread", random.Random(42))
    assert a == b


def test_unseeded_call_still_has_shape():
    result = compare_prices("apples")
    assert len(result) == 3


def test_jitter_bounds_relative_to_each_other():
    # Trader Joe's never exceeds the base, Whole Foods never drops below it,
    # so Trader Joe's can never be more than Whole Foods.
    for seed in range(100):
        by_store = {c.store: c.price for c in compare_prices("x", random.Random(seed))}
        assert by_store["Trader Joe's"] <= by_store["Whole Foods"]


def test_random_item_price_and_store():
    rng = random.Random(3)
    for _ in range(100):
        price = random_item_price(rng)
        assert 1 <= price <= 11
        assert random_store(rng) in STORES

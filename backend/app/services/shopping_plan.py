"""
Shopping Plan Optimizer: groups unpurchased items by their assigned store.

There is no search here. Items are bucketed by store, each bucket is
subtotalled, and buckets are ordered cheapest first. Items without a store
cannot be placed on a trip and are left out of every bucket.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ShoppingPlanEntry:
    store: str
    items: list = field(default_factory=list)
    total_cost: float = 0.0


def _field(item: Any, name: str):
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def plan(items) -> list[ShoppingPlanEntry]:
    """
    Build the per-store shopping plan.

    Accepts ORM rows, pydantic models or plain dicts. The input is not
    modified and the same input always yields the same output.
    """
    by_store: dict[str, list] = {}
    for item in items:
        store = _field(item, "store")
        if _field(item, "purchased") or not store:
            continue
        by_store.setdefault(store, []).append(item)

    entries = [
        ShoppingPlanEntry(
            store=store,
            items=store_items,
            total_cost=sum(_field(i, "price") or 0 for i in store_items),
        )
        for store, store_items in by_store.items()
    ]
    # sorted() is stable, so equal totals keep first-seen store order
    return sorted(entries, key=lambda e: e.total_cost)


def budget_summary(entries: list[ShoppingPlanEntry], budget: float) -> dict:
    """Compare the plan total against the weekly budget."""
    total = round(sum(e.total_cost for e in entries), 2)
    return {
        "total_cost": total,
        "budget": budget,
        "over_budget": total > budget,
        "over_by": round(max(0.0, total - budget), 2),
    }

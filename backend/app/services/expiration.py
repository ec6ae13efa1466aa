"""
Expiration alerts for purchased items.

Only items that were bought and carry an expiration date are considered.
Items already past their date are not alerted on; they are simply expired.
"""

from dataclasses import dataclass
from datetime import date

from app.models.grocery import GroceryItem


@dataclass
class ExpiringItem:
    item: GroceryItem
    days_left: int
    urgency: str


def urgency_from_days_remaining(days_left: int) -> str:
    """Convert days remaining to an alert level."""
    if days_left <= 1:
        return "urgent"
    elif days_left <= 3:
        return "soon"
    else:
        return "upcoming"


def expiring_items(
    items: list[GroceryItem],
    today: date | None = None,
    window_days: int = 5,
) -> list[ExpiringItem]:
    """Purchased items expiring within window_days (inclusive), soonest first."""
    today = today or date.today()
    result: list[ExpiringItem] = []
    for item in items:
        if not item.purchased or item.expiration_date is None:
            continue
        days_left = (item.expiration_date - today).days
        if 0 <= days_left <= window_days:
            result.append(ExpiringItem(item, days_left, urgency_from_days_remaining(days_left)))
    result.sort(key=lambda e: e.days_left)
    return result

"""
Suggestion parsing: free-text chat completion -> FoodItem list.

The provider returns prose, not JSON, so this is a positional scrape. Each
item is expected as a blank-line separated block:

    1. **Grilled Chicken Breast**
       - Category: Protein
       - Nutrition per 100g:
         - Calories: 165 kcal
         - Protein: 31g
         - Carbohydrates: 0g
         - Fat: 3.6g

The first and last blocks are the reply's intro and sign-off. Any line that
is missing or unreadable falls back to a default value instead of failing
the whole reply.
"""

import random
import re
from abc import ABC, abstractmethod

from app.schemas.suggestion import FoodItem, NutritionInfo
from app.services.pricing import random_item_price, random_store

DEFAULT_NAME = "Beans"
DEFAULT_CATEGORY = "Vegetables"
DEFAULT_NUMBER = "0"

_BLOCK_SPLIT = re.compile(r"\n\s*\n")
_BULLET = re.compile(r"^(?:[-•]\s*|\*\s+)+")
_NUMBERING = re.compile(r"^\d+[.)]\s*")
_EMPHASIS = re.compile(r"\*\*(.*?)\*\*")
_LABEL = re.compile(r"^(?:food item|item|name|category)\s*:\s*", re.IGNORECASE)
_NUMBER = re.compile(r"~?\s*(\d+(?:\.\d+)?)")

# line index within a block -> (nutrition field, accepted labels)
_NUTRITION_LINES = {
    3: ("calories", "calories|energy"),
    4: ("protein", "protein"),
    5: ("carbs", "carbohydrates|carbs"),
    6: ("fat", "fat|total fat"),
}


class SuggestionParser(ABC):
    """Turns raw provider text into structured suggestions."""

    @abstractmethod
    def parse(self, raw_text: str) -> list[FoodItem]:
        ...


def _line(lines: list[str], index: int) -> str:
    return lines[index] if index < len(lines) else ""


def clean_label_line(line: str) -> str:
    """Strip bullets, list numbering, bold markers and known labels."""
    text = _BULLET.sub("", line.strip())
    text = _NUMBERING.sub("", text)
    text = _EMPHASIS.sub(r"\1", text).replace("**", "")
    text = _LABEL.sub("", text)
    return text.strip().rstrip(":").strip()


def clean_number_line(line: str, labels: str) -> str:
    """Pull the leading number out of e.g. '- Protein: 31g'. '0' on a miss."""
    text = _BULLET.sub("", line.strip())
    text = _EMPHASIS.sub(r"\1", text).replace("**", "")
    text = re.sub(rf"^(?:{labels})\s*:?\s*", "", text, flags=re.IGNORECASE)
    m = _NUMBER.match(text)
    return m.group(1) if m else DEFAULT_NUMBER


class TextBlockParser(SuggestionParser):
    """Positional parser for the numbered-list reply format."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng

    def parse_block(self, block: str) -> FoodItem:
        lines = [l.strip() for l in block.split("\n")]
        nutrition = {
            field: clean_number_line(_line(lines, idx), labels)
            for idx, (field, labels) in _NUTRITION_LINES.items()
        }
        return FoodItem(
            name=clean_label_line(_line(lines, 0)) or DEFAULT_NAME,
            category=clean_label_line(_line(lines, 1)) or DEFAULT_CATEGORY,
            nutrition_per_100g=NutritionInfo(**nutrition),
            # the provider knows nothing about prices or stores
            price=random_item_price(self._rng),
            store=random_store(self._rng),
        )

    def parse(self, raw_text: str) -> list[FoodItem]:
        blocks = _BLOCK_SPLIT.split(raw_text.strip())
        return [self.parse_block(b) for b in blocks[1:-1]]


def filter_allergens(items: list[FoodItem], allergies: list[str] | None) -> list[FoodItem]:
    """Drop items whose name contains any allergen, ignoring case."""
    tokens = [a.strip().lower() for a in (allergies or []) if a and a.strip()]
    if not tokens:
        return list(items)
    return [i for i in items if not any(t in i.name.lower() for t in tokens)]

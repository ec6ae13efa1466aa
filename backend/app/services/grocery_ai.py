"""
GroceryAI: Claude API integration service.

Suggestion fetching is routed through this class. It never raises to the
caller: a missing key, empty preferences or any API failure yields an empty
list and a log line, since suggestions are decorative.
"""

import json
import logging
from functools import lru_cache

from app.config import get_settings
from app.schemas.suggestion import FoodItem
from app.services.suggestion_parser import SuggestionParser, TextBlockParser

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a nutritionist helpful assistant for diet planning."


def build_suggestion_prompt(dietary_preferences: list[str], allergies: list[str], count: int = 6) -> str:
    return (
        "I am creating a grocery shopping list based on dietary preferences and allergies.\n"
        f"User's preferences: {json.dumps(list(dietary_preferences))}.\n"
        f"User's allergies: {json.dumps(list(allergies))}.\n"
        f"Suggest {count} food items that meet these criteria with basic nutrition information "
        "(per 100g), and categorize the items (e.g., Protein, Grains, etc.)."
    )


class GroceryAI:
    """Food suggestions powered by the Anthropic Claude API."""

    def __init__(self, parser: SuggestionParser | None = None, api_key: str | None = None):
        settings = get_settings()
        self.model = settings.CLAUDE_MODEL
        self.api_key = settings.ANTHROPIC_API_KEY if api_key is None else api_key
        self.max_retries = settings.AI_MAX_RETRIES
        self.suggestion_count = settings.SUGGESTION_COUNT
        self.parser = parser or TextBlockParser()
        self._client = None

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self):
        if self._client is None and self.api_key:
            import anthropic
            self._client = anthropic.AsyncAnthropic(
                api_key=self.api_key, max_retries=self.max_retries
            )
        return self._client

    async def _call_claude(
        self, system: str, user_message: str, max_tokens: int = 1000, temperature: float = 0.7
    ) -> str:
        """Make a call to the Claude API. Returns the first text block."""
        if not self.client:
            raise RuntimeError("Anthropic API key not configured")
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system,
            messages=[{"role": "user", "content": user_message}],
        )
        for block in response.content:
            if getattr(block, "type", None) == "text":
                return block.text
        return ""

    async def suggest(self, preferences) -> list[FoodItem]:
        """
        Ask the model for food suggestions matching the user's preferences.

        Returns the full parse; allergen filtering is left to the caller so
        that cached results can be re-filtered against current allergies.
        """
        if not self.enabled:
            logger.warning("Anthropic API key not configured, suggestions disabled")
            return []

        dietary = list(getattr(preferences, "dietary_preferences", None) or [])
        if not dietary:
            logger.info("No dietary preferences set, skipping suggestions")
            return []
        allergies = list(getattr(preferences, "allergies", None) or [])

        import anthropic

        user_msg = build_suggestion_prompt(dietary, allergies, self.suggestion_count)
        try:
            text = await self._call_claude(SYSTEM_PROMPT, user_msg)
        except anthropic.APIError as e:
            logger.error(f"Suggestion request failed: {e}")
            return []

        if not text:
            logger.warning("Suggestion provider returned no text")
            return []
        items = self.parser.parse(text)
        logger.info(f"Parsed {len(items)} suggestions from provider reply")
        return items


@lru_cache
def get_grocery_ai() -> GroceryAI:
    return GroceryAI()

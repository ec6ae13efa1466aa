"""Tests for GroceryAI (mocked Anthropic client)."""

import json
import random
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from app.services.grocery_ai import SYSTEM_PROMPT, GroceryAI, build_suggestion_prompt
from app.services.suggestion_parser import TextBlockParser

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _prefs(dietary=("vegetarian",), allergies=("peanut",)):
    return SimpleNamespace(dietary_preferences=list(dietary), allergies=list(allergies))


def _ai_with_reply(text=None, side_effect=None) -> GroceryAI:
    ai = GroceryAI(parser=TextBlockParser(random.Random(0)), api_key="test-key")
    client = MagicMock()
    if side_effect is not None:
        client.messages.create = AsyncMock(side_effect=side_effect)
    else:
        reply = SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])
        client.messages.create = AsyncMock(return_value=reply)
    ai._client = client
    return ai


def test_prompt_embeds_preferences():
    prompt = build_suggestion_prompt(["vegan", "low carb"], ["soy"], count=6)
    assert json.dumps(["vegan", "low carb"]) in prompt
    assert json.dumps(["soy"]) in prompt
    assert "Suggest 6 food items" in prompt
    assert "per 100g" in prompt


@pytest.mark.asyncio
async def test_suggest_parses_reply(completion_text):
    ai = _ai_with_reply(completion_text)
    items = await ai.suggest(_prefs())
    # filtering happens in the cache, so the peanut item is still here
    assert [i.name for i in items] == ["Lentils", "Quinoa", "Peanut Butter"]

    kwargs = ai._client.messages.create.call_args.kwargs
    assert kwargs["system"] == SYSTEM_PROMPT
    assert kwargs["max_tokens"] == 1000
    assert kwargs["temperature"] == 0.7
    assert "vegetarian" in kwargs["messages"][0]["content"]


@pytest.mark.asyncio
async def test_missing_key_returns_empty():
    ai = GroceryAI(api_key="")
    assert ai.enabled is False
    assert ai.client is None
    assert await ai.suggest(_prefs()) == []


@pytest.mark.asyncio
async def test_empty_dietary_preferences_skips_call(completion_text):
    ai = _ai_with_reply(completion_text)
    assert await ai.suggest(_prefs(dietary=[])) == []
    ai._client.messages.create.assert_not_called()


@pytest.mark.asyncio
async def test_connection_error_returns_empty():
    ai = _ai_with_reply(side_effect=anthropic.APIConnectionError(request=_REQUEST))
    assert await ai.suggest(_prefs()) == []


@pytest.mark.asyncio
async def test_rejected_request_returns_empty():
    error = anthropic.AuthenticationError(
        "invalid x-api-key",
        response=httpx.Response(401, request=_REQUEST),
        body=None,
    )
    ai = _ai_with_reply(side_effect=error)
    assert await ai.suggest(_prefs()) == []


@pytest.mark.asyncio
async def test_reply_without_text_returns_empty():
    ai = GroceryAI(api_key="test-key")
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=SimpleNamespace(content=[]))
    ai._client = client
    assert await ai.suggest(_prefs()) == []

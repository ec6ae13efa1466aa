"""
Suggestions Router — AI food suggestions for the current user.

Endpoints:
  GET  /          — cached suggestions filtered by current allergies
  POST /refresh   — drop the cached entry and fetch again
  POST /accept    — turn a suggestion into a grocery list item
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.items import add_item_for_user
from app.routers.preferences import get_or_create_preferences
from app.schemas.grocery import GroceryItemCreate, GroceryItemResponse
from app.schemas.suggestion import FoodItem, SuggestionsResponse
from app.services.suggestion_cache import SuggestionCache, get_suggestion_cache
from app.utils.auth import get_current_user

router = APIRouter()


def _get_cache() -> SuggestionCache:
    return get_suggestion_cache()


@router.get("/", response_model=SuggestionsResponse)
async def get_suggestions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cache: SuggestionCache = Depends(_get_cache),
):
    pref = get_or_create_preferences(db, current_user)
    items = await cache.get_suggestions(pref, namespace=str(current_user.id))
    return {"suggestions": items, "enabled": cache.provider.enabled}


@router.post("/refresh", response_model=SuggestionsResponse)
async def refresh_suggestions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cache: SuggestionCache = Depends(_get_cache),
):
    pref = get_or_create_preferences(db, current_user)
    cache.invalidate(namespace=str(current_user.id))
    items = await cache.get_suggestions(pref, namespace=str(current_user.id))
    return {"suggestions": items, "enabled": cache.provider.enabled}


@router.post("/accept", response_model=GroceryItemResponse, status_code=201)
def accept_suggestion(
    body: FoodItem,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        item = GroceryItemCreate(
            name=body.name,
            category=body.category,
            purchased=False,
            price=body.price,
            store=body.store,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=[err["msg"] for err in e.errors()])
    return add_item_for_user(db, current_user, item)

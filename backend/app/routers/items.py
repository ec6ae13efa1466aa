import logging
import random
from datetime import date, datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models.grocery import GroceryItem, name_key
from app.models.user import User
from app.routers.preferences import get_or_create_preferences
from app.schemas.grocery import (
    GroceryItemCreate, GroceryItemUpdate, GroceryItemResponse,
    CategoryGroup, ExpiringItemResponse, ShoppingPlanResponse,
)
from app.schemas.store import PriceComparison
from app.services.expiration import expiring_items
from app.services.pricing import compare_prices
from app.services.shopping_plan import plan, budget_summary
from app.utils.auth import get_current_user
from app.utils.pagination import pagination_params, paginate

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_DETAIL = "This item already exists in your list"


def get_rng() -> random.Random | None:
    """Random source for mock prices. None means the module-level generator."""
    return None


def _get_item(db: Session, item_id: UUID, user_id) -> GroceryItem:
    item = db.query(GroceryItem).filter(
        GroceryItem.id == item_id, GroceryItem.user_id == user_id
    ).first()
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


def find_duplicate(db: Session, user_id, name: str, exclude_id=None) -> GroceryItem | None:
    """Case-insensitive name lookup within one user's list."""
    q = db.query(GroceryItem).filter(
        GroceryItem.user_id == user_id,
        GroceryItem.name_key == name_key(name),
    )
    if exclude_id is not None:
        q = q.filter(GroceryItem.id != exclude_id)
    return q.first()


def add_item_for_user(db: Session, user: User, body: GroceryItemCreate) -> GroceryItem:
    """Insert a new item, rejecting duplicate names before touching the DB."""
    if find_duplicate(db, user.id, body.name):
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)
    item = GroceryItem(**body.model_dump(), user_id=user.id)
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Added item {item.name!r} for user {user.id}")
    return item


def _user_items(db: Session, user_id) -> list[GroceryItem]:
    return db.query(GroceryItem).filter(
        GroceryItem.user_id == user_id,
    ).order_by(GroceryItem.created_at.asc()).all()


@router.get("/", response_model=dict)
def list_items(
    category: str | None = None,
    purchased: bool | None = None,
    page: dict = Depends(pagination_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    q = db.query(GroceryItem).filter(GroceryItem.user_id == current_user.id)
    if category:
        q = q.filter(GroceryItem.category == category)
    if purchased is not None:
        q = q.filter(GroceryItem.purchased == purchased)
    q = q.order_by(GroceryItem.created_at.asc())
    result = paginate(q, page)
    result["items"] = [GroceryItemResponse.model_validate(i) for i in result["items"]]
    return result


@router.post("/", response_model=GroceryItemResponse, status_code=201)
def create_item(
    body: GroceryItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return add_item_for_user(db, current_user, body)


@router.get("/by-category", response_model=list[CategoryGroup])
def items_by_category(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # categories in the order they first appear on the list
    groups: dict[str, list[GroceryItem]] = {}
    for item in _user_items(db, current_user.id):
        groups.setdefault(item.category or "Other", []).append(item)
    return [
        CategoryGroup(
            category=cat,
            items=[GroceryItemResponse.model_validate(i) for i in items],
        )
        for cat, items in groups.items()
    ]


@router.get("/shopping-plan", response_model=ShoppingPlanResponse)
def shopping_plan(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entries = plan(_user_items(db, current_user.id))
    pref = get_or_create_preferences(db, current_user)
    return {
        "entries": [
            {
                "store": e.store,
                "items": [GroceryItemResponse.model_validate(i) for i in e.items],
                "total_cost": round(e.total_cost, 2),
            }
            for e in entries
        ],
        "budget": budget_summary(entries, pref.budget),
    }


@router.get("/expiring", response_model=list[ExpiringItemResponse])
def expiring(
    days: int | None = Query(None, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    window = days if days is not None else get_settings().EXPIRATION_WINDOW_DAYS
    alerts = expiring_items(_user_items(db, current_user.id), date.today(), window)
    return [
        ExpiringItemResponse(
            item=GroceryItemResponse.model_validate(a.item),
            days_left=a.days_left,
            urgency=a.urgency,
        )
        for a in alerts
    ]


@router.get("/price-comparison", response_model=list[PriceComparison])
def price_comparison(
    name: str = Query(..., min_length=1),
    rng: random.Random | None = Depends(get_rng),
    current_user: User = Depends(get_current_user),
):
    return compare_prices(name, rng)


@router.get("/{item_id}", response_model=GroceryItemResponse)
def get_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_item(db, item_id, current_user.id)


@router.patch("/{item_id}", response_model=GroceryItemResponse)
def update_item(
    item_id: UUID,
    body: GroceryItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = _get_item(db, item_id, current_user.id)
    data = body.model_dump(exclude_unset=True)
    if data.get("name") and find_duplicate(db, current_user.id, data["name"], exclude_id=item.id):
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)
    if "category" in data and not (data["category"] or "").strip():
        data["category"] = "Other"
    if "store" in data and data["store"] is not None:
        data["store"] = data["store"].strip() or None
    for k, v in data.items():
        setattr(item, k, v)
    item.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(item)
    return item


@router.post("/{item_id}/toggle", response_model=GroceryItemResponse)
def toggle_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = _get_item(db, item_id, current_user.id)
    item.purchased = not item.purchased
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=204)
def delete_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = _get_item(db, item_id, current_user.id)
    db.delete(item)
    db.commit()

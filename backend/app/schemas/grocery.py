from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class GroceryItemCreate(BaseModel):
    name: str
    category: str = "Other"
    purchased: bool = False
    price: float | None = Field(default=None, ge=0)
    store: str | None = None
    expiration_date: date | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("category")
    @classmethod
    def category_default(cls, v: str) -> str:
        return v.strip() or "Other"

    @field_validator("store")
    @classmethod
    def store_blank_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class GroceryItemUpdate(BaseModel):
    name: str | None = None
    category: str | None = None
    purchased: bool | None = None
    price: float | None = Field(default=None, ge=0)
    store: str | None = None
    expiration_date: date | None = None

    # Omitted fields keep their value; an explicit null is rejected
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("name must not be null")
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("purchased")
    @classmethod
    def purchased_not_null(cls, v: bool | None) -> bool:
        if v is None:
            raise ValueError("purchased must not be null")
        return v


class GroceryItemResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    category: str
    purchased: bool
    price: float | None
    store: str | None
    expiration_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryGroup(BaseModel):
    category: str
    items: list[GroceryItemResponse]


class ExpiringItemResponse(BaseModel):
    item: GroceryItemResponse
    days_left: int
    urgency: str


class ShoppingPlanEntryResponse(BaseModel):
    store: str
    items: list[GroceryItemResponse]
    total_cost: float


class BudgetSummary(BaseModel):
    total_cost: float
    budget: float
    over_budget: bool
    over_by: float


class ShoppingPlanResponse(BaseModel):
    entries: list[ShoppingPlanEntryResponse]
    budget: BudgetSummary

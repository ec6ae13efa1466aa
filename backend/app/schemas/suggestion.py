from pydantic import BaseModel


class NutritionInfo(BaseModel):
    """Per-100g values as scraped from the completion text."""
    calories: str = "0"
    protein: str = "0"
    carbs: str = "0"
    fat: str = "0"


class FoodItem(BaseModel):
    name: str
    category: str
    nutrition_per_100g: NutritionInfo = NutritionInfo()
    price: float | None = None
    store: str | None = None


class SuggestionsResponse(BaseModel):
    suggestions: list[FoodItem]
    enabled: bool

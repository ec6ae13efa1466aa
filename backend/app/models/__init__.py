from app.models.user import User
from app.models.grocery import GroceryItem
from app.models.preference import UserPreference
from app.models.store import Store

__all__ = [
    "User", "GroceryItem", "UserPreference", "Store",
]

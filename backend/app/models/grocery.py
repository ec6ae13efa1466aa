from sqlalchemy import Column, String, Float, Boolean, Date, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship, validates

from app.database import Base, BaseMixin


def name_key(name: str) -> str:
    """Case-insensitive comparison key for item names (Unicode aware)."""
    return name.strip().casefold()


class GroceryItem(BaseMixin, Base):
    __tablename__ = "grocery_items"
    # SQLite's lower() only folds ASCII, so the folded name is stored
    __table_args__ = (
        UniqueConstraint("user_id", "name_key", name="uq_grocery_items_user_name_key"),
    )

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    name_key = Column(String, nullable=False)
    category = Column(String, nullable=False, default="Other")
    purchased = Column(Boolean, nullable=False, default=False)
    price = Column(Float)
    store = Column(String)
    expiration_date = Column(Date)

    user = relationship("User", back_populates="grocery_items")

    @validates("name")
    def _sync_name_key(self, key, value):
        self.name_key = name_key(value) if value is not None else None
        return value

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.database import Base, BaseMixin


class User(BaseMixin, Base):
    __tablename__ = "users"

    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String)
    password_hash = Column(String, nullable=False)

    grocery_items = relationship("GroceryItem", back_populates="user", cascade="all, delete-orphan")
    preference = relationship(
        "UserPreference", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

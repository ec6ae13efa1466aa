from sqlalchemy import Column, Float, ForeignKey, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.database import Base, BaseMixin

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
TagList = JSON().with_variant(JSONB(), "postgresql")


class UserPreference(BaseMixin, Base):
    __tablename__ = "user_preferences"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, unique=True, index=True)
    dietary_preferences = Column(TagList, nullable=False, default=list)
    allergies = Column(TagList, nullable=False, default=list)
    # Stored and returned as-is; nothing reads it for planning
    fitness_goals = Column(TagList, nullable=False, default=list)
    budget = Column(Float, nullable=False, default=100.0)

    user = relationship("User", back_populates="preference")

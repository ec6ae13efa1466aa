from sqlalchemy import Column, String

from app.database import Base, BaseMixin


class Store(BaseMixin, Base):
    __tablename__ = "stores"

    name = Column(String, unique=True, nullable=False)
    location = Column(String)

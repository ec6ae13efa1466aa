from uuid import UUID
from pydantic import BaseModel


class StoreResponse(BaseModel):
    id: UUID
    name: str
    location: str | None

    model_config = {"from_attributes": True}


class PriceComparison(BaseModel):
    store: str
    price: float

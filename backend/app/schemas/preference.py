from uuid import UUID
from pydantic import BaseModel, Field


class PreferenceUpdate(BaseModel):
    dietary_preferences: list[str] = []
    allergies: list[str] = []
    fitness_goals: list[str] = []
    budget: float = Field(default=100.0, ge=0)


class PreferenceResponse(BaseModel):
    user_id: UUID
    dietary_preferences: list[str]
    allergies: list[str]
    fitness_goals: list[str]
    budget: float

    model_config = {"from_attributes": True}

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from .meal import MealCandidate


Goal = Literal["Build Muscle", "Lose Fat", "Maintain Weight", "Improve Performance"]


class NutritionPlan(BaseModel):
    id: Optional[str] = None
    userId: str
    goal: str
    mealsPerDay: int
    foodsToAvoid: str = ""  # comma-joined avoid keywords
    createdAt: str
    updatedAt: str


class NutritionPlanCreate(BaseModel):
    # Free text on purpose: an unknown goal just disables goal filtering
    goal: str
    mealsPerDay: int = Field(..., ge=1, le=10)
    foodsToAvoid: List[str] = Field(default_factory=list)

    @field_validator("foodsToAvoid", mode="before")
    @classmethod
    def split_avoid_text(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


class PlanPreview(BaseModel):
    goal: str
    mealsPerDay: int
    meals: List[MealCandidate]

from typing import List, Optional, Union
from pydantic import BaseModel, Field

from .meal import Meal


class MealSchedule(BaseModel):
    id: Optional[str] = None
    nutritionPlanId: str
    userId: str
    dayOfWeek: int = Field(..., ge=0, le=6)  # 0 = Sunday
    date: str                                # YYYY-MM-DD


class DaySchedule(BaseModel):
    schedule: MealSchedule
    meals: List[Meal] = Field(default_factory=list)

    # Day summary
    eatenCount: int = 0
    totalMeals: int = 0
    totalCalories: Union[int, float] = 0
    caloriesConsumed: Union[int, float] = 0  # eaten meals only
    progressPercentage: float = 0.0

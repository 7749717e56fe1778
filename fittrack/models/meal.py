from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Union


class MealCandidate(BaseModel):
    """One item of the external meal catalog. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    title: str
    ingredients: List[str]
    calories: Union[int, float]
    instructions: Union[str, List[str], None] = None
    image: Optional[str] = None


class Meal(BaseModel):
    """A scheduled meal as stored in the meals collection."""

    id: Optional[str] = None
    mealScheduleId: str
    userId: str
    title: str
    type: str
    calories: Union[int, float]
    ingredients: str                  # ", "-joined
    instructions: Optional[str] = None  # "\n"-joined steps
    image: Optional[str] = None
    isEaten: bool = False
    time: Optional[str] = None


class MealUpdate(BaseModel):
    # None flips the current value
    isEaten: Optional[bool] = None

"""
Weekly meal plan generation.

Turns a filtered meal catalog into one meal schedule per weekday and the
meals for each schedule, written to the document store one at a time.
"""
import copy
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from fittrack.core.config import settings
from fittrack.core.store import DocumentStore
from fittrack.models.meal import Meal
from fittrack.models.meal_schedule import MealSchedule
from fittrack.services.logger import log_debug

DAYS_IN_WEEK = 7
MAX_SELECTION_ITERATIONS = 20


def get_date_for_weekday(weekday: int, today: Optional[date] = None) -> str:
    """
    Date (YYYY-MM-DD) of a weekday in the current week.

    weekday: 0 (Sunday) to 6 (Saturday). Weeks start on Sunday, so days
    earlier than today land in the past.
    """
    today = today or date.today()
    current_weekday = (today.weekday() + 1) % 7  # date.weekday() has Monday = 0
    return (today + timedelta(days=weekday - current_weekday)).isoformat()


def select_balanced_meals(filtered_meals: Dict[str, List[Dict[str, Any]]], count: int):
    """
    Pick `count` meals round-robin over the meal types (3 meals = breakfast,
    lunch, dinner). Picked meals are popped from `filtered_meals`.

    Types with nothing left are skipped; the loop gives up after
    MAX_SELECTION_ITERATIONS so a short catalog yields fewer meals.
    """
    result = []
    types = list(filtered_meals.keys())
    if not types:
        return result

    i = 0
    while len(result) < count:
        meal_type = types[i % len(types)]
        pool = filtered_meals[meal_type]

        if pool:
            meal = pool.pop(0)
            result.append({**meal, "type": meal_type})

        i += 1
        if i > MAX_SELECTION_ITERATIONS:
            break

    return result


def build_meal_document(meal: Dict[str, Any], schedule_id: str, user_id: str) -> Dict[str, Any]:
    instructions = meal.get("instructions")
    if isinstance(instructions, list):
        instructions = "\n".join(instructions)

    return Meal(
        mealScheduleId=schedule_id,
        userId=user_id,
        title=meal["title"],
        type=meal["type"],
        calories=meal["calories"],
        ingredients=", ".join(meal["ingredients"]),
        instructions=instructions,
        image=meal.get("image"),
        isEaten=False,
        time=None,
    ).model_dump(exclude={"id"})


def generate_meal_plan(
    store: DocumentStore,
    plan: Dict[str, Any],
    filtered_meals: Dict[str, List[Dict[str, Any]]],
    user: Dict[str, Any],
    today: Optional[date] = None,
) -> None:
    """
    Generate a full 7-day meal plan and store it.

    plan must carry `id` and `mealsPerDay`; user must carry `uid`.
    Store errors propagate as-is. Days already written are not rolled back.
    """
    user_id = user["uid"]

    for day in range(DAYS_IN_WEEK):
        day_date = get_date_for_weekday(day, today)

        # 1. Schedule for the day
        schedule = store.create_document(
            settings.MEAL_SCHEDULES_COLLECTION,
            MealSchedule(
                nutritionPlanId=plan["id"],
                userId=user_id,
                dayOfWeek=day,
                date=day_date,
            ).model_dump(exclude={"id"}),
        )

        # 2. Pick N meals from a fresh copy of the catalog
        pools = copy.deepcopy(filtered_meals)
        selected = select_balanced_meals(pools, plan["mealsPerDay"])

        log_debug("meal_plan_day", {
            "plan_id": plan["id"],
            "day": day,
            "date": day_date,
            "requested": plan["mealsPerDay"],
            "selected": [m["title"] for m in selected],
        })

        # 3. Meals linked to the schedule
        for meal in selected:
            store.create_document(
                settings.MEALS_COLLECTION,
                build_meal_document(meal, schedule["id"], user_id),
            )

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from fittrack.core.config import settings
from fittrack.core.store import DocumentNotFoundError, DocumentStore
from fittrack.models.nutrition_plan import NutritionPlan, NutritionPlanCreate
from fittrack.services.logger import log_debug, logger
from fittrack.services.meal_filter import filter_meals_by_preferences
from fittrack.services.meal_plan_generator import generate_meal_plan

PREVIEW_MEAL_TYPES = ("breakfast", "lunch", "dinner")

# Display order of meals within a day; unknown types go last
MEAL_TYPE_ORDER = {
    "breakfast": 1,
    "snack am": 2,
    "lunch": 3,
    "snack pm": 4,
    "snack": 4,
    "dinner": 5,
}


def preview_meals(
    meal_library: Dict[str, List[Dict[str, Any]]],
    goal: str,
    meals_per_day: int,
    avoid_list: List[str],
) -> List[Dict[str, Any]]:
    """Sample of what a plan with these settings would serve in a day."""
    filtered = filter_meals_by_preferences(meal_library, goal, avoid_list)
    combined = []
    for meal_type in PREVIEW_MEAL_TYPES:
        combined.extend(filtered.get(meal_type) or [])
    return combined[:meals_per_day]


def get_current_plan(store: DocumentStore, user: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    plans = store.list_documents(
        settings.NUTRITION_PLANS_COLLECTION,
        [("userId", "==", user["uid"])],
    )
    if not plans:
        return None
    return max(plans, key=lambda p: p.get("createdAt") or "")


def create_nutrition_plan(
    store: DocumentStore,
    user: Dict[str, Any],
    request: NutritionPlanCreate,
    meal_library: Dict[str, List[Dict[str, Any]]],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Save a nutrition plan and generate its week of schedules and meals.
    """
    now = datetime.now(timezone.utc).isoformat()
    plan = store.create_document(
        settings.NUTRITION_PLANS_COLLECTION,
        NutritionPlan(
            userId=user["uid"],
            goal=request.goal,
            mealsPerDay=request.mealsPerDay,
            foodsToAvoid=", ".join(request.foodsToAvoid),
            createdAt=now,
            updatedAt=now,
        ).model_dump(exclude={"id"}),
    )

    filtered = filter_meals_by_preferences(meal_library, request.goal, request.foodsToAvoid)
    log_debug("meal_plan_filtered", {
        "plan_id": plan["id"],
        "goal": request.goal,
        "avoid": request.foodsToAvoid,
        "available": {t: len(m) for t, m in filtered.items()},
    })

    generate_meal_plan(store, plan, filtered, user, today=today)
    logger.info("Generated meal plan %s for user %s", plan["id"], user["uid"])
    return plan


def get_day_schedule(store: DocumentStore, plan_id: str, day: int) -> Dict[str, Any]:
    schedules = store.list_documents(
        settings.MEAL_SCHEDULES_COLLECTION,
        [("nutritionPlanId", "==", plan_id), ("dayOfWeek", "==", day)],
    )
    if not schedules:
        raise DocumentNotFoundError(settings.MEAL_SCHEDULES_COLLECTION, f"{plan_id}/day-{day}")

    schedule = schedules[0]
    meals = store.list_documents(
        settings.MEALS_COLLECTION,
        [("mealScheduleId", "==", schedule["id"])],
    )
    meals.sort(key=lambda m: MEAL_TYPE_ORDER.get(str(m.get("type", "")).lower(), 99))

    return {"schedule": schedule, "meals": meals, **summarize_day(meals)}


def summarize_day(meals: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Eaten/total counts and calories for one day; consumed counts eaten meals only."""
    eaten = [m for m in meals if m.get("isEaten")]
    total_meals = len(meals)

    return {
        "eatenCount": len(eaten),
        "totalMeals": total_meals,
        "totalCalories": sum(m.get("calories") or 0 for m in meals),
        "caloriesConsumed": sum(m.get("calories") or 0 for m in eaten),
        "progressPercentage": round(len(eaten) / total_meals * 100, 1) if total_meals else 0.0,
    }


def toggle_meal_eaten(
    store: DocumentStore,
    meal_id: str,
    user: Dict[str, Any],
    is_eaten: Optional[bool] = None,
    plan_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Mark a scheduled meal eaten or not eaten; with no value the flag flips.

    Raises DocumentNotFoundError when the meal is missing (or belongs to
    another plan than `plan_id`) and PermissionError for another user's meal.
    """
    meal = store.get_document(settings.MEALS_COLLECTION, meal_id)
    if meal.get("userId") != user["uid"]:
        raise PermissionError(f"Meal {meal_id} belongs to another user")

    if plan_id is not None:
        schedule = store.get_document(settings.MEAL_SCHEDULES_COLLECTION, meal["mealScheduleId"])
        if schedule.get("nutritionPlanId") != plan_id:
            raise DocumentNotFoundError(settings.MEALS_COLLECTION, meal_id)

    new_value = not meal.get("isEaten") if is_eaten is None else is_eaten
    updated = store.update_document(settings.MEALS_COLLECTION, meal_id, {"isEaten": new_value})

    log_debug("meal_eaten_updated", {"meal_id": meal_id, "uid": user["uid"], "isEaten": new_value})
    return updated


def delete_nutrition_plan(store: DocumentStore, plan_id: str) -> Dict[str, int]:
    """
    Delete a plan with its schedules and their meals (children first).
    """
    schedules = store.list_documents(
        settings.MEAL_SCHEDULES_COLLECTION,
        [("nutritionPlanId", "==", plan_id)],
    )

    deleted_meals = 0
    for schedule in schedules:
        meals = store.list_documents(
            settings.MEALS_COLLECTION,
            [("mealScheduleId", "==", schedule["id"])],
        )
        for meal in meals:
            store.delete_document(settings.MEALS_COLLECTION, meal["id"])
            deleted_meals += 1
        store.delete_document(settings.MEAL_SCHEDULES_COLLECTION, schedule["id"])

    store.delete_document(settings.NUTRITION_PLANS_COLLECTION, plan_id)

    logger.info(
        "Deleted meal plan %s (%d schedules, %d meals)", plan_id, len(schedules), deleted_meals
    )
    return {"schedules": len(schedules), "meals": deleted_meals}

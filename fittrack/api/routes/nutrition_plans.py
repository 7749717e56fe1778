"""Nutrition plan routes: preview, generate, read a day, mark meals eaten, delete.

Handlers are plain functions: they make blocking Firestore calls, so
FastAPI runs them in its threadpool.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path

from fittrack.api.deps import get_current_user, get_meal_library, get_store
from fittrack.core.config import settings
from fittrack.core.store import DocumentNotFoundError
from fittrack.models.meal import Meal, MealUpdate
from fittrack.models.meal_schedule import DaySchedule
from fittrack.models.nutrition_plan import NutritionPlan, NutritionPlanCreate, PlanPreview
from fittrack.services.meal_plan_pipeline import (
    create_nutrition_plan,
    delete_nutrition_plan,
    get_current_plan,
    get_day_schedule,
    preview_meals,
    toggle_meal_eaten,
)

router = APIRouter(prefix="/nutrition/plans", tags=["nutrition_plans"])


def _get_owned_plan(store, plan_id: str, user) -> dict:
    try:
        plan = store.get_document(settings.NUTRITION_PLANS_COLLECTION, plan_id)
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail="Nutrition plan not found")

    if plan.get("userId") != user["uid"]:
        raise HTTPException(status_code=403, detail="Unauthorized")
    return plan


@router.post("/preview", response_model=PlanPreview)
def preview_plan(
    request: NutritionPlanCreate,
    user=Depends(get_current_user),
    meal_library=Depends(get_meal_library),
):
    meals = preview_meals(meal_library, request.goal, request.mealsPerDay, request.foodsToAvoid)
    return {"goal": request.goal, "mealsPerDay": request.mealsPerDay, "meals": meals}


@router.post("", status_code=201, response_model=NutritionPlan)
def create_plan(
    request: NutritionPlanCreate,
    user=Depends(get_current_user),
    store=Depends(get_store),
    meal_library=Depends(get_meal_library),
):
    if get_current_plan(store, user) is not None:
        raise HTTPException(
            status_code=409,
            detail="A nutrition plan already exists; delete it before generating a new one",
        )

    try:
        plan = create_nutrition_plan(store, user, request, meal_library)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Meal plan generation failed: {e}")

    return plan


@router.get("/current", response_model=NutritionPlan)
def current_plan(user=Depends(get_current_user), store=Depends(get_store)):
    plan = get_current_plan(store, user)
    if plan is None:
        raise HTTPException(status_code=404, detail="No nutrition plan found")
    return plan


@router.get("/{plan_id}/days/{day}", response_model=DaySchedule)
def plan_day(
    plan_id: str,
    day: int = Path(..., ge=0, le=6),
    user=Depends(get_current_user),
    store=Depends(get_store),
):
    _get_owned_plan(store, plan_id, user)
    try:
        return get_day_schedule(store, plan_id, day)
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail="No meal schedule for this day")


@router.patch("/{plan_id}/meals/{meal_id}", response_model=Meal)
def update_meal(
    plan_id: str,
    meal_id: str,
    update: Optional[MealUpdate] = None,
    user=Depends(get_current_user),
    store=Depends(get_store),
):
    _get_owned_plan(store, plan_id, user)
    is_eaten = update.isEaten if update is not None else None

    try:
        return toggle_meal_eaten(store, meal_id, user, is_eaten=is_eaten, plan_id=plan_id)
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail="Meal not found")
    except PermissionError:
        raise HTTPException(status_code=403, detail="Unauthorized")


@router.delete("/{plan_id}")
def delete_plan(plan_id: str, user=Depends(get_current_user), store=Depends(get_store)):
    _get_owned_plan(store, plan_id, user)
    deleted = delete_nutrition_plan(store, plan_id)
    return {"message": "Nutrition plan deleted", "deleted": deleted}

from fastapi import APIRouter

from fittrack.api.routes.nutrition_plans import router as nutrition_plans_router

api_router = APIRouter()

# Nutrition routes
api_router.include_router(nutrition_plans_router)

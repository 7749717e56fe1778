# fittrack/core/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Service account key for the Firebase Admin SDK
    FIREBASE_CREDENTIALS: str = "fittrack/core/firebase_key.json"

    # Firestore collections
    NUTRITION_PLANS_COLLECTION: str = "nutrition_plans"
    MEAL_SCHEDULES_COLLECTION: str = "meal_schedules"
    MEALS_COLLECTION: str = "meals"

    # External meal catalog (JSON keyed by meal type)
    MEALS_LIBRARY_URL: str = "https://yahia-dot.github.io/mealsLibrary_api/meals.json"
    MEALS_LIBRARY_TIMEOUT: float = 10.0

    DEBUG_MODE: bool = True

    # If you want to read from a .env file, keep this:
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()

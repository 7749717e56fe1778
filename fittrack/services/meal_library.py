import re
from functools import lru_cache
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from fittrack.core.config import settings
from fittrack.models.meal import MealCandidate
from fittrack.services.logger import log_debug, logger

DRIVE_FILE_ID = re.compile(r"/d/([a-zA-Z0-9_-]+)/")


class MealLibraryError(RuntimeError):
    pass


def format_google_drive_link(url):
    """Turn a Google Drive share link into a direct-view image URL."""
    if not url:
        return None
    match = DRIVE_FILE_ID.search(url)
    if match:
        return f"https://drive.google.com/uc?export=view&id={match.group(1)}"
    return url


def _normalize_meal(meal_type: str, index: int, item: Any) -> Optional[Dict[str, Any]]:
    try:
        meal = MealCandidate.model_validate(item).model_dump(exclude_none=True)
    except ValidationError as e:
        logger.warning("Skipping invalid %s meal at position %d: %s", meal_type, index, e)
        return None

    image = format_google_drive_link(meal.get("image"))
    if image:
        meal["image"] = image
    return meal


def parse_meal_library(data: Any) -> Dict[str, List[Dict[str, Any]]]:
    if not isinstance(data, dict):
        raise MealLibraryError("Meal library must be an object keyed by meal type")

    library = {}
    for meal_type, meals in data.items():
        if not isinstance(meals, list):
            raise MealLibraryError(f"Meal library entry '{meal_type}' is not a list")
        normalized = (_normalize_meal(meal_type, i, m) for i, m in enumerate(meals))
        library[meal_type] = [m for m in normalized if m is not None]
    return library


def fetch_meal_library(url: str, timeout: Optional[float] = None) -> Dict[str, List[Dict[str, Any]]]:
    """
    Download the meal catalog and normalize it.

    Items that fail validation are skipped with a warning.
    Raises MealLibraryError on network, HTTP or top-level shape problems.
    """
    if timeout is None:
        timeout = settings.MEALS_LIBRARY_TIMEOUT
    try:
        res = requests.get(url, timeout=timeout)
        res.raise_for_status()
        data = res.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Error fetching meal library from %s: %s", url, e)
        raise MealLibraryError(f"Failed to load meal library: {e}") from e

    library = parse_meal_library(data)
    log_debug("meal_library_loaded", {t: len(m) for t, m in library.items()})
    return library


@lru_cache(maxsize=1)
def load_meal_library() -> Dict[str, List[Dict[str, Any]]]:
    return fetch_meal_library(settings.MEALS_LIBRARY_URL)

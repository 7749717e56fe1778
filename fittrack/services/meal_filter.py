from typing import Any, Dict, Iterable, List, Tuple, get_args

from fittrack.models.nutrition_plan import Goal

# Ingredient keywords a meal must mention to count towards a goal.
# An empty tuple means no goal filtering.
GOAL_TAGS: Dict[Goal, Tuple[str, ...]] = {
    "Build Muscle": ("protein", "chicken", "egg", "meat"),
    "Lose Fat": ("low-calorie", "vegetable", "salad"),
    "Maintain Weight": (),
    "Improve Performance": ("carbs", "balanced", "rice"),
}

# Goals the setup screen offers, in display order
GOALS = get_args(Goal)


# ---------------- Helpers ---------------- #

def normalize_avoid_list(avoid_list: Iterable[str]) -> List[str]:
    keywords = []
    for item in avoid_list or []:
        item = str(item).strip().lower()
        if item and item not in keywords:
            keywords.append(item)
    return keywords


def goal_tags(goal: str):
    return GOAL_TAGS.get(goal, ())


def ingredients_text(meal: Dict[str, Any]) -> str:
    return " ".join(meal["ingredients"]).lower()


# ---------------- Main API ---------------- #

def filter_meals_by_preferences(
    meal_library: Dict[str, List[Dict[str, Any]]],
    goal: str,
    avoid_list: Iterable[str] = (),
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Filter the meal catalog by fitness goal and foods to avoid.

    A meal is dropped when its ingredient text contains any avoid keyword
    (plain substring match, so "egg" also drops "eggplant"). If the goal has
    tags, a meal is kept only when its ingredients mention at least one.
    Returns a new dict with the same meal-type keys, input order preserved.
    """
    avoid = normalize_avoid_list(avoid_list)
    tags = goal_tags(goal)

    filtered = {}
    for meal_type, meals in meal_library.items():
        kept = []
        for meal in meals:
            text = ingredients_text(meal)

            if any(item in text for item in avoid):
                continue

            if tags and not any(tag in text for tag in tags):
                continue

            kept.append(meal)
        filtered[meal_type] = kept

    return filtered

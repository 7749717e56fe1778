import sys

from fittrack.core import firebase
from fittrack.core.config import settings
from fittrack.core.store import FirestoreDocumentStore
from fittrack.services.meal_plan_pipeline import get_day_schedule

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def inspect_plan(plan_id: str):
    firebase.init_firebase()
    store = FirestoreDocumentStore(firebase.db)

    plan = store.get_document(settings.NUTRITION_PLANS_COLLECTION, plan_id)
    print(f"--- Plan {plan_id} ---")
    print(f"Goal: {plan.get('goal')} | Meals/day: {plan.get('mealsPerDay')} | Avoid: {plan.get('foodsToAvoid') or '-'}")

    for day, name in enumerate(DAY_NAMES):
        try:
            data = get_day_schedule(store, plan_id, day)
        except LookupError:
            print(f"\n{name}: NO schedule found")
            continue

        print(f"\n{name} ({data['schedule'].get('date')})")
        for meal in data["meals"]:
            eaten = "x" if meal.get("isEaten") else " "
            print(f"  [{eaten}] {meal.get('type')}: {meal.get('title')} ({meal.get('calories')} kcal)")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/inspect_meal_schedules.py <plan_id>")
        sys.exit(1)
    inspect_plan(sys.argv[1])

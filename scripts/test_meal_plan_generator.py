import unittest
from datetime import date

from fake_store import FakeDocumentStore
from fittrack.core.config import settings
from fittrack.services.meal_plan_generator import (
    MAX_SELECTION_ITERATIONS,
    generate_meal_plan,
    get_date_for_weekday,
    select_balanced_meals,
)

USER = {"uid": "user-1"}
# Wednesday
TODAY = date(2025, 6, 11)


def meal(title, instructions="Cook it.", **extra):
    return {
        "title": title,
        "ingredients": ["chicken", "rice"],
        "calories": 500,
        "instructions": instructions,
        **extra,
    }


class TestWeekdayDates(unittest.TestCase):
    def test_current_week_starts_on_sunday(self):
        dates = [get_date_for_weekday(d, TODAY) for d in range(7)]
        self.assertEqual(dates, [
            "2025-06-08", "2025-06-09", "2025-06-10", "2025-06-11",
            "2025-06-12", "2025-06-13", "2025-06-14",
        ])

    def test_sunday_today(self):
        sunday = date(2025, 6, 8)
        self.assertEqual(get_date_for_weekday(0, sunday), "2025-06-08")
        self.assertEqual(get_date_for_weekday(6, sunday), "2025-06-14")

    def test_saturday_today_goes_back(self):
        saturday = date(2025, 6, 14)
        self.assertEqual(get_date_for_weekday(0, saturday), "2025-06-08")


class TestSelectBalancedMeals(unittest.TestCase):
    def test_round_robin_with_exhausted_type(self):
        pools = {
            "breakfast": [meal("A"), meal("B")],
            "lunch": [meal("C")],
            "dinner": [meal("D")],
        }
        picked = select_balanced_meals(pools, 3)
        self.assertEqual([(m["title"], m["type"]) for m in picked],
                         [("A", "breakfast"), ("C", "lunch"), ("D", "dinner")])

        # B is the only thing left; lunch and dinner are skipped
        picked = select_balanced_meals(pools, 2)
        self.assertEqual([m["title"] for m in picked], ["B"])

    def test_second_round_reuses_first_type(self):
        pools = {"breakfast": [meal("A"), meal("B")], "lunch": [meal("C")], "dinner": [meal("D")]}
        picked = select_balanced_meals(pools, 4)
        self.assertEqual([m["title"] for m in picked], ["A", "C", "D", "B"])

    def test_pops_from_pools(self):
        pools = {"breakfast": [meal("A"), meal("B")]}
        select_balanced_meals(pools, 1)
        self.assertEqual([m["title"] for m in pools["breakfast"]], ["B"])

    def test_safety_bound_stops_loop(self):
        pools = {"breakfast": [], "lunch": [meal("C")]}
        picked = select_balanced_meals(pools, 5)
        self.assertEqual([m["title"] for m in picked], ["C"])

    def test_safety_bound_caps_large_requests(self):
        pools = {"breakfast": [meal(f"M{i}") for i in range(50)]}
        picked = select_balanced_meals(pools, 40)
        self.assertEqual(len(picked), MAX_SELECTION_ITERATIONS + 1)

    def test_empty_catalog(self):
        self.assertEqual(select_balanced_meals({}, 3), [])
        self.assertEqual(select_balanced_meals({"lunch": []}, 3), [])


class TestGenerateMealPlan(unittest.TestCase):
    def setUp(self):
        self.store = FakeDocumentStore()
        self.plan = {"id": "plan-1", "mealsPerDay": 3}
        self.catalog = {
            "breakfast": [meal("A", instructions=["Step 1", "Step 2"], image="https://img/a.jpg"), meal("B")],
            "lunch": [meal("C")],
            "dinner": [meal("D")],
        }

    def test_writes_week_of_schedules_and_meals(self):
        generate_meal_plan(self.store, self.plan, self.catalog, USER, today=TODAY)

        schedules = self.store.created(settings.MEAL_SCHEDULES_COLLECTION)
        meals = self.store.created(settings.MEALS_COLLECTION)
        self.assertEqual(len(schedules), 7)
        self.assertEqual(len(meals), 7 * 3)

        self.assertEqual([s["dayOfWeek"] for s in schedules], list(range(7)))
        self.assertEqual(schedules[0], {
            "nutritionPlanId": "plan-1",
            "userId": "user-1",
            "dayOfWeek": 0,
            "date": "2025-06-08",
        })

    def test_every_day_gets_the_same_selection(self):
        generate_meal_plan(self.store, self.plan, self.catalog, USER, today=TODAY)
        titles = [m["title"] for m in self.store.created(settings.MEALS_COLLECTION)]
        self.assertEqual(titles, ["A", "C", "D"] * 7)
        # catalog itself is untouched
        self.assertEqual(len(self.catalog["breakfast"]), 2)

    def test_writes_are_ordered_schedule_then_meals(self):
        generate_meal_plan(self.store, self.plan, self.catalog, USER, today=TODAY)
        collections = [c for c, _ in self.store.writes[:5]]
        self.assertEqual(collections, [
            settings.MEAL_SCHEDULES_COLLECTION,
            settings.MEALS_COLLECTION,
            settings.MEALS_COLLECTION,
            settings.MEALS_COLLECTION,
            settings.MEAL_SCHEDULES_COLLECTION,
        ])

    def test_meal_document_shape(self):
        generate_meal_plan(self.store, self.plan, self.catalog, USER, today=TODAY)
        first_schedule_id = self.store.list_documents(
            settings.MEAL_SCHEDULES_COLLECTION, [("dayOfWeek", "==", 0)]
        )[0]["id"]

        first = self.store.created(settings.MEALS_COLLECTION)[0]
        self.assertEqual(first, {
            "mealScheduleId": first_schedule_id,
            "userId": "user-1",
            "title": "A",
            "type": "breakfast",
            "calories": 500,
            "ingredients": "chicken, rice",
            "instructions": "Step 1\nStep 2",
            "image": "https://img/a.jpg",
            "isEaten": False,
            "time": None,
        })
        second = self.store.created(settings.MEALS_COLLECTION)[1]
        self.assertEqual(second["instructions"], "Cook it.")
        self.assertIsNone(second["image"])

    def test_short_catalog_writes_fewer_meals(self):
        catalog = {"breakfast": [meal("A")], "lunch": []}
        generate_meal_plan(self.store, {"id": "plan-2", "mealsPerDay": 3}, catalog, USER, today=TODAY)
        self.assertEqual(len(self.store.created(settings.MEAL_SCHEDULES_COLLECTION)), 7)
        self.assertEqual(len(self.store.created(settings.MEALS_COLLECTION)), 7)

    def test_store_failure_propagates_without_rollback(self):
        store = FakeDocumentStore(fail_on=(settings.MEAL_SCHEDULES_COLLECTION, 3))
        with self.assertRaises(ConnectionError):
            generate_meal_plan(store, self.plan, self.catalog, USER, today=TODAY)

        self.assertEqual(len(store.created(settings.MEAL_SCHEDULES_COLLECTION)), 2)
        self.assertEqual(len(store.created(settings.MEALS_COLLECTION)), 6)
        self.assertEqual(store.deleted, [])


if __name__ == '__main__':
    unittest.main()

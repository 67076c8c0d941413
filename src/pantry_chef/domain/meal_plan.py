"""Weekly meal plan grid helpers. Weeks start on Monday."""

from datetime import date, timedelta

from pantry_chef.models import MEAL_TYPES, MealPlan

DAYS_PER_WEEK = 7
SLOTS_PER_WEEK = DAYS_PER_WEEK * len(MEAL_TYPES)


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def week_days(day: date) -> list[date]:
    start = week_start(day)
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def meal_for_day(meal_plans: list[MealPlan], day: date, meal_type: str) -> MealPlan | None:
    """First entry for the slot. Duplicates are possible; later ones are hidden."""
    for meal in meal_plans:
        if meal.date == day and meal.meal_type == meal_type:
            return meal
    return None


def meals_in_week(meal_plans: list[MealPlan], day: date) -> list[MealPlan]:
    start = week_start(day)
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    return [meal for meal in meal_plans if start <= meal.date <= end]


def week_coverage(meal_plans: list[MealPlan], day: date) -> int:
    """Planned entries as a rounded percentage of the week's 21 slots (may exceed 100)."""
    return round(len(meals_in_week(meal_plans, day)) / SLOTS_PER_WEEK * 100)

"""Dashboard summaries over the cached collections."""

from dataclasses import dataclass
from datetime import date

from pantry_chef.domain.inventory import EXPIRING_DAYS, days_until_expiry
from pantry_chef.models import Ingredient, MealPlan, Recipe

RECENT_RECIPES = 3


@dataclass
class DashboardStats:
    total_ingredients: int
    total_recipes: int
    expiring_soon: int
    meals_today: int


def expiring_soon(items: list[Ingredient], today: date | None = None) -> list[Ingredient]:
    """Items expiring within the next three days, today included. Expired items are excluded."""
    result = []
    for item in items:
        days = days_until_expiry(item.expiry_date, today)
        if days is not None and 0 <= days <= EXPIRING_DAYS:
            result.append(item)
    return result


def todays_meals(meal_plans: list[MealPlan], today: date | None = None) -> list[MealPlan]:
    today = today or date.today()
    return [meal for meal in meal_plans if meal.date == today]


def recent_recipes(recipes: list[Recipe]) -> list[Recipe]:
    """Recipes are cached newest first, so this is the head of the list."""
    return recipes[:RECENT_RECIPES]


def dashboard_stats(
    ingredients: list[Ingredient],
    recipes: list[Recipe],
    meal_plans: list[MealPlan],
    today: date | None = None,
) -> DashboardStats:
    return DashboardStats(
        total_ingredients=len(ingredients),
        total_recipes=len(recipes),
        expiring_soon=len(expiring_soon(ingredients, today)),
        meals_today=len(todays_meals(meal_plans, today)),
    )

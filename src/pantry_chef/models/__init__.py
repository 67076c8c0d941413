"""
Pantry Chef - Data Models.

Pydantic models for all database entities.
"""

from pantry_chef.models.entities import (
    DIFFICULTIES,
    INGREDIENT_CATEGORIES,
    MEAL_TYPES,
    ActiveView,
    ChatMessage,
    ChatMessageCreate,
    Ingredient,
    IngredientCreate,
    MealPlan,
    MealPlanCreate,
    MessageType,
    Recipe,
    RecipeCreate,
    User,
)

__all__ = [
    "User",
    "Ingredient",
    "IngredientCreate",
    "Recipe",
    "RecipeCreate",
    "MealPlan",
    "MealPlanCreate",
    "ChatMessage",
    "ChatMessageCreate",
    "MessageType",
    "ActiveView",
    "INGREDIENT_CATEGORIES",
    "MEAL_TYPES",
    "DIFFICULTIES",
]

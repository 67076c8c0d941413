"""
Pantry Chef - Database Entity Models.

These models map to the Supabase tables `ingredients`, `recipes`,
`meal_plans` and `chat_history`. Every row is owned by one user through
its `user_id` column.

The *Create models are insert payloads: the row minus the fields the
database assigns (id, user_id, timestamps).
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

MessageType = Literal["user", "ai", "system", "recipe"]
ActiveView = Literal["dashboard", "inventory", "recipes", "meal-plan", "ai-chat"]

INGREDIENT_CATEGORIES = [
    "vegetables",
    "fruits",
    "meat",
    "seafood",
    "dairy",
    "grains",
    "spices",
    "herbs",
    "pantry",
    "frozen",
    "beverages",
    "other",
]
MEAL_TYPES = ["breakfast", "lunch", "dinner"]
DIFFICULTIES = ["easy", "medium", "hard"]


class User(BaseModel):
    """The signed-in user."""

    id: str
    email: str = ""


# =============================================================================
# Inventory
# =============================================================================


class IngredientCreate(BaseModel):
    """New pantry item as entered by the user."""

    name: str
    quantity: float
    unit: str = "pieces"
    category: str = "other"
    expiry_date: date | None = None


class Ingredient(IngredientCreate):
    """Item in the user's kitchen inventory."""

    id: str
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Recipes
# =============================================================================


class RecipeCreate(BaseModel):
    """New recipe, typed in or promoted from a generated one."""

    title: str
    description: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time: int = 0
    cook_time: int = 0
    servings: int = 1
    difficulty: str = "medium"  # "easy", "medium", "hard"
    cuisine: str = ""
    tags: list[str] = Field(default_factory=list)


class Recipe(RecipeCreate):
    """A saved recipe."""

    id: str
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Meal Plans
# =============================================================================


class MealPlanCreate(BaseModel):
    """New meal plan slot."""

    date: date
    meal_type: str  # "breakfast", "lunch", "dinner"
    recipe_id: str | None = None
    notes: str | None = None


class MealPlan(MealPlanCreate):
    """A planned meal. (date, meal_type) is not unique."""

    id: str
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Chat
# =============================================================================


class ChatMessageCreate(BaseModel):
    """New chat turn. The store fills in user and session."""

    message_type: MessageType
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class ChatMessage(ChatMessageCreate):
    """One persisted turn of a conversation."""

    id: str
    user_id: str
    session_id: str
    tokens_used: int | None = 0
    response_time_ms: int | None = 0
    created_at: datetime | None = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_metadata(cls, value: Any) -> Any:
        # Rows written by older clients may carry a null metadata column
        return value if value is not None else {}

    @property
    def display_type(self) -> MessageType:
        """Messages that embed a recipe render as recipe cards."""
        if self.metadata.get("recipe"):
            return "recipe"
        return self.message_type

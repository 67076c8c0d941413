"""Data models for assistant-generated recipes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pantry_chef.models import RecipeCreate

DEFAULT_TITLE = "Generated Recipe"
DEFAULT_DESCRIPTION = "A delicious recipe created just for you"
DEFAULT_PREP_TIME = 15
DEFAULT_COOK_TIME = 30
DEFAULT_SERVINGS = 4
DEFAULT_DIFFICULTY = "medium"
DEFAULT_CUISINE = "fusion"
DEFAULT_TAGS = ("ai-generated", "creative")


class ParseMethod(str, Enum):
    """How the recipe was recovered from the model reply."""

    JSON = "json"
    HEURISTIC = "heuristic"


@dataclass
class GeneratedRecipe:
    """
    Recipe produced by the assistant, not yet saved.

    Field names follow Python style; `to_dict()` emits the camelCase shape
    the model is asked to reply with, which is also how the recipe is
    embedded in chat message metadata.
    """

    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    prep_time: int = DEFAULT_PREP_TIME
    cook_time: int = DEFAULT_COOK_TIME
    servings: int = DEFAULT_SERVINGS
    difficulty: str = DEFAULT_DIFFICULTY
    cuisine: str = DEFAULT_CUISINE
    tags: list[str] = field(default_factory=lambda: list(DEFAULT_TAGS))
    tips: list[str] = field(default_factory=list)
    story: str = ""

    @property
    def total_time(self) -> int:
        return self.prep_time + self.cook_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "difficulty": self.difficulty,
            "cuisine": self.cuisine,
            "tags": list(self.tags),
            "tips": list(self.tips),
            "story": self.story,
        }

    def to_recipe_create(self) -> RecipeCreate:
        """Insert payload used when the user saves this recipe. Tips and story are not stored."""
        return RecipeCreate(
            title=self.title,
            description=self.description,
            ingredients=list(self.ingredients),
            instructions=list(self.instructions),
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            servings=self.servings,
            difficulty=self.difficulty,
            cuisine=self.cuisine,
            tags=list(self.tags),
        )


@dataclass
class InterpretedRecipe:
    """Result of interpreting a model reply."""

    recipe: GeneratedRecipe
    method: ParseMethod

    @property
    def is_confident(self) -> bool:
        """False when the recipe was guessed line by line."""
        return self.method is ParseMethod.JSON

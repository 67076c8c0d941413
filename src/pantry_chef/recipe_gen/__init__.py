"""Recipe generation: reply interpretation and generated recipe models."""

from .interpreter import interpret_recipe_response, parse_string_list, recipe_from_json
from .models import GeneratedRecipe, InterpretedRecipe, ParseMethod

__all__ = [
    "GeneratedRecipe",
    "InterpretedRecipe",
    "ParseMethod",
    "interpret_recipe_response",
    "parse_string_list",
    "recipe_from_json",
]

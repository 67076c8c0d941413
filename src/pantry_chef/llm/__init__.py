"""
Pantry Chef - Gemini access and prompt building.
"""

from pantry_chef.llm.client import GeminiClient, get_client
from pantry_chef.llm.prompts import RecipeRequest, build_recipe_prompt, extract_preferences

__all__ = [
    "GeminiClient",
    "get_client",
    "RecipeRequest",
    "build_recipe_prompt",
    "extract_preferences",
]

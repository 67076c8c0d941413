"""
Pantry Chef - Chef Assistant.

High-level AI operations. Each one is prompt → Gemini → interpretation.
Gemini errors propagate as AssistantError subclasses; reply parsing never
fails (see recipe_gen.interpreter).
"""

import logging

from pantry_chef.errors import AssistantError
from pantry_chef.llm.client import GeminiClient
from pantry_chef.llm.prompts import (
    CONNECTION_TEST_PROMPT,
    RecipeRequest,
    build_question_prompt,
    build_recipe_prompt,
    build_substitutions_prompt,
    build_tips_prompt,
)
from pantry_chef.recipe_gen import InterpretedRecipe, interpret_recipe_response, parse_string_list

logger = logging.getLogger(__name__)


class ChefAssistant:
    """Recipe generation and cooking Q&A on top of a GeminiClient."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def generate_recipe(self, request: RecipeRequest) -> InterpretedRecipe:
        prompt = build_recipe_prompt(request)
        reply = await self.client.generate_text(prompt, kind="recipe")
        result = interpret_recipe_response(reply)
        if not result.is_confident:
            logger.warning(f"Recipe reply was not valid JSON, used heuristics: {result.recipe.title}")
        return result

    async def get_cooking_tips(self, recipe: str) -> list[str]:
        reply = await self.client.generate_text(build_tips_prompt(recipe), kind="tips")
        return parse_string_list(reply, limit=5)

    async def suggest_substitutions(self, ingredient: str) -> list[str]:
        reply = await self.client.generate_text(
            build_substitutions_prompt(ingredient), kind="substitutions"
        )
        return parse_string_list(reply, limit=5)

    async def answer_cooking_question(self, question: str, context: str | None = None) -> str:
        return await self.client.generate_text(
            build_question_prompt(question, context), kind="question"
        )

    async def test_connection(self) -> bool:
        """True when Gemini answers a trivial prompt with some text."""
        try:
            reply = await self.client.generate_text(CONNECTION_TEST_PROMPT, kind="ping")
        except AssistantError as e:
            logger.error(f"Gemini connection test failed: {e}")
            return False
        return bool(reply.strip())

"""
Pantry Chef - Chat Service.

Drives one conversation with the chef assistant: every turn is saved to
chat history through the store, recipe requests go to generation, anything
else is answered as a cooking question.

Overlapping send_message() calls are not serialized and nothing is
cancelled, so a slow generation can land after a newer reply.
"""

import logging
from typing import Any

from pantry_chef.errors import AssistantError, StoreError
from pantry_chef.llm.prompt_logger import reset_session
from pantry_chef.llm.prompts import RecipeRequest, extract_preferences
from pantry_chef.models import ChatMessage, ChatMessageCreate, MessageType, Recipe
from pantry_chef.recipe_gen import GeneratedRecipe, recipe_from_json
from pantry_chef.services.assistant import ChefAssistant
from pantry_chef.store import KitchenStore

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hello! I'm your AI Chef assistant. I can help you create amazing recipes using the "
    "ingredients you have, answer cooking questions, and provide culinary tips. "
    "What would you like to cook today?"
)
RECIPE_CREATED_MESSAGE = "I've created a delicious recipe for you using your ingredients!"
RECIPE_FAILED_MESSAGE = (
    "I'm sorry, I couldn't generate a recipe right now. "
    "Please try again with different ingredients or preferences."
)

RECIPE_REQUEST_KEYWORDS = ("recipe", "cook", "make")
MAX_PANTRY_INGREDIENTS = 8


def is_recipe_request(message: str, selected_ingredients: list[str] | None = None) -> bool:
    """A message asks for a recipe if it says so or ingredients were picked."""
    if selected_ingredients:
        return True
    lowered = message.lower()
    return any(keyword in lowered for keyword in RECIPE_REQUEST_KEYWORDS)


def recipe_from_message(message: ChatMessage) -> GeneratedRecipe | None:
    """The generated recipe embedded in a chat message, if any."""
    data = message.metadata.get("recipe")
    if not isinstance(data, dict):
        return None
    return recipe_from_json(data)


class ChatService:
    """Conversation flow between the user, the store and the assistant."""

    def __init__(self, store: KitchenStore, assistant: ChefAssistant):
        self.store = store
        self.assistant = assistant

    async def _add(
        self, message_type: MessageType, content: str, metadata: dict[str, Any] | None = None
    ) -> ChatMessage:
        return await self.store.add_chat_message(
            ChatMessageCreate(message_type=message_type, content=content, metadata=metadata or {})
        )

    async def open(self) -> None:
        """Load history; greet the user when there is none."""
        await self.store.fetch_chat_history()
        if self.store.chat_messages:
            return

        self.store.start_new_chat_session()
        try:
            await self._add("ai", WELCOME_MESSAGE, {"isWelcome": True})
        except StoreError as e:
            logger.error(f"Failed to add welcome message: {e}")

    async def send_message(
        self, message: str, selected_ingredients: list[str] | None = None
    ) -> ChatMessage | None:
        """
        Handle one user turn and return the assistant's saved reply.

        Assistant failures do not propagate: they become an apology message
        flagged with {"error": true}. Store failures and a missing user do.
        """
        message = message.strip()
        if not message:
            return None

        selected = list(selected_ingredients or [])
        self.store.set_generating_recipe(True)
        try:
            await self._add("user", message, {"selectedIngredients": selected})

            if is_recipe_request(message, selected) and (selected or self.store.ingredients):
                logger.info(f"Generating recipe with ingredients: {selected}")
                return await self._generate_recipe(message, selected)

            logger.info("Answering cooking question")
            answer = await self.assistant.answer_cooking_question(message)
            return await self._add("ai", answer)

        except AssistantError as e:
            logger.error(f"AI chat error: {e}")
            return await self._add(
                "ai",
                f"Sorry, I encountered an error: {e.user_message} "
                "Please try again or contact support if the problem persists.",
                {"error": True, "errorType": type(e).__name__},
            )
        finally:
            self.store.set_generating_recipe(False)

    async def _generate_recipe(self, message: str, selected: list[str]) -> ChatMessage:
        ingredients = selected or [
            item.name for item in self.store.ingredients[:MAX_PANTRY_INGREDIENTS]
        ]
        request = RecipeRequest(
            ingredients=ingredients,
            preferences=extract_preferences(message),
            mood=message,
        )

        try:
            result = await self.assistant.generate_recipe(request)
        except AssistantError as e:
            logger.error(f"Recipe generation failed: {e}")
            return await self._add("ai", RECIPE_FAILED_MESSAGE, {"error": True})

        return await self._add(
            "recipe",
            RECIPE_CREATED_MESSAGE,
            {"recipe": result.recipe.to_dict(), "confident": result.is_confident},
        )

    async def save_recipe(self, recipe: GeneratedRecipe) -> Recipe:
        """Promote a generated recipe to the user's collection."""
        return await self.store.add_recipe(recipe.to_recipe_create())

    def new_chat(self) -> str:
        """Start a new conversation and a fresh prompt log session."""
        reset_session()
        return self.store.start_new_chat_session()

    async def clear(self) -> None:
        """Wipe all history and start over in a fresh session."""
        await self.store.clear_chat_history()
        self.new_chat()

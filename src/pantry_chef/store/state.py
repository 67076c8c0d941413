"""
Pantry Chef - Application State Store.

KitchenStore is the single source of truth for the signed-in user, the
cached rows of the four user-scoped tables, and a little view state. It
mediates every read and write against the remote data store.

Cache contract per collection:
- fetch_*: replace the list with the user's server snapshot
- add_*: put the row the server returned into the list, no refetch
- update_* / delete_*: patch the list after the remote call succeeds

Reads are background operations: without a user they do nothing, and
remote failures are logged and leave the list as it was. Writes are user
actions: without a user they raise NotAuthenticatedError, and remote
failures raise StoreError.

The cache is never authoritative. Concurrent calls interleave only at
await points and the last response to land wins.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any, TypeVar
from uuid import uuid4

import httpx
from postgrest.exceptions import APIError
from pydantic import BaseModel, ValidationError

from pantry_chef.db.adapter import DatabaseAdapter
from pantry_chef.db.client import CHAT_HISTORY, INGREDIENTS, MEAL_PLANS, RECIPES
from pantry_chef.errors import NotAuthenticatedError, StoreError
from pantry_chef.models import (
    ActiveView,
    ChatMessage,
    ChatMessageCreate,
    Ingredient,
    IngredientCreate,
    MealPlan,
    MealPlanCreate,
    Recipe,
    RecipeCreate,
    User,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
Listener = Callable[["KitchenStore"], None]

# Failures that count as "the remote store said no"
REMOTE_ERRORS = (APIError, httpx.HTTPError)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_message(error: Exception) -> str:
    """Human-readable text from a PostgREST or transport error."""
    if isinstance(error, APIError) and error.message:
        return error.message
    return str(error)


def _jsonable(values: dict[str, Any]) -> dict[str, Any]:
    return {
        key: value.isoformat() if isinstance(value, (date, datetime)) else value
        for key, value in values.items()
    }


def new_session_id() -> str:
    return str(uuid4())


class KitchenStore:
    """
    Observable state container for one signed-in user.

    Construct with any DatabaseAdapter (the Supabase client in production).
    Listeners registered with subscribe() are called after every change.
    """

    def __init__(
        self,
        db: DatabaseAdapter,
        *,
        session_id_factory: Callable[[], str] = new_session_id,
    ):
        self.db = db
        self._new_session_id = session_id_factory
        self._listeners: list[Listener] = []

        # Auth
        self.user: User | None = None
        self.is_loading = False

        # Cached collections
        self.ingredients: list[Ingredient] = []
        self.recipes: list[Recipe] = []
        self.current_recipe: Recipe | None = None
        self.meal_plans: list[MealPlan] = []

        # Chat
        self.chat_messages: list[ChatMessage] = []
        self.current_session_id: str | None = None

        # View state
        self.active_view: ActiveView = "dashboard"
        self.is_generating_recipe = False

    # =========================================================================
    # Observation
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes: Any) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        for listener in list(self._listeners):
            listener(self)

    # =========================================================================
    # Simple setters
    # =========================================================================

    def set_user(self, user: User | None) -> None:
        """Switch the signed-in user. Cached rows of a previous user are dropped."""
        if user is None or (self.user is not None and self.user.id != user.id):
            self._set(
                user=user,
                ingredients=[],
                recipes=[],
                current_recipe=None,
                meal_plans=[],
                chat_messages=[],
                current_session_id=None,
            )
        else:
            self._set(user=user)

    def set_active_view(self, view: ActiveView) -> None:
        self._set(active_view=view)

    def set_loading(self, loading: bool) -> None:
        self._set(is_loading=loading)

    def set_generating_recipe(self, generating: bool) -> None:
        self._set(is_generating_recipe=generating)

    def set_current_recipe(self, recipe: Recipe | None) -> None:
        self._set(current_recipe=recipe)

    # =========================================================================
    # Remote access helpers
    # =========================================================================

    def _require_user(self, action: str) -> User:
        if self.user is None:
            logger.error(f"No user found when trying to {action}")
            raise NotAuthenticatedError(f"You must be logged in to {action}")
        return self.user

    async def _execute(self, query: Any) -> Any:
        # The Supabase client is synchronous; keep the event loop free
        return await asyncio.to_thread(query.execute)

    async def _fetch(
        self,
        table: str,
        model: type[M],
        *,
        order_by: str,
        desc: bool,
    ) -> list[M] | None:
        """Select the user's rows; None means "leave the cache alone"."""
        if self.user is None:
            logger.info(f"No user found when fetching {table}")
            return None

        logger.debug(f"Fetching {table} for user: {self.user.id}")
        query = (
            self.db.table(table)
            .select("*")
            .eq("user_id", self.user.id)
            .order(order_by, desc=desc)
        )
        try:
            response = await self._execute(query)
            return [model.model_validate(row) for row in response.data or []]
        except REMOTE_ERRORS as e:
            logger.error(f"Error fetching {table}: {_error_message(e)}")
        except ValidationError as e:
            logger.error(f"Malformed {table} row from server: {e}")
        return None

    async def _insert(self, table: str, payload: dict[str, Any], action: str) -> dict[str, Any]:
        logger.debug(f"Inserting into {table}: {payload}")
        try:
            response = await self._execute(self.db.table(table).insert(payload))
        except REMOTE_ERRORS as e:
            logger.error(f"Error trying to {action}: {_error_message(e)}")
            raise StoreError(f"Failed to {action}: {_error_message(e)}") from e

        if not response.data:
            raise StoreError(f"Failed to {action}: no row returned")
        return response.data[0]

    async def _delete_owned(self, table: str, row_id: str, action: str) -> None:
        user = self._require_user(action)
        query = self.db.table(table).delete().eq("id", row_id).eq("user_id", user.id)
        try:
            await self._execute(query)
        except REMOTE_ERRORS as e:
            logger.error(f"Error trying to {action}: {_error_message(e)}")
            raise StoreError(f"Failed to {action}: {_error_message(e)}") from e

    # =========================================================================
    # Ingredients
    # =========================================================================

    async def fetch_ingredients(self) -> None:
        """Newest first."""
        rows = await self._fetch(INGREDIENTS, Ingredient, order_by="created_at", desc=True)
        if rows is not None:
            logger.info(f"Fetched {len(rows)} ingredients")
            self._set(ingredients=rows)

    async def add_ingredient(self, ingredient: IngredientCreate) -> Ingredient:
        user = self._require_user("add ingredients")
        payload = {**ingredient.model_dump(mode="json"), "user_id": user.id}

        row = Ingredient.model_validate(await self._insert(INGREDIENTS, payload, "add ingredient"))
        logger.info(f"Ingredient added: {row.name}")
        self._set(ingredients=[row, *self.ingredients])
        return row

    async def update_ingredient(self, ingredient_id: str, updates: dict[str, Any]) -> Ingredient:
        user = self._require_user("update ingredients")
        payload = {**_jsonable(updates), "updated_at": _utc_now()}
        query = (
            self.db.table(INGREDIENTS)
            .update(payload)
            .eq("id", ingredient_id)
            .eq("user_id", user.id)  # Only the owner's row
        )
        try:
            response = await self._execute(query)
        except REMOTE_ERRORS as e:
            logger.error(f"Error updating ingredient: {_error_message(e)}")
            raise StoreError(f"Failed to update ingredient: {_error_message(e)}") from e

        if not response.data:
            raise StoreError(f"Failed to update ingredient: {ingredient_id} not found")

        row = Ingredient.model_validate(response.data[0])
        self._set(
            ingredients=[row if item.id == ingredient_id else item for item in self.ingredients]
        )
        return row

    async def delete_ingredient(self, ingredient_id: str) -> None:
        await self._delete_owned(INGREDIENTS, ingredient_id, "delete ingredients")
        self._set(ingredients=[item for item in self.ingredients if item.id != ingredient_id])

    # =========================================================================
    # Recipes
    # =========================================================================

    async def fetch_recipes(self) -> None:
        """Newest first."""
        rows = await self._fetch(RECIPES, Recipe, order_by="created_at", desc=True)
        if rows is not None:
            self._set(recipes=rows)

    async def add_recipe(self, recipe: RecipeCreate) -> Recipe:
        user = self._require_user("save recipes")
        payload = {**recipe.model_dump(mode="json"), "user_id": user.id}

        row = Recipe.model_validate(await self._insert(RECIPES, payload, "save recipe"))
        logger.info(f"Recipe saved: {row.title}")
        self._set(recipes=[row, *self.recipes])
        return row

    async def delete_recipe(self, recipe_id: str) -> None:
        await self._delete_owned(RECIPES, recipe_id, "delete recipes")
        current = self.current_recipe
        self._set(
            recipes=[item for item in self.recipes if item.id != recipe_id],
            current_recipe=None if current is not None and current.id == recipe_id else current,
        )

    # =========================================================================
    # Meal plans
    # =========================================================================

    async def fetch_meal_plans(self) -> None:
        """Earliest date first."""
        rows = await self._fetch(MEAL_PLANS, MealPlan, order_by="date", desc=False)
        if rows is not None:
            self._set(meal_plans=rows)

    async def add_meal_plan(self, meal_plan: MealPlanCreate) -> MealPlan:
        user = self._require_user("plan meals")
        payload = {**meal_plan.model_dump(mode="json"), "user_id": user.id}

        row = MealPlan.model_validate(await self._insert(MEAL_PLANS, payload, "add meal plan"))
        self._set(meal_plans=[*self.meal_plans, row])
        return row

    async def delete_meal_plan(self, meal_plan_id: str) -> None:
        await self._delete_owned(MEAL_PLANS, meal_plan_id, "delete meal plans")
        self._set(meal_plans=[item for item in self.meal_plans if item.id != meal_plan_id])

    # =========================================================================
    # Chat
    # =========================================================================

    async def fetch_chat_history(self) -> None:
        """Oldest first, all sessions."""
        rows = await self._fetch(CHAT_HISTORY, ChatMessage, order_by="created_at", desc=False)
        if rows is not None:
            logger.info(f"Fetched {len(rows)} chat messages")
            self._set(chat_messages=rows)

    async def add_chat_message(self, message: ChatMessageCreate) -> ChatMessage:
        """Persist one turn, opening a session first if none is active."""
        user = self._require_user("send messages")
        session_id = self.current_session_id or self._new_session_id()
        payload = {
            **message.model_dump(mode="json"),
            "user_id": user.id,
            "session_id": session_id,
        }

        row = ChatMessage.model_validate(await self._insert(CHAT_HISTORY, payload, "save message"))
        self._set(chat_messages=[*self.chat_messages, row], current_session_id=session_id)
        return row

    def start_new_chat_session(self) -> str:
        session_id = self._new_session_id()
        logger.info(f"Starting new chat session: {session_id}")
        self._set(current_session_id=session_id)
        return session_id

    async def clear_chat_history(self) -> None:
        """Delete every chat row of the user, then forget the local copy and session."""
        user = self._require_user("clear chat history")
        query = self.db.table(CHAT_HISTORY).delete().eq("user_id", user.id)
        try:
            await self._execute(query)
        except REMOTE_ERRORS as e:
            logger.error(f"Error clearing chat history: {_error_message(e)}")
            raise StoreError(f"Failed to clear chat history: {_error_message(e)}") from e

        self._set(chat_messages=[], current_session_id=None)
